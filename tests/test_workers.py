import time

from conftest import make_png
from PyQt5.QtCore import QThreadPool

from appscout.discovery.catalog import ApplicationCatalogBuilder
from appscout.icons.store import IconStore
from appscout.models import ApplicationRecord
from appscout.utils.osdetect import Platform
from appscout.workers import IconController, ScanController


def _drain(qapp, pool, done, timeout=5.0):
    assert pool.waitForDone(int(timeout * 1000))
    deadline = time.monotonic() + timeout
    while not done() and time.monotonic() < deadline:
        qapp.processEvents()
        time.sleep(0.01)
    qapp.processEvents()


def _builder(settings):
    usr = settings.desktop_dirs[0]
    usr.mkdir(parents=True)
    (usr / "foo.desktop").write_text("[Desktop Entry]\nType=Application\nName=Foo\nExec=foo\n")
    return ApplicationCatalogBuilder(settings, Platform.LINUX, validator=lambda c: True)


def test_scan_runs_in_background_and_reports(qapp, linux_settings):
    pool = QThreadPool()
    ctrl = ScanController(_builder(linux_settings), pool=pool)
    busy, reports = [], []
    ctrl.busy_changed.connect(busy.append)
    ctrl.catalog_ready.connect(reports.append)

    assert ctrl.start()
    assert not ctrl.start()
    _drain(qapp, pool, lambda: reports)

    assert busy == [True, False]
    assert len(reports) == 1
    assert [r.display_name for r in reports[0].records] == ["Foo"]
    assert ctrl.last_report is reports[0]
    assert not ctrl.busy
    assert ctrl.start()
    _drain(qapp, pool, lambda: not ctrl.busy)


def test_forced_restart_publishes_only_newest(qapp, linux_settings):
    pool = QThreadPool()
    ctrl = ScanController(_builder(linux_settings), pool=pool)
    reports = []
    ctrl.catalog_ready.connect(reports.append)

    assert ctrl.start()
    assert ctrl.start(force=True)
    _drain(qapp, pool, lambda: not ctrl.busy)
    _drain(qapp, pool, lambda: False, timeout=0.2)

    assert ctrl.generation == 2
    assert len(reports) == 1
    assert not ctrl.busy


def test_icon_request_is_async_then_cached(qapp, linux_settings):
    make_png(linux_settings.pixmaps_dir / "foo.png", 128)
    pool = QThreadPool()
    ctrl = IconController(IconStore(Platform.LINUX, linux_settings), pool=pool)
    ready = []
    ctrl.icon_ready.connect(lambda key, img: ready.append((key, img)))
    rec = ApplicationRecord("Foo", "foo", True, "foo")

    assert ctrl.request(rec) is None
    assert ctrl.request(rec) is None
    _drain(qapp, pool, lambda: ready)

    assert [key for key, _ in ready] == ["foo"]
    assert ready[0][1].width() == 64
    assert ctrl.request(rec) is not None


def test_missing_icon_emits_nothing(qapp, linux_settings):
    pool = QThreadPool()
    ctrl = IconController(IconStore(Platform.LINUX, linux_settings), pool=pool)
    ready = []
    ctrl.icon_ready.connect(lambda key, img: ready.append(key))

    assert ctrl.request(ApplicationRecord("Nope", "nope", True, "nope")) is None
    _drain(qapp, pool, lambda: False, timeout=0.2)

    assert ready == []
