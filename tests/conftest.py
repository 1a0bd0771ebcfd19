import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor, QGuiApplication, QImage

from appscout.config.model import Settings


@pytest.fixture(scope="session")
def qapp():
    app = QGuiApplication.instance() or QGuiApplication(["appscout-tests"])
    yield app


def make_exe(path, size_bytes):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.truncate(size_bytes)  # sparse, no real disk usage
    return path


def make_png(path, size, color=Qt.red):
    path.parent.mkdir(parents=True, exist_ok=True)
    img = QImage(size, size, QImage.Format_ARGB32)
    img.fill(QColor(color))
    assert img.save(str(path), "PNG")
    return path


@pytest.fixture
def win_settings(tmp_path):
    s = Settings()
    s.program_roots = [tmp_path / "ProgramFiles", tmp_path / "ProgramFilesX86"]
    s.system_dir = tmp_path / "WinDir"
    return s


@pytest.fixture
def linux_settings(tmp_path):
    s = Settings()
    s.desktop_dirs = [tmp_path / "usr-share", tmp_path / "usr-local", tmp_path / "home-local"]
    s.icon_roots = [tmp_path / "local-icons", tmp_path / "dot-icons", tmp_path / "icons", tmp_path / "pixmaps"]
    s.pixmaps_dir = tmp_path / "pixmaps"
    return s
