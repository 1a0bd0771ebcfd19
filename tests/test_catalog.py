import os

from appscout.discovery.catalog import FALLBACK_APPS, ApplicationCatalogBuilder, scan_applications
from appscout.discovery.validator import ExecutableValidator
from appscout.models import ApplicationRecord, SkipReason
from appscout.utils.osdetect import Platform


def _entry(directory, filename, name, exec_line, icon=None, extra=""):
    directory.mkdir(parents=True, exist_ok=True)
    lines = ["[Desktop Entry]", "Type=Application", f"Name={name}", f"Exec={exec_line}"]
    if icon:
        lines.append(f"Icon={icon}")
    (directory / filename).write_text("\n".join(lines) + "\n" + extra)


def _always(_cmd):
    return True


def test_linux_catalog_sorted_with_icon_hints(linux_settings):
    usr = linux_settings.desktop_dirs[0]
    _entry(usr, "gimp.desktop", "GIMP", "gimp-2.10 %U", icon="gimp")
    _entry(usr, "ark.desktop", "Ark", "ark %U", icon="ark")

    records = ApplicationCatalogBuilder(linux_settings, Platform.LINUX, validator=_always).scan_applications()

    assert records == [
        ApplicationRecord("Ark", "ark", True, "ark"),
        ApplicationRecord("GIMP", "gimp-2.10", True, "gimp"),
    ]


def test_same_name_first_directory_wins(linux_settings):
    system, _local, user = linux_settings.desktop_dirs
    _entry(system, "editor.desktop", "Editor", "/usr/bin/editor-a")
    _entry(user, "editor.desktop", "Editor", "/home/me/bin/editor-b")

    report = ApplicationCatalogBuilder(linux_settings, Platform.LINUX, validator=_always).build()

    assert [r.launch_path for r in report.records] == ["/usr/bin/editor-a"]
    assert [i.reason for i in report.issues] == [SkipReason.DUPLICATE]
    assert report.issues[0].path.startswith(str(user))


def test_same_command_different_name_is_duplicate(linux_settings):
    system, local, _user = linux_settings.desktop_dirs
    _entry(system, "a.desktop", "Term", "xterm")
    _entry(local, "b.desktop", "XTerm", "xterm -ls")

    records = ApplicationCatalogBuilder(linux_settings, Platform.LINUX, validator=_always).scan_applications()

    assert [r.display_name for r in records] == ["Term"]


def test_unrunnable_and_broken_entries_are_skipped(linux_settings):
    usr = linux_settings.desktop_dirs[0]
    _entry(usr, "good.desktop", "Good", "good")
    _entry(usr, "ghost.desktop", "Ghost", "ghost")
    _entry(usr, "helper.desktop", "Helper", "good-helper", extra="NoDisplay=true\n")
    (usr / "link.desktop").write_text("[Desktop Entry]\nType=Link\nName=Site\nURL=https://example.org\n")
    (usr / "notes.txt").write_text("Type=Application\nName=Notes\nExec=notes\n")

    report = ApplicationCatalogBuilder(
        linux_settings, Platform.LINUX, validator=lambda c: c in ("good", "good-helper")
    ).build()

    assert [r.display_name for r in report.records] == ["Good"]
    reasons = {os.path.basename(i.path): i.reason for i in report.issues}
    assert reasons == {
        "ghost.desktop": SkipReason.NOT_EXECUTABLE,
        "helper.desktop": SkipReason.HIDDEN,
        "link.desktop": SkipReason.NOT_APPLICATION,
    }


def test_fallback_catalog_used_when_nothing_found(linux_settings):
    available = {"konsole", "dolphin", "kcalc"}

    records = ApplicationCatalogBuilder(
        linux_settings, Platform.LINUX, validator=lambda c: c in available
    ).scan_applications()

    assert records == [
        ApplicationRecord("Calculator", "kcalc", True, "accessories-calculator"),
        ApplicationRecord("Files", "dolphin", True, "system-file-manager"),
        ApplicationRecord("Terminal", "konsole", True, "utilities-terminal"),
    ]


def test_fallback_not_added_when_entries_exist(linux_settings):
    _entry(linux_settings.desktop_dirs[2], "mine.desktop", "Mine", "mine")

    records = ApplicationCatalogBuilder(linux_settings, Platform.LINUX, validator=_always).scan_applications()

    assert [r.display_name for r in records] == ["Mine"]


def test_fallback_with_nothing_runnable_is_empty(linux_settings):
    builder = ApplicationCatalogBuilder(linux_settings, Platform.LINUX, validator=lambda c: False)

    assert builder.scan_applications() == []
    assert len(FALLBACK_APPS) == 7


def test_real_validator_against_search_path(linux_settings, tmp_path):
    bindir = tmp_path / "bin"
    bindir.mkdir()
    tool = bindir / "realtool"
    tool.write_text("#!/bin/sh\n")
    os.chmod(tool, 0o755)
    _entry(linux_settings.desktop_dirs[0], "real.desktop", "Real", "env LANG=C realtool %f")
    _entry(linux_settings.desktop_dirs[0], "fake.desktop", "Fake", "faketool")

    builder = ApplicationCatalogBuilder(
        linux_settings, Platform.LINUX, validator=ExecutableValidator(search_path=str(bindir))
    )

    assert [r.launch_path for r in builder.scan_applications()] == ["realtool"]


def test_unsupported_platform_is_empty(linux_settings):
    assert scan_applications(linux_settings, Platform.UNSUPPORTED) == []


def test_failing_entry_only_removes_itself(linux_settings):
    def exploding(cmd):
        if cmd == "a":
            raise RuntimeError("boom")
        return True

    _entry(linux_settings.desktop_dirs[0], "a.desktop", "A", "a")
    _entry(linux_settings.desktop_dirs[0], "b.desktop", "B", "b")
    report = ApplicationCatalogBuilder(linux_settings, Platform.LINUX, validator=exploding).build()

    assert [r.display_name for r in report.records] == ["B"]
    assert [(os.path.basename(i.path), i.reason) for i in report.issues] == [
        ("a.desktop", SkipReason.UNREADABLE),
    ]


def test_failing_entries_still_get_fallback(linux_settings):
    def exploding(cmd):
        if cmd == "x":
            raise RuntimeError("boom")
        return cmd == "konsole"

    _entry(linux_settings.desktop_dirs[0], "x.desktop", "X", "x")
    records = ApplicationCatalogBuilder(linux_settings, Platform.LINUX, validator=exploding).scan_applications()

    assert records == [ApplicationRecord("Terminal", "konsole", True, "utilities-terminal")]


def test_builder_never_raises(linux_settings, monkeypatch):
    def exploding(_directory):
        raise RuntimeError("boom")

    monkeypatch.setattr("appscout.discovery.catalog._desktop_files", exploding)
    linux_settings.desktop_dirs[0].mkdir(parents=True)
    report = ApplicationCatalogBuilder(linux_settings, Platform.LINUX, validator=lambda c: True).build()

    assert report.records == []
