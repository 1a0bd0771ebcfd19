import os

from appscout.actions import containing_folder
from appscout.models import ApplicationRecord


def test_folder_of_absolute_program(tmp_path):
    exe = tmp_path / "App" / "app.exe"
    exe.parent.mkdir()
    exe.write_bytes(b"")

    assert containing_folder(ApplicationRecord("App", str(exe))) == str(tmp_path / "App")


def test_folder_of_bare_command_found_on_path(tmp_path, monkeypatch):
    tool = tmp_path / "bin" / "mytool"
    tool.parent.mkdir()
    tool.write_text("#!/bin/sh\n")
    os.chmod(tool, 0o755)
    monkeypatch.setenv("PATH", str(tool.parent))

    assert containing_folder(ApplicationRecord("My", "mytool")) == str(tool.parent)


def test_no_folder_for_unknown_command(monkeypatch, tmp_path):
    monkeypatch.setenv("PATH", str(tmp_path))

    assert containing_folder(ApplicationRecord("Gone", "no-such-tool")) is None
