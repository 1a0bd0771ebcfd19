# SPDX-License-Identifier: GPL-3.0-or-later
#
# AppScout - Application discovery and launcher
# Copyright (C) 2025 Tasteron
#
# This project is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.
#
# appscout/discovery/desktop_entry.py
from __future__ import annotations
import shlex
from pathlib import Path
from typing import Union

from ..models import ApplicationRecord, EntryRejected, ScanIssue, SkipReason

_EXEC_PREFIXES = ("env ", "gtk-launch ", "gio launch ")
_MAIN_GROUP = "[desktop entry]"
_TRUE_VALUES = ("true",)


def _remove_suffix(s: str, suffix: str) -> str:
    """
    Remove `suffix` from `s` if present.
    """
    return s[: -len(suffix)] if s.endswith(suffix) else s

def _first_token(s: str) -> str:
    try:
        parts = shlex.split(s, posix=True)
    except ValueError:
        parts = s.split()
    return parts[0] if parts else ""

def _strip_quotes(s: str) -> str:
    while len(s) >= 2 and s[0] == s[-1] and s[0] in ("'", '"'):
        s = s[1:-1]
    return s.strip("'\"")

def clean_exec_command(raw: str) -> str:
    """
    Reduce a raw Exec value to the program that would be started:

        "env FOO=bar /usr/bin/baz --flag"  ->  "/usr/bin/baz"
        "gtk-launch myapp.desktop"         ->  "myapp"

    Field codes (%u, %F, ...) disappear because only the first token is kept.
    """
    cmd = (raw or "").strip()
    for prefix in _EXEC_PREFIXES:
        if cmd.startswith(prefix):
            cmd = cmd[len(prefix):].lstrip()
    # leading VAR=value assignments
    while cmd and not cmd.startswith(("/", "~")):
        parts = cmd.split(None, 1)
        if "=" not in parts[0]:
            break
        cmd = parts[1] if len(parts) > 1 else ""
    token = _strip_quotes(_first_token(cmd))
    return _remove_suffix(token, ".desktop")


def _reject(source: str, reason: SkipReason, detail: str = "") -> EntryRejected:
    return EntryRejected(ScanIssue(source, reason, detail))

def parse_desktop_entry(text: str, source: str = "") -> ApplicationRecord:
    """
    Parse the text of a .desktop file.

    Keys before the first group header and keys in [Desktop Entry] are read;
    other groups ([Desktop Action ...]) carry their own Name/Exec and are skipped.
    Raises EntryRejected when the entry is not a visible application.
    """
    entry_type = None; name = None; exec_raw = None; icon = None
    suppressed = False
    in_main = True
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"): continue
        if line.startswith("["):
            in_main = (line.lower() == _MAIN_GROUP); continue
        if not in_main or "=" not in line: continue
        key, value = line.split("=", 1)
        key = key.strip(); value = value.strip()
        if key == "Type": entry_type = value
        elif key in ("NoDisplay", "Hidden"):
            if value.lower() in _TRUE_VALUES: suppressed = True
        elif key == "Name": name = value
        elif key == "Exec": exec_raw = value
        elif key == "Icon": icon = value

    if entry_type != "Application":
        raise _reject(source, SkipReason.NOT_APPLICATION, f"Type={entry_type or ''}")
    if suppressed:
        raise _reject(source, SkipReason.HIDDEN)
    if not name:
        raise _reject(source, SkipReason.MISSING_FIELD, "Name")
    if not exec_raw:
        raise _reject(source, SkipReason.MISSING_FIELD, "Exec")
    command = clean_exec_command(exec_raw)
    if not command:
        raise _reject(source, SkipReason.MISSING_FIELD, f"Exec={exec_raw}")
    return ApplicationRecord(
        display_name=name,
        launch_path=command,
        is_system_app=True,
        icon_hint=icon or None,
    )

def parse_desktop_file(path: Union[str, Path]) -> ApplicationRecord:
    """
    Read and parse one .desktop file. Unreadable files are rejected, not raised.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        raise _reject(str(p), SkipReason.UNREADABLE, str(e)) from e
    return parse_desktop_entry(text, source=str(p))
