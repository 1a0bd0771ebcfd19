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
# appscout/discovery/windows.py
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

from ..config.model import Settings
from ..models import ApplicationRecord, ScanIssue, SkipReason, sort_catalog

log = logging.getLogger(__name__)

_MB = 1024 * 1024


def _slashed(path: str) -> str:
    return path.replace("\\", "/")

def _is_under(path: str, parent: Path) -> bool:
    p = os.path.normcase(_slashed(os.path.abspath(path))).rstrip("/")
    d = os.path.normcase(_slashed(os.path.abspath(str(parent)))).rstrip("/")
    return bool(d) and (p == d or p.startswith(d + "/"))


class DirectoryScanner:
    """
    Walk Program Files style trees and keep the .exe files that look like
    user-facing programs.

    The walk uses an explicit stack, so depth is bounded by memory rather than
    the interpreter's recursion limit, and each canonical directory is entered
    at most once (symlink / junction loops).
    """

    def __init__(self, settings: Settings):
        self.s = settings
        self._ext = settings.exe_extension.lower()
        self._path_markers = tuple(f"/{seg.lower()}/" for seg in settings.excluded_path_segments)

    # -- filters ---------------------------------------------------------
    def excluded_dir(self, name: str) -> Optional[str]:
        for marker in self.s.excluded_dirs:
            if marker in name:
                return marker
        return None

    def check_file(self, path: str, size: int) -> Optional[ScanIssue]:
        """
        Apply size, name and path filters in that order. None means keep.
        """
        if size // _MB < self.s.min_exe_mb:
            return ScanIssue(path, SkipReason.TOO_SMALL, f"{size} bytes")
        name = os.path.basename(path).lower()
        for kw in self.s.excluded_name_keywords:
            if kw in name:
                return ScanIssue(path, SkipReason.NAME_KEYWORD, kw)
        lowered = _slashed(path).lower()
        for marker in self._path_markers:
            if marker in lowered:
                return ScanIssue(path, SkipReason.PATH_KEYWORD, marker.strip("/"))
        return None

    def make_record(self, path: str) -> ApplicationRecord:
        stem = os.path.splitext(os.path.basename(path))[0]
        return ApplicationRecord(
            display_name=stem,
            launch_path=path,
            is_system_app=_is_under(path, self.s.system_dir),
        )

    # -- walk ------------------------------------------------------------
    def scan(self, roots: Iterable[Path]) -> Tuple[List[ApplicationRecord], List[ScanIssue]]:
        records: List[ApplicationRecord] = []
        issues: List[ScanIssue] = []
        visited: Set[str] = set()
        stack: List[str] = [os.path.abspath(str(r)) for r in reversed(list(roots))]

        while stack:
            directory = stack.pop()
            marker = self.excluded_dir(os.path.basename(directory))
            if marker:
                issues.append(ScanIssue(directory, SkipReason.EXCLUDED_DIR, marker))
                continue
            real = os.path.realpath(directory)
            if real in visited:
                issues.append(ScanIssue(directory, SkipReason.SYMLINK_CYCLE, real))
                continue
            visited.add(real)
            try:
                with os.scandir(directory) as it:
                    entries = sorted(it, key=lambda e: e.name)
            except OSError as e:
                log.debug("Cannot list %s: %s", directory, e)
                issues.append(ScanIssue(directory, SkipReason.ACCESS_ERROR, str(e)))
                continue

            subdirs = []
            for entry in entries:
                try:
                    if entry.is_dir():
                        subdirs.append(entry.path)
                    elif entry.is_file() and entry.name.lower().endswith(self._ext):
                        path = os.path.abspath(entry.path)
                        issue = self.check_file(path, entry.stat().st_size)
                        if issue:
                            issues.append(issue)
                        else:
                            records.append(self.make_record(path))
                except OSError as e:
                    log.debug("Skipping %s: %s", entry.path, e)
                    issues.append(ScanIssue(entry.path, SkipReason.ACCESS_ERROR, str(e)))
            # depth-first, siblings in name order
            stack.extend(reversed(subdirs))
        return records, issues

    def system_utilities(self, known: Iterable[ApplicationRecord]) -> List[ApplicationRecord]:
        """
        Classic System32 tools that exist on disk and are not listed yet.
        """
        seen = {r.launch_path for r in known}
        out: List[ApplicationRecord] = []
        base = self.s.system32_dir
        for exe in self.s.system_utilities:
            p = base / exe
            if not os.path.isfile(p):
                continue
            path = os.path.abspath(str(p))
            if path in seen:
                continue
            seen.add(path)
            out.append(ApplicationRecord(
                display_name=os.path.splitext(exe)[0],
                launch_path=path,
                is_system_app=True,
            ))
        return out

    def build(self, roots: Optional[Iterable[Path]] = None) -> Tuple[List[ApplicationRecord], List[ScanIssue]]:
        roots = list(self.s.program_roots if roots is None else roots)
        present = [r for r in roots if os.path.isdir(r)]
        for r in roots:
            if r not in present:
                log.info("Scan root not found: %s", r)
        records, issues = self.scan(present)
        records.extend(self.system_utilities(records))
        return sort_catalog(records), issues
