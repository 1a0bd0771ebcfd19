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
# appscout/discovery/catalog.py
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ..config.model import Settings
from ..models import (
    ApplicationRecord, CatalogReport, EntryRejected, ScanIssue, SkipReason, sort_catalog,
)
from ..utils.osdetect import Platform
from .desktop_entry import parse_desktop_file
from .validator import ExecutableValidator
from .windows import DirectoryScanner

log = logging.getLogger(__name__)

# (display name, freedesktop icon name, candidate commands in preference order)
FALLBACK_APPS: Tuple[Tuple[str, str, Tuple[str, ...]], ...] = (
    ("Terminal", "utilities-terminal",
     ("x-terminal-emulator", "gnome-terminal", "konsole", "xfce4-terminal", "mate-terminal", "xterm")),
    ("Files", "system-file-manager",
     ("nautilus", "dolphin", "thunar", "nemo", "caja", "pcmanfm")),
    ("Web Browser", "web-browser",
     ("firefox", "chromium", "chromium-browser", "google-chrome", "epiphany")),
    ("Text Editor", "accessories-text-editor",
     ("gnome-text-editor", "gedit", "kate", "mousepad", "xed", "pluma")),
    ("Calculator", "accessories-calculator",
     ("gnome-calculator", "kcalc", "galculator", "mate-calc")),
    ("System Monitor", "utilities-system-monitor",
     ("gnome-system-monitor", "plasma-systemmonitor", "ksysguard", "xfce4-taskmanager")),
    ("Settings", "preferences-system",
     ("gnome-control-center", "systemsettings", "xfce4-settings-manager", "cinnamon-settings")),
)


def _desktop_files(directory: Path) -> List[str]:
    with os.scandir(directory) as it:
        return sorted(e.path for e in it if e.name.endswith(".desktop") and e.is_file())


class ApplicationCatalogBuilder:
    """
    Produce the catalog for one platform. Holds no state between builds;
    every call walks the filesystem again.
    """

    def __init__(self, settings: Settings, platform: Platform,
                 validator: Optional[Callable[[str], bool]] = None):
        self.settings = settings
        self.platform = platform
        self.validator = validator or ExecutableValidator(trusted=settings.trusted_commands)

    # -- public ----------------------------------------------------------
    def build(self) -> CatalogReport:
        report = CatalogReport(platform=self.platform)
        try:
            if self.platform is Platform.WINDOWS:
                self._build_windows(report)
            elif self.platform is Platform.LINUX:
                self._build_linux(report)
            else:
                log.info("Unsupported platform, nothing to scan.")
        except Exception:
            # a scan never fails as a whole; keep whatever was collected
            log.exception("Scan aborted unexpectedly")
        report.records = sort_catalog(report.records)
        log.info("Scan finished: %d apps, %d skipped", len(report.records), len(report.issues))
        return report

    def scan_applications(self) -> List[ApplicationRecord]:
        return self.build().records

    # -- windows ---------------------------------------------------------
    def _build_windows(self, report: CatalogReport) -> None:
        roots = self.settings.program_roots
        if not any(os.path.isdir(r) for r in roots):
            log.warning("None of the scan roots exist: %s", ", ".join(map(str, roots)))
        records, issues = DirectoryScanner(self.settings).build(roots)
        report.records.extend(records)
        report.issues.extend(issues)

    # -- linux -----------------------------------------------------------
    def _build_linux(self, report: CatalogReport) -> None:
        names, paths = set(), set()
        dirs = [d for d in self.settings.desktop_dirs if os.path.isdir(d)]
        if not dirs:
            log.warning("No application directories found: %s",
                        ", ".join(map(str, self.settings.desktop_dirs)))
        for directory in dirs:
            try:
                files = _desktop_files(directory)
            except OSError as e:
                log.debug("Cannot list %s: %s", directory, e)
                report.issues.append(ScanIssue(str(directory), SkipReason.ACCESS_ERROR, str(e)))
                continue
            for path in files:
                try:
                    rec = self._accept(path, names, paths)
                except EntryRejected as rej:
                    log.debug("Skipped %s", rej)
                    report.issues.append(rej.issue)
                    continue
                except Exception as e:
                    # one broken entry only removes itself
                    log.debug("Broken entry %s: %s", path, e, exc_info=True)
                    report.issues.append(ScanIssue(path, SkipReason.UNREADABLE, str(e)))
                    continue
                names.add(rec.display_name); paths.add(rec.launch_path)
                report.records.append(rec)

        if not report.records:
            log.info("No desktop entries usable, adding fallback apps.")
            report.records.extend(self.fallback_catalog())

    def _accept(self, path: str, names: set, paths: set) -> ApplicationRecord:
        rec = parse_desktop_file(path)
        if not self.validator(rec.launch_path):
            raise EntryRejected(ScanIssue(path, SkipReason.NOT_EXECUTABLE, rec.launch_path))
        if rec.display_name in names or rec.launch_path in paths:
            raise EntryRejected(ScanIssue(path, SkipReason.DUPLICATE, rec.display_name))
        return rec

    def fallback_catalog(self) -> List[ApplicationRecord]:
        out: List[ApplicationRecord] = []
        for name, icon, candidates in FALLBACK_APPS:
            cmd = next((c for c in candidates if self.validator(c)), None)
            if cmd:
                out.append(ApplicationRecord(name, cmd, is_system_app=True, icon_hint=icon))
        return out


def scan_applications(settings: Settings, platform: Platform) -> List[ApplicationRecord]:
    return ApplicationCatalogBuilder(settings, platform).scan_applications()
