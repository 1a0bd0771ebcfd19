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
# appscout/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .utils.osdetect import Platform


@dataclass(frozen=True)
class ApplicationRecord:
    """One launch target found by a scan (or picked by the user)."""
    display_name: str
    launch_path: str            # absolute path (Windows) or command / path (Linux)
    is_system_app: bool = True
    icon_hint: Optional[str] = None  # theme icon name or absolute image path

    def __post_init__(self):
        if not self.launch_path:
            raise ValueError("launch_path must not be empty.")


class SkipReason(Enum):
    EXCLUDED_DIR = "excluded-dir"
    TOO_SMALL = "too-small"
    NAME_KEYWORD = "name-keyword"
    PATH_KEYWORD = "path-keyword"
    ACCESS_ERROR = "access-error"
    SYMLINK_CYCLE = "symlink-cycle"
    UNREADABLE = "unreadable"
    NOT_APPLICATION = "not-application"
    HIDDEN = "hidden"
    MISSING_FIELD = "missing-field"
    NOT_EXECUTABLE = "not-executable"
    DUPLICATE = "duplicate"


@dataclass(frozen=True)
class ScanIssue:
    """Why one candidate (file, entry or directory) contributed nothing."""
    path: str
    reason: SkipReason
    detail: str = ""


class EntryRejected(Exception):
    """Raised for a candidate that must not become a record."""

    def __init__(self, issue: ScanIssue):
        super().__init__(f"{issue.path}: {issue.reason.value} {issue.detail}".strip())
        self.issue = issue


@dataclass
class CatalogReport:
    platform: Platform
    records: List[ApplicationRecord] = field(default_factory=list)
    issues: List[ScanIssue] = field(default_factory=list)

    def skipped(self, reason: SkipReason) -> List[ScanIssue]:
        return [i for i in self.issues if i.reason is reason]


def sort_catalog(records: List[ApplicationRecord]) -> List[ApplicationRecord]:
    # ordinal: "Zed" sorts before "atom"
    return sorted(records, key=lambda r: r.display_name)
