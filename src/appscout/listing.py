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
# appscout/listing.py
from __future__ import annotations
import os
import unicodedata
from enum import Enum
from typing import List, Sequence

from .models import ApplicationRecord

ACCENT_FOLDING = True  # "Cafe" finds "Café"


class AppFilter(Enum):
    ALL = "all"
    SYSTEM = "system"
    USER = "user"

class SortOrder(Enum):
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"


def _normalize_token(s: str) -> str:
    """
    Normalize a string for search: NFKC normalization, casefolding, and optional accent folding.
    """
    if not s: return ""
    s = unicodedata.normalize("NFKC", s).casefold()
    if ACCENT_FOLDING:
        s = "".join(ch for ch in unicodedata.normalize("NFKD", s) if not unicodedata.combining(ch))
    return s

def matches(record: ApplicationRecord, query: str) -> bool:
    tokens = _normalize_token(query or "").split()
    name = _normalize_token(record.display_name)
    return all(tok in name for tok in tokens)

def visible_records(records: Sequence[ApplicationRecord], kind: AppFilter = AppFilter.ALL,
                    query: str = "", order: SortOrder = SortOrder.NAME_ASC) -> List[ApplicationRecord]:
    """
    What the list shows: filter by origin, then search, then sort.
    """
    out = list(records)
    if kind is AppFilter.SYSTEM:
        out = [r for r in out if r.is_system_app]
    elif kind is AppFilter.USER:
        out = [r for r in out if not r.is_system_app]
    if (query or "").strip():
        out = [r for r in out if matches(r, query)]
    return sorted(out, key=lambda r: r.display_name, reverse=(order is SortOrder.NAME_DESC))


def manual_record(path: str, exe_extension: str = ".exe") -> ApplicationRecord:
    name = os.path.basename(path)
    if exe_extension and name.lower().endswith(exe_extension.lower()):
        name = name[: -len(exe_extension)]
    return ApplicationRecord(display_name=name, launch_path=os.path.abspath(path), is_system_app=False)

def add_manual(records: Sequence[ApplicationRecord], path: str, exe_extension: str = ".exe") -> List[ApplicationRecord]:
    """
    Append a user-picked program unless the same name/path pair is listed.
    """
    rec = manual_record(path, exe_extension)
    out = list(records)
    if not any(r.display_name == rec.display_name and r.launch_path == rec.launch_path for r in out):
        out.append(rec)
    return out
