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
# appscout/icons/store.py
from __future__ import annotations
import logging
import os
import threading
from pathlib import Path
from typing import Dict, Optional

from PyQt5.QtGui import QImage

from ..config.model import Settings
from ..models import ApplicationRecord
from ..utils.osdetect import Platform
from .imaging import is_blank, scale_with_quality
from .lookup import IconLocator

log = logging.getLogger(__name__)


class IconStore:
    """
    Resolve and cache one icon image per application.

    Safe to call from several worker threads: the cache is guarded by a lock,
    two threads missing on the same key both decode and the last insert wins.
    Only successes are cached so a missing icon is retried on the next call.
    """

    def __init__(self, platform: Platform, settings: Settings,
                 locator: Optional[IconLocator] = None, shell_source=None):
        self.platform = platform
        self.settings = settings
        self.size = settings.icon_size
        self.locator = locator or IconLocator(settings)
        self._shell = shell_source
        self._cache: Dict[str, QImage] = {}
        self._lock = threading.Lock()

    # -- cache -----------------------------------------------------------
    def cache_key(self, record: ApplicationRecord) -> Optional[str]:
        if self.platform is Platform.WINDOWS:
            return record.launch_path
        if self.platform is Platform.LINUX:
            return record.icon_hint or os.path.basename(record.launch_path) or None
        return None

    def cached(self, key: str) -> Optional[QImage]:
        with self._lock:
            return self._cache.get(key)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    # -- lookup ----------------------------------------------------------
    def resolve_icon(self, record: ApplicationRecord) -> Optional[QImage]:
        key = self.cache_key(record)
        if not key:
            return None
        hit = self.cached(key)
        if hit is not None:
            return hit
        if self.platform is Platform.WINDOWS:
            img = self._resolve_windows(record.launch_path)
        else:
            img = self._resolve_linux(key)
        if img is None or img.isNull():
            return None
        with self._lock:
            self._cache[key] = img
        return img

    def _shell_source(self):
        if self._shell is None:
            from .shell import ShellIconSource
            self._shell = ShellIconSource()
        return self._shell

    def _resolve_windows(self, path: str) -> Optional[QImage]:
        if not os.path.isfile(path):
            return None
        shell = self._shell_source()
        img = shell.file_icon(path)
        if is_blank(img) or min(img.width(), img.height()) < self.settings.min_shell_icon_px:
            log.debug("Low resolution shell icon for %s, using generic icon", path)
            generic = shell.generic_icon()
            if not is_blank(generic):
                img = generic
        if is_blank(img):
            return None
        return scale_with_quality(img, self.size, self.size)

    def _resolve_linux(self, name: str) -> Optional[QImage]:
        if os.path.isabs(name):
            path = self.locator.find_path(name)
        else:
            path = self.locator.find(name)
        if path is None:
            log.debug("No icon found for %s", name)
            return None
        return self.load_file(path)

    def load_file(self, path: Path) -> Optional[QImage]:
        img = QImage(str(path))
        if img.isNull():
            log.debug("Cannot decode icon %s", path)
            return None
        return scale_with_quality(img, self.size, self.size)
