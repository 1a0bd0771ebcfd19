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
# appscout/workers.py
from __future__ import annotations
import logging
from typing import Optional

from PyQt5.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal
from PyQt5.QtGui import QImage

from .discovery.catalog import ApplicationCatalogBuilder
from .icons.store import IconStore
from .models import ApplicationRecord, CatalogReport

log = logging.getLogger(__name__)


class ScanSignals(QObject):
    """
    Signals for a background scan.
    """
    finished = pyqtSignal(int, object)  # generation, CatalogReport

class ScanTask(QRunnable):
    """
    Build the catalog in the thread pool.
    """
    def __init__(self, builder: ApplicationCatalogBuilder, generation: int):
        super().__init__()
        self.builder = builder
        self.generation = generation
        self.s = ScanSignals()

    def run(self):
        report = self.builder.build()
        self.s.finished.emit(self.generation, report)


class IconSignals(QObject):
    finished = pyqtSignal(str, QImage)  # cache key, image (null when not found)

class IconTask(QRunnable):
    """
    Resolve one icon in the thread pool.
    """
    def __init__(self, store: IconStore, record: ApplicationRecord, key: str):
        super().__init__()
        self.store = store
        self.record = record
        self.key = key
        self.s = IconSignals()

    def run(self):
        img = self.store.resolve_icon(self.record)
        self.s.finished.emit(self.key, img if img is not None else QImage())


class ScanController(QObject):
    """
    Runs at most one scan at a time and publishes the newest result.

    start() refuses while a scan is outstanding unless forced; the busy flag
    drives the scan button. Running scans are never interrupted, a result
    whose generation is older than the newest started scan is dropped.
    """
    busy_changed = pyqtSignal(bool)
    catalog_ready = pyqtSignal(object)  # CatalogReport

    def __init__(self, builder: ApplicationCatalogBuilder, pool: Optional[QThreadPool] = None, parent=None):
        super().__init__(parent)
        self.builder = builder
        self.pool = pool or QThreadPool.globalInstance()
        self.generation = 0
        self.busy = False
        self.last_report: Optional[CatalogReport] = None
        self._tasks = {}

    def start(self, force: bool = False) -> bool:
        if self.busy and not force:
            return False
        self.generation += 1
        task = ScanTask(self.builder, self.generation)
        task.s.finished.connect(self._on_finished)
        self._tasks[self.generation] = task
        self._set_busy(True)
        self.pool.start(task)
        return True

    def _set_busy(self, value: bool):
        if self.busy != value:
            self.busy = value
            self.busy_changed.emit(value)

    def _on_finished(self, generation: int, report: CatalogReport):
        self._tasks.pop(generation, None)
        if generation != self.generation:
            log.debug("Dropping result of superseded scan %d", generation)
            return
        self.last_report = report
        self._set_busy(False)
        self.catalog_ready.emit(report)


class IconController(QObject):
    """
    Fan icon requests out to the pool; answers arrive through icon_ready.
    """
    icon_ready = pyqtSignal(str, QImage)

    def __init__(self, store: IconStore, pool: Optional[QThreadPool] = None, parent=None):
        super().__init__(parent)
        self.store = store
        self.pool = pool or QThreadPool.globalInstance()
        self._pending = {}

    def request(self, record: ApplicationRecord) -> Optional[QImage]:
        """
        Return the cached image right away, or queue a resolution and return None.
        """
        key = self.store.cache_key(record)
        if not key:
            return None
        hit = self.store.cached(key)
        if hit is not None:
            return hit
        if key in self._pending:
            return None
        task = IconTask(self.store, record, key)
        task.s.finished.connect(self._on_finished)
        self._pending[key] = task
        self.pool.start(task)
        return None

    def _on_finished(self, key: str, img: QImage):
        self._pending.pop(key, None)
        if not img.isNull():
            self.icon_ready.emit(key, img)
