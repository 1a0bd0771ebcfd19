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

import argparse
import logging
import sys
from typing import Dict, List, Optional

from PyQt5.QtCore import Qt, QSize
from PyQt5.QtGui import QColor, QIcon, QImage, QPainter, QPixmap
from PyQt5.QtWidgets import (
    QApplication, QComboBox, QFileDialog, QHBoxLayout, QLabel, QLineEdit,
    QListWidget, QListWidgetItem, QMenu, QMessageBox, QPushButton,
    QVBoxLayout, QWidget,
)

from . import actions
from .config.io import debug_enabled, load_settings
from .config.model import Settings
from .discovery.catalog import ApplicationCatalogBuilder
from .icons.store import IconStore
from .listing import AppFilter, SortOrder, add_manual, visible_records
from .models import ApplicationRecord, CatalogReport
from .utils.osdetect import Platform, detect_platform, os_name
from .workers import IconController, ScanController

log = logging.getLogger("appscout")

ROLE_RECORD = Qt.UserRole + 1

FILTER_LABELS = [
    (AppFilter.ALL, "All apps"),
    (AppFilter.SYSTEM, "System apps"),
    (AppFilter.USER, "User apps"),
]
SORT_LABELS = [
    (SortOrder.NAME_ASC, "Name (A-Z)"),
    (SortOrder.NAME_DESC, "Name (Z-A)"),
]


def _configure_logging(debug: bool):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

def _draw_placeholder_icon(size: int) -> QIcon:
    """
    Draw a placeholder icon (a square with an X).
    """
    pm = QPixmap(size, size); pm.fill(Qt.transparent)
    p = QPainter(pm); p.setRenderHint(QPainter.Antialiasing, True)
    try:
        r = size - 2
        p.setBrush(QColor(128, 128, 128, 40)); p.setPen(QColor(128, 128, 128, 160))
        p.drawRoundedRect(1, 1, r - 2, r - 2, 8, 8)
        p.drawLine(int(size*0.25), int(size*0.25), int(size*0.75), int(size*0.75))
        p.drawLine(int(size*0.75), int(size*0.25), int(size*0.25), int(size*0.75))
    finally:
        p.end()
    return QIcon(pm)


class AppScoutWindow(QWidget):
    """
    Main window: scan, search, filter, sort and launch.
    """
    def __init__(self, settings: Settings, platform: Platform):
        super().__init__()
        self.settings = settings
        self.platform = platform
        self.records: List[ApplicationRecord] = []
        self.icon_store = IconStore(platform, settings)
        self.icons = IconController(self.icon_store, parent=self)
        self.scanner = ScanController(ApplicationCatalogBuilder(settings, platform), parent=self)
        self.placeholder = _draw_placeholder_icon(settings.icon_size)
        self._items: Dict[str, List[QListWidgetItem]] = {}

        self.setWindowTitle("AppScout")
        self.resize(560, 720)
        root = QVBoxLayout(self)
        root.addWidget(QLabel(f"Detected OS: {os_name() or 'unknown'} ({platform.value})"))

        row = QHBoxLayout()
        self.scan_btn = QPushButton("Scan system")
        self.add_btn = QPushButton("Add manually")
        row.addWidget(self.scan_btn); row.addWidget(self.add_btn)
        root.addLayout(row)

        self.search = QLineEdit(); self.search.setPlaceholderText("Search by name...")
        root.addWidget(self.search)

        row = QHBoxLayout()
        self.filter_box = QComboBox()
        for kind, label in FILTER_LABELS: self.filter_box.addItem(label, kind)
        self.sort_box = QComboBox()
        for order, label in SORT_LABELS: self.sort_box.addItem(label, order)
        row.addWidget(self.filter_box); row.addWidget(self.sort_box)
        root.addLayout(row)

        self.counter = QLabel()
        root.addWidget(self.counter)
        self.list = QListWidget()
        self.list.setIconSize(QSize(settings.icon_size, settings.icon_size))
        self.list.setContextMenuPolicy(Qt.CustomContextMenu)
        root.addWidget(self.list, 1)

        self.scan_btn.clicked.connect(self.start_scan)
        self.add_btn.clicked.connect(self.add_manually)
        self.search.textChanged.connect(self.refresh)
        self.filter_box.currentIndexChanged.connect(self.refresh)
        self.sort_box.currentIndexChanged.connect(self.refresh)
        self.list.itemDoubleClicked.connect(lambda item: self.launch_item(item))
        self.list.customContextMenuRequested.connect(self._show_menu)
        self.scanner.busy_changed.connect(self._on_busy)
        self.scanner.catalog_ready.connect(self._on_catalog)
        self.icons.icon_ready.connect(self._on_icon)
        self.refresh()

    # -- scan ------------------------------------------------------------
    def start_scan(self):
        self.scanner.start()

    def _on_busy(self, busy: bool):
        self.scan_btn.setEnabled(not busy)
        self.add_btn.setEnabled(not busy)
        if busy: self.counter.setText("Scanning...")

    def _on_catalog(self, report: CatalogReport):
        self.records = list(report.records)
        self.refresh()

    def add_manually(self):
        pattern = f"Programs (*{self.settings.exe_extension})" if self.platform is Platform.WINDOWS else "All files (*)"
        path, _ = QFileDialog.getOpenFileName(self, "Select application", "", pattern)
        if path:
            self.records = add_manual(self.records, path, self.settings.exe_extension)
            self.refresh()

    # -- list ------------------------------------------------------------
    def refresh(self, *_):
        shown = visible_records(
            self.records,
            kind=self.filter_box.currentData(),
            query=self.search.text(),
            order=self.sort_box.currentData(),
        )
        self.list.clear(); self._items.clear()
        for rec in shown:
            item = QListWidgetItem(rec.display_name)
            item.setToolTip(rec.launch_path)
            item.setData(ROLE_RECORD, rec)
            img = self.icons.request(rec)
            item.setIcon(QIcon(QPixmap.fromImage(img)) if img is not None else self.placeholder)
            key = self.icon_store.cache_key(rec)
            if key: self._items.setdefault(key, []).append(item)
            self.list.addItem(item)
        if not self.scanner.busy:
            self.counter.setText(f"Applications found: {len(shown)}")

    def _on_icon(self, key: str, img: QImage):
        icon = QIcon(QPixmap.fromImage(img))
        for item in self._items.get(key, []):
            item.setIcon(icon)

    # -- actions ---------------------------------------------------------
    def _record(self, item: Optional[QListWidgetItem]) -> Optional[ApplicationRecord]:
        return item.data(ROLE_RECORD) if item is not None else None

    def launch_item(self, item):
        rec = self._record(item)
        if rec and not actions.launch(rec):
            QMessageBox.warning(self, "AppScout", f"Could not start {rec.display_name}.")

    def open_folder(self, item):
        rec = self._record(item)
        if rec and not actions.open_containing_folder(rec):
            QMessageBox.warning(self, "AppScout", f"Could not open the folder of {rec.display_name}.")

    def _show_menu(self, pos):
        item = self.list.itemAt(pos)
        if item is None: return
        menu = QMenu(self)
        menu.addAction("Launch", lambda: self.launch_item(item))
        menu.addAction("Open containing folder", lambda: self.open_folder(item))
        menu.exec_(self.list.viewport().mapToGlobal(pos))


def print_catalog(settings: Settings, platform: Platform) -> int:
    report = ApplicationCatalogBuilder(settings, platform).build()
    for rec in report.records:
        origin = "system" if rec.is_system_app else "user"
        print(f"{rec.display_name}\t{rec.launch_path}\t{origin}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(prog="appscout", description="Find installed applications and launch them.")
    parser.add_argument("--list", action="store_true", help="print the catalog and exit")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    args = parser.parse_args(argv)

    _configure_logging(args.debug or debug_enabled())
    settings = load_settings()
    platform = detect_platform()
    log.debug("Platform: %s", platform.value)
    if args.list:
        return print_catalog(settings, platform)

    app = QApplication(sys.argv[:1])
    window = AppScoutWindow(settings, platform)
    window.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
