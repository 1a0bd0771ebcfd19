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
from __future__ import annotations
from typing import Optional

from PyQt5.QtCore import QFileInfo, QSize
from PyQt5.QtGui import QIcon, QImage
from PyQt5.QtWidgets import QFileIconProvider

# Largest size asked from the shell; QIcon never upscales past what it has.
# Called from pool threads: the windows platform plugin supports ThreadedPixmaps.
_SHELL_REQUEST = QSize(256, 256)


def _icon_to_image(icon: QIcon) -> Optional[QImage]:
    if icon is None or icon.isNull():
        return None
    pix = icon.pixmap(_SHELL_REQUEST)
    if pix.isNull():
        return None
    return pix.toImage().convertToFormat(QImage.Format_ARGB32)


class ShellIconSource:
    """
    Icons the OS shell associates with a file (Windows: the .exe's own icon).
    Requires a running QApplication.
    """

    def file_icon(self, path: str) -> Optional[QImage]:
        return _icon_to_image(QFileIconProvider().icon(QFileInfo(path)))

    def generic_icon(self) -> Optional[QImage]:
        return _icon_to_image(QFileIconProvider().icon(QFileIconProvider.File))
