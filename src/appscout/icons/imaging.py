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
# appscout/icons/imaging.py
#
# QImage only: pixmaps may not be touched outside the GUI thread and icons
# are decoded on the worker pool.
from __future__ import annotations
from typing import List, Tuple

import numpy as np
from PyQt5.QtCore import Qt, QRect
from PyQt5.QtGui import QImage, QPainter


def alpha_channel(img: QImage) -> np.ndarray:
    """
    Alpha values of `img` as a (height, width) uint8 array.
    """
    img = img.convertToFormat(QImage.Format_ARGB32)
    w, h = img.width(), img.height()
    if w == 0 or h == 0:
        return np.zeros((0, 0), dtype=np.uint8)
    ptr = img.constBits(); ptr.setsize(img.sizeInBytes())
    arr = np.frombuffer(ptr, dtype=np.uint8).reshape(h, img.bytesPerLine())
    # ARGB32 is stored as B, G, R, A on little-endian hosts
    return arr[:, 3:3 + 4 * w:4].copy()

def is_blank(img: QImage) -> bool:
    """
    True for null images and images without a single visible pixel.
    """
    if img is None or img.isNull():
        return True
    alpha = alpha_channel(img)
    return alpha.size == 0 or int(alpha.max()) == 0


def halving_plan(sw: int, sh: int, tw: int, th: int) -> List[Tuple[int, int]]:
    """
    Intermediate sizes for progressive downscaling: each dimension that is
    more than twice its target is halved until it no longer is.
    """
    steps: List[Tuple[int, int]] = []
    w, h = sw, sh
    while w > 2 * tw or h > 2 * th:
        if w > 2 * tw: w //= 2
        if h > 2 * th: h //= 2
        steps.append((w, h))
    return steps

def _smooth_resize(img: QImage, w: int, h: int) -> QImage:
    target = QImage(w, h, QImage.Format_ARGB32_Premultiplied)
    target.fill(Qt.transparent)
    painter = QPainter(target)
    painter.setRenderHint(QPainter.Antialiasing, True)
    painter.setRenderHint(QPainter.SmoothPixmapTransform, True)
    try:
        painter.drawImage(QRect(0, 0, w, h), img)
    finally:
        painter.end()
    return target

def scale_with_quality(img: QImage, tw: int, th: int) -> QImage:
    """
    Resize `img` to exactly tw x th.

    Large reductions go through repeated smooth halvings first, then a
    final precise resize; a single big-ratio resize would alias.
    """
    if img.isNull() or (img.width() == tw and img.height() == th):
        return img
    current = img
    for w, h in halving_plan(img.width(), img.height(), tw, th):
        current = current.scaled(w, h, Qt.IgnoreAspectRatio, Qt.SmoothTransformation)
    return _smooth_resize(current, tw, th)
