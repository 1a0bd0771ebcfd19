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
import os
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from ..config.model import Settings


class IconLocator:
    """
    Find an icon file for a theme icon name in the usual freedesktop trees.

    Order: size (largest first, then scalable) -> root -> extension ->
    hicolor/apps, hicolor/applications, known themes, any theme; then plain
    files in each root; then a bounded recursive search of pixmaps.
    """

    def __init__(self, settings: Settings):
        self.s = settings

    def _extensions(self, name: str) -> Tuple[str, ...]:
        if os.path.splitext(name)[1].lower() in self.s.image_extensions:
            return ("",)
        return self.s.image_extensions

    def _theme_dirs(self, root: Path) -> List[Path]:
        try:
            return sorted(p for p in root.iterdir() if os.path.isdir(p))
        except OSError:
            return []

    def _size_dirs(self):
        for size in self.s.icon_sizes:
            yield f"{size}x{size}"
        yield "scalable"

    def candidates(self, name: str) -> Iterator[Path]:
        exts = self._extensions(name)
        roots = [r for r in self.s.icon_roots if os.path.isdir(r)]
        # listed on every lookup so a theme installed after a miss is found
        themes = {root: self._theme_dirs(root) for root in roots}
        for size_dir in self._size_dirs():
            for root in roots:
                for ext in exts:
                    fname = name + ext
                    yield root / "hicolor" / size_dir / "apps" / fname
                    yield root / "hicolor" / size_dir / "applications" / fname
                    for theme in self.s.icon_themes:
                        yield root / theme / size_dir / "apps" / fname
                    for theme_dir in themes[root]:
                        yield theme_dir / size_dir / "apps" / fname
        for root in roots:
            for ext in exts:
                yield root / (name + ext)

    def find(self, name: str) -> Optional[Path]:
        if not name or "/" in name:
            return None
        for cand in self.candidates(name):
            if os.path.isfile(cand):
                return cand
        for ext in self._extensions(name):
            hit = find_recursive(self.s.pixmaps_dir, name + ext, self.s.pixmaps_max_depth)
            if hit:
                return hit
        return None

    def find_path(self, path: str) -> Optional[Path]:
        """
        An absolute icon path, as is or with an image extension appended.
        """
        for ext in ("",) + self.s.image_extensions:
            p = Path(path + ext)
            if os.path.isfile(p):
                return p
        return None


def find_recursive(directory: Path, filename: str, max_depth: int) -> Optional[Path]:
    if max_depth < 0 or not os.path.isdir(directory):
        return None
    direct = directory / filename
    if os.path.isfile(direct):
        return direct
    try:
        children = sorted(p for p in directory.iterdir() if os.path.isdir(p))
    except OSError:
        return None
    for child in children:
        hit = find_recursive(child, filename, max_depth - 1)
        if hit:
            return hit
    return None
