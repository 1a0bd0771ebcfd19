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
import shutil
from typing import Iterable, Optional


class ExecutableValidator:
    """
    Decide whether a cleaned Exec command names something runnable.

    search_path is the PATH value to use; None means "take it from the
    process environment at call time". A missing PATH makes every bare
    command invalid except the trusted names.
    """

    def __init__(self, search_path: Optional[str] = None, trusted: Iterable[str] = ()):
        self._search_path = search_path
        self.trusted = frozenset(trusted)

    def _path_value(self) -> Optional[str]:
        if self._search_path is not None:
            return self._search_path
        return os.environ.get("PATH")

    def is_runnable(self, command: str) -> bool:
        cmd = (command or "").strip()
        if not cmd:
            return False
        cmd = os.path.expanduser(cmd)
        if os.path.isabs(cmd):
            return os.path.isfile(cmd) and os.access(cmd, os.X_OK)
        if os.sep in cmd or (os.altsep and os.altsep in cmd):
            return False
        path = self._path_value()
        if path and shutil.which(cmd, path=path):
            return True
        return cmd in self.trusted

    __call__ = is_runnable
