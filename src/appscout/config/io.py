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
# appscout/config/io.py
from __future__ import annotations
import os
from pathlib import Path
from typing import Mapping, Optional

from .model import Settings

# -------------------------------------------------
# Environment keys
# -------------------------------------------------
ENV_MIN_EXE_MB = "APPSCOUT_MIN_EXE_MB"
ENV_ICON_SIZE = "APPSCOUT_ICON_SIZE"
ENV_DEBUG = "APPSCOUT_DEBUG"
# -------------------------------------------------
# Home / XDG Paths
# -------------------------------------------------
def _home(env: Mapping[str, str]) -> Path:
    h = env.get("HOME") or env.get("USERPROFILE")
    return Path(h) if h else Path.home()
def _xdg_data_home(env: Mapping[str, str]) -> Path:
    x = env.get("XDG_DATA_HOME")
    return Path(x) if x else (_home(env) / ".local" / "share")
def _windows_dir(env: Mapping[str, str], key: str, default: str) -> Path:
    return Path(env.get(key) or default)
# -------------------------------------------------
# Coercion helpers
# -------------------------------------------------
def _coerce_int(val: object, lo: int, hi: int, default: int) -> int:
    try:
        iv = int(val)
        if lo <= iv <= hi:
            return iv
    except (TypeError, ValueError):
        pass
    return default
def debug_enabled(env: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if env is None else env
    return env.get(ENV_DEBUG) == "1"
# -------------------------------------------------
# Public API
# -------------------------------------------------
def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from defaults plus the environment.
    Nothing is read from or written to disk; invalid values keep the default.
    """
    env = os.environ if env is None else env
    d = Settings()
    home = _home(env)
    data_home = _xdg_data_home(env)

    d.min_exe_mb = _coerce_int(env.get(ENV_MIN_EXE_MB, d.min_exe_mb), 0, 4096, d.min_exe_mb)
    d.icon_size = _coerce_int(env.get(ENV_ICON_SIZE, d.icon_size), 16, 512, d.icon_size)

    d.program_roots = [
        _windows_dir(env, "ProgramFiles", "C:\\Program Files"),
        _windows_dir(env, "ProgramFiles(x86)", "C:\\Program Files (x86)"),
    ]
    d.system_dir = _windows_dir(env, "SystemRoot", "C:\\Windows")

    d.desktop_dirs = [
        Path("/usr/share/applications"),
        Path("/usr/local/share/applications"),
        data_home / "applications",
    ]
    d.icon_roots = [
        data_home / "icons",
        home / ".icons",
        Path("/usr/share/icons"),
        d.pixmaps_dir,
    ]
    return d
