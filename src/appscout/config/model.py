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

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

# Folder names whose whole subtree is noise (case-sensitive substring match)
EXCLUDED_DIR_NAMES = (
    "Common Files", "Intel", "NVIDIA", "NVIDIA Corporation", "drivers",
    "Microsoft.NET", "Microsoft SDKs", "Windows Defender", "Temp",
    "Redist", "vcredist", "DirectX",
)

# Lower-cased substrings of .exe names that are not user-facing programs
EXCLUDED_NAME_KEYWORDS = (
    "unins", "setup", "update", "crash", "dbg", "report", "support",
    "install", "service", "agent", "helper", "plugin", "eula", "readme",
    "daemon", "symbolizer", "clangd", "redist", "perf", "vcredist",
)

# Lower-cased path segments, matched as "/segment/" on a "/"-separated path
EXCLUDED_PATH_SEGMENTS = ("plugins", "resources", "lldb", "vc")

SYSTEM_UTILITIES = (
    "calc.exe", "notepad.exe", "mspaint.exe", "cmd.exe",
    "explorer.exe", "charmap.exe", "msinfo32.exe",
)

ICON_SIZES = (256, 128, 96, 64, 48, 32)
ICON_THEMES = ("Adwaita", "gnome", "oxygen", "breeze", "Papirus")
IMAGE_EXTENSIONS = (".png", ".svg", ".xpm", ".jpg")
TRUSTED_COMMANDS = ("xdg-open", "gio", "gtk-launch")


@dataclass
class Settings:
    # ---- Windows scan ----
    exe_extension: str = ".exe"
    min_exe_mb: int = 5
    excluded_dirs: Tuple[str, ...] = EXCLUDED_DIR_NAMES
    excluded_name_keywords: Tuple[str, ...] = EXCLUDED_NAME_KEYWORDS
    excluded_path_segments: Tuple[str, ...] = EXCLUDED_PATH_SEGMENTS
    program_roots: List[Path] = field(default_factory=lambda: [
        Path("C:\\Program Files"), Path("C:\\Program Files (x86)"),
    ])
    system_dir: Path = Path("C:\\Windows")
    system_utilities: Tuple[str, ...] = SYSTEM_UTILITIES

    # ---- Linux scan ----
    desktop_dirs: List[Path] = field(default_factory=lambda: [
        Path("/usr/share/applications"),
        Path("/usr/local/share/applications"),
        Path.home() / ".local/share/applications",
    ])
    trusted_commands: Tuple[str, ...] = TRUSTED_COMMANDS

    # ---- Icons ----
    icon_size: int = 64
    icon_roots: List[Path] = field(default_factory=lambda: [
        Path.home() / ".local/share/icons",
        Path.home() / ".icons",
        Path("/usr/share/icons"),
        Path("/usr/share/pixmaps"),
    ])
    pixmaps_dir: Path = Path("/usr/share/pixmaps")
    pixmaps_max_depth: int = 2
    icon_sizes: Tuple[int, ...] = ICON_SIZES
    icon_themes: Tuple[str, ...] = ICON_THEMES
    image_extensions: Tuple[str, ...] = IMAGE_EXTENSIONS
    # shell icons smaller than this are replaced by the generic file icon
    min_shell_icon_px: int = 48

    @property
    def system32_dir(self) -> Path:
        return self.system_dir / "System32"
