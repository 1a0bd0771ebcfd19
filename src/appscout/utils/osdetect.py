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
import platform as _platform
from enum import Enum


class Platform(Enum):
    WINDOWS = "windows"
    LINUX = "linux"
    UNSUPPORTED = "unsupported"


def classify_platform(os_name: str) -> Platform:
    """
    Map an OS name string to a Platform by substring match.
    "Darwin" contains "win", so macOS names are ruled out first.
    """
    name = (os_name or "").strip().lower()
    if "darwin" in name or "mac" in name:
        return Platform.UNSUPPORTED
    if "win" in name:
        return Platform.WINDOWS
    if "nix" in name or "nux" in name:
        return Platform.LINUX
    return Platform.UNSUPPORTED


def os_name() -> str:
    return _platform.system() or ""


def detect_platform() -> Platform:
    """
    Classify the running OS. Call once at startup and pass the value on.
    """
    return classify_platform(os_name())
