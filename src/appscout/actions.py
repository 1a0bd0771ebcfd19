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
import logging
import os
import shutil
import subprocess
from typing import Optional

from PyQt5.QtCore import QProcess, QUrl
from PyQt5.QtGui import QDesktopServices

from .models import ApplicationRecord

log = logging.getLogger(__name__)


def containing_folder(record: ApplicationRecord) -> Optional[str]:
    """
    Folder holding the program; bare commands are looked up on PATH.
    """
    path = os.path.expanduser(record.launch_path)
    if not os.path.isabs(path):
        path = shutil.which(path) or ""
    if not path:
        return None
    folder = os.path.dirname(path)
    return folder if os.path.isdir(folder) else None

def launch(record: ApplicationRecord) -> bool:
    """
    Start the program detached from this process. False when it could not start.
    """
    program = os.path.expanduser(record.launch_path)
    workdir = os.path.dirname(program) if os.path.isabs(program) else ""
    ok, _pid = QProcess.startDetached(program, [], workdir)
    if ok:
        return True
    try:
        with open(os.devnull, "wb") as devnull:
            subprocess.Popen([program], cwd=workdir or None, stdout=devnull, stderr=devnull,
                             stdin=devnull, start_new_session=True)
        return True
    except OSError as e:
        log.warning("Cannot launch %s: %s", program, e)
        return False

def open_containing_folder(record: ApplicationRecord) -> bool:
    folder = containing_folder(record)
    if not folder:
        log.warning("No folder for %s", record.launch_path)
        return False
    ok = QDesktopServices.openUrl(QUrl.fromLocalFile(folder))
    if not ok:
        log.warning("Cannot open folder %s", folder)
    return bool(ok)
