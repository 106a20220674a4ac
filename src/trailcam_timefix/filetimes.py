"""
Write a timestamp onto a file's creation and modification times.

Modification time is set everywhere with os.utime. Creation time is set on
Windows through win32_setctime and on macOS through the SetFile command from the
Xcode command line tools. Linux filesystems have no settable birth time.
"""

import os
import shutil
import subprocess
import sys
from datetime import datetime
from pathlib import Path


def set_creation_time(path: Path, when: datetime) -> bool:
    """Set the creation time where the platform supports it. Returns False if it cannot."""
    if sys.platform == "win32":
        from win32_setctime import setctime

        setctime(str(path), when.timestamp())
        return True

    if sys.platform == "darwin":
        setfile = shutil.which("SetFile")
        if setfile is None:
            return False
        # SetFile expects "mm/dd/yyyy HH:MM:SS"
        subprocess.run(
            [setfile, "-d", when.strftime("%m/%d/%Y %H:%M:%S"), str(path)],
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        return True

    return False


def set_file_times(path: Path, when: datetime) -> None:
    """Apply a naive local datetime to the creation, modification and access times."""
    set_creation_time(path, when)
    timestamp = when.timestamp()
    os.utime(path, (timestamp, timestamp))
