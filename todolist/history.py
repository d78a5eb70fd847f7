"""
TODO LIST - Filename History
============================
Remembers which files the user has saved to, so the CLI can offer them
again on the next save or load. Stored as a plain text file, one name per
line, appended to as new names are used.
"""

import os
from pathlib import Path
from typing import List, Optional, Union
import logging

from .errors import StorageIOError

logger = logging.getLogger("todolist.history")

DEFAULT_HISTORY_FILE = ".todo_filenames.txt"
HISTORY_FILE_ENV = "TODO_HISTORY_FILE"


def default_history_path() -> Path:
    """History file from $TODO_HISTORY_FILE, else .todo_filenames.txt"""
    return Path(os.environ.get(HISTORY_FILE_ENV) or DEFAULT_HISTORY_FILE)


class FilenameTracker:
    """Previously used save/load filenames plus the tracking switch"""

    def __init__(
        self,
        history_path: Optional[Union[str, Path]] = None,
        tracking_enabled: bool = False
    ):
        self.history_path = Path(history_path) if history_path else default_history_path()
        self.tracking_enabled = tracking_enabled
        self._filenames: List[str] = []
        self._read_history()

    def _read_history(self) -> None:
        if not self.history_path.exists():
            return
        try:
            lines = self.history_path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise StorageIOError(
                f"Could not read filename history {self.history_path}: {e}",
                str(self.history_path)
            ) from e

        for line in lines:
            name = line.strip()
            if name and name not in self._filenames:
                self._filenames.append(name)
        logger.debug(f"Read {len(self._filenames)} filenames from {self.history_path}")

    def add(self, filename: str) -> bool:
        """Record `filename`; returns False if it was already known"""
        if filename in self._filenames:
            return False
        try:
            with open(self.history_path, 'a', encoding="utf-8") as f:
                f.write(f"{filename}\n")
        except OSError as e:
            raise StorageIOError(
                f"Could not update filename history {self.history_path}: {e}",
                str(self.history_path)
            ) from e

        self._filenames.append(filename)
        logger.debug(f"Remembered filename: {filename}")
        return True

    def list(self) -> List[str]:
        return list(self._filenames)

    def enable_tracking(self) -> None:
        self.tracking_enabled = True
