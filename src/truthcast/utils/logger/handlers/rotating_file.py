"""Log handlers writing buffered events to time-rotated files."""

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Literal

from truthcast.utils.logger.config import LogEvent, LogLevel
from truthcast.utils.logger.handlers.base import BaseLogHandler

Rotation = Literal["daily", "hourly", "per_minute", "per_second"]

_PATTERNS = {
    "daily": "%Y-%m-%d",
    "hourly": "%Y%m%d %H:00:00",
    "per_minute": "%Y%m%d %H:%M:00",
    "per_second": "%Y%m%d %H:%M:%S",
}


class RotatingFileHandler(BaseLogHandler):
    """Append every buffered event to the file of the current rotation window."""

    suffix = ".log"

    def __init__(
        self,
        base_dir: str,
        filename_prefix: str = "",
        create: bool = True,
        rotation: Rotation = "daily",
    ) -> None:
        """Initialise the handler with target directory and rotation scheme.

        :param base_dir: Base directory where log files are written.
        :param filename_prefix: Optional prefix (subdirectory) for log files.
        :param create: Whether to create the directory if missing.
        :param rotation: Frequency granularity for rotating filenames.
        :raises ValueError: If ``rotation`` is not a known window.
        """
        super().__init__()
        if rotation not in _PATTERNS:
            raise ValueError(f"Unknown rotation: {rotation!r}")

        self.base_dir = Path(base_dir)
        self.filename_prefix = filename_prefix
        self._pattern = _PATTERNS[rotation]

        if create:
            self.base_dir.mkdir(parents=True, exist_ok=True)

    def _get_current_filepath(self) -> str:
        """Generate a log file path for the current rotation window."""
        window = datetime.now(timezone.utc).strftime(self._pattern)
        filename = f"{window}{self.suffix}"

        if self.filename_prefix:
            # e.g. logs/truthcast/2025-08-04.log
            return str(self.base_dir / self.filename_prefix / filename)
        return str(self.base_dir / filename)

    def _select(self, records: List[LogEvent]) -> List[str]:
        return [ev.text for ev in records]

    async def push(self, records: List[LogEvent]) -> None:
        """Append log records to the current rotation file.

        :param records: Buffered log events awaiting persistence.
        """
        lines = self._select(records)
        if not lines:
            return
        filepath = self._get_current_filepath()
        os.makedirs(os.path.dirname(filepath), exist_ok=True)

        with open(filepath, "a", encoding="utf-8") as file:
            file.write("\n".join(lines) + "\n")
            file.flush()


class ErrorFileHandler(RotatingFileHandler):
    """Persist only error and higher severity messages."""

    suffix = ".error.log"

    def _select(self, records: List[LogEvent]) -> List[str]:
        return [ev.text for ev in records if ev.level >= LogLevel.ERROR]
