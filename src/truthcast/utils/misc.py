"""Time helpers used by the logger."""

from __future__ import annotations

import datetime
import time


def time_s() -> float:
    """Return the current wall-clock time in seconds as a float."""

    return time.time()


def time_iso8601() -> str:
    """Return the current UTC time formatted as ``YYYY-MM-DDTHH:MM:SS.fffZ``."""

    dt = datetime.datetime.now(datetime.timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
