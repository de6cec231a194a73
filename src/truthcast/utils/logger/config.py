"""Configuration objects and enums used by the truthcast logger."""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels understood by :class:`truthcast.utils.logger.logger.Logger`."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve a level from its case-insensitive name.

        :param name: Level name such as ``"info"`` or ``"WARNING"``.
        :return: Matching :class:`LogLevel`.
        :raises ValueError: If ``name`` is not a known level.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown log level: {name!r}") from None


@dataclass
class LogEvent:
    """A single log message captured for buffering/dispatch."""

    text: str
    level: LogLevel


class LoggerConfig:
    """Runtime configuration for a :class:`Logger`."""

    def __init__(
        self,
        base_level: LogLevel = LogLevel.INFO,
        do_stdout: bool = True,
        str_format: str = "%(asctime)s %(icon)s [%(levelname)s] %(name)s - %(message)s",
        buffer_capacity: int = 100,
        buffer_timeout: float = 5.0,
        queue_capacity: int = 10_000,
    ):
        """Initialise configuration defaults for a :class:`Logger`.

        :param base_level: Minimum severity that will be recorded.
        :param do_stdout: Whether messages are mirrored to stdout.
        :param str_format: Format string applied to log messages.
        :param buffer_capacity: Maximum buffered events before a flush.
        :param buffer_timeout: Maximum seconds before the buffer auto-flushes.
        :param queue_capacity: Maximum queued events; further events are dropped.
        :raises ValueError: If validation of supplied values fails.
        """
        self.base_level = base_level
        self.do_stdout = do_stdout

        self.buffer_capacity = buffer_capacity
        self.buffer_timeout = buffer_timeout
        self.queue_capacity = queue_capacity

        if not isinstance(self.buffer_capacity, int):
            raise ValueError(f"Invalid buffer capacity; expected int but got {type(self.buffer_capacity)}")

        if self.buffer_capacity < 1:
            raise ValueError(f"Invalid buffer capacity; expected >=1 but got {self.buffer_capacity}")

        if self.buffer_timeout <= 0.0:
            raise ValueError(f"Invalid buffer timeout; expected >0 but got {self.buffer_timeout}")

        if not isinstance(self.queue_capacity, int) or self.queue_capacity < 1:
            raise ValueError(f"Invalid queue capacity; expected int >=1 but got {self.queue_capacity!r}")

        self.str_format = str_format

        if "%(message)s" not in self.str_format:
            raise ValueError("Format string must contain '%(message)s' placeholder")
