"""Base class shared by every truthcast log handler."""

from typing import List, Optional

from truthcast.utils.logger.config import LogEvent, LoggerConfig


class BaseLogHandler:
    """Receive batches of buffered :class:`LogEvent` records from a logger."""

    def __init__(self) -> None:
        self.primary_config: Optional[LoggerConfig] = None

    def add_primary_config(self, config: Optional[LoggerConfig]) -> None:
        """Store the owning logger's configuration.

        :param config: Configuration of the :class:`Logger` this handler serves.
        """
        self.primary_config = config

    async def push(self, records: List[LogEvent]) -> None:
        """Persist or forward a batch of records.

        :param records: Buffered log events awaiting dispatch.
        """
        raise NotImplementedError
