"""Asynchronous buffered logger that feeds truthcast log handlers."""

import asyncio
import sys
import threading
import traceback
from typing import Optional

from colorama import Fore, Style, just_fix_windows_console

from truthcast.utils.logger.config import LogEvent, LogLevel, LoggerConfig
from truthcast.utils.logger.handlers.base import BaseLogHandler
from truthcast.utils.misc import time_iso8601, time_s

LOG_COLORS = {
    LogLevel.TRACE: Fore.LIGHTBLACK_EX,
    LogLevel.DEBUG: Fore.LIGHTBLACK_EX,
    LogLevel.INFO: Fore.GREEN,
    LogLevel.WARNING: Fore.YELLOW,
    LogLevel.ERROR: Fore.RED + Style.BRIGHT,
    LogLevel.CRITICAL: Fore.RED + Style.BRIGHT,
}

ICONS = {
    LogLevel.TRACE: "🔍", LogLevel.DEBUG: "🐞", LogLevel.INFO: "ℹ️",
    LogLevel.WARNING: "⚠️", LogLevel.ERROR: "❌", LogLevel.CRITICAL: "🔥",
}


class Logger:
    """Asynchronous logger that buffers messages before dispatching them.

    Level methods are synchronous and may be called from any thread, so
    synchronous code such as the truth evaluator can log without awaiting.
    Once :meth:`start` has bound the logger to its event loop, records from
    other threads are handed over with ``call_soon_threadsafe``. Records
    emitted before :meth:`start` wait in the queue. The queue holds at most
    ``LoggerConfig.queue_capacity`` events; records beyond that are dropped
    and counted in :attr:`dropped`.
    """

    def __init__(
        self,
        config: Optional[LoggerConfig] = None,
        name: str = "",
        handlers: Optional[list[BaseLogHandler]] = None,
    ):
        """Initialise the logger with optional configuration and handlers.

        :param config: Configuration settings controlling buffering and output.
        :param name: Name prefix used in emitted log records.
        :param handlers: Sequence of handlers derived from :class:`BaseLogHandler`.
        :raises TypeError: If a provided handler does not extend :class:`BaseLogHandler`.
        """
        self._config = config
        if self._config is None:
            self._config = LoggerConfig()

        self._name = name

        self._handlers = handlers
        if self._handlers is None:
            self._handlers = []

        for handler in self._handlers:
            if not isinstance(handler, BaseLogHandler):
                raise TypeError(f"Invalid handler; expected BaseLogHandler but got {type(handler).__name__}")
            handler.add_primary_config(self._config)

        self._buffer: list[LogEvent] = []
        self._buffer_start_time = time_s()

        self._msg_queue: asyncio.Queue = asyncio.Queue(maxsize=self._config.queue_capacity)
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._enqueue_lock = threading.Lock()
        self._dropped = 0
        self._is_running = True
        self._log_ingestor_task: Optional[asyncio.Task] = None

    async def _flush_buffer(self) -> None:
        """Flush the buffered log events to all registered handlers."""
        batch = list(self._buffer)
        for handler in self._handlers:
            await handler.push(batch)
        self._buffer.clear()
        self._buffer_start_time = time_s()

    async def _log_ingestor(self) -> None:
        """Consume queued log events and dispatch them to handlers."""
        while self._is_running or not self._msg_queue.empty():
            try:
                event: LogEvent = await self._msg_queue.get()
            except asyncio.CancelledError:
                break

            try:
                self._buffer.append(event)

                if self._config.do_stdout:
                    color = LOG_COLORS.get(event.level, "")
                    print(color + event.text + Style.RESET_ALL)

                if event.level >= LogLevel.WARNING:
                    await self._flush_buffer()
                else:
                    is_buffer_full = len(self._buffer) >= self._config.buffer_capacity
                    is_buffer_expired = (time_s() - self._buffer_start_time) >= self._config.buffer_timeout

                    if is_buffer_full or is_buffer_expired:
                        await self._flush_buffer()

            except Exception:
                traceback.print_exc(file=sys.stderr)
            finally:
                self._msg_queue.task_done()

    def _process_log(self, level: LogLevel, msg: str) -> None:
        """Format a message and put it on the queue.

        :param level: Severity level associated with the message.
        :param msg: Log message text.
        """
        try:
            log_msg = self._config.str_format % {
                "asctime": time_iso8601(),
                "icon": ICONS.get(level, "•"),
                "name": self._name,
                "levelname": level.name,
                "message": msg,
            }
            self._enqueue(LogEvent(text=log_msg, level=level))
        except Exception:
            traceback.print_exc(file=sys.stderr)

    def _put(self, event: LogEvent) -> None:
        try:
            self._msg_queue.put_nowait(event)
        except asyncio.QueueFull:
            self._drop()

    def _drop(self) -> None:
        with self._enqueue_lock:
            self._dropped += 1

    def _enqueue(self, event: LogEvent) -> None:
        """Queue ``event`` from any thread, dropping it when the queue is full."""
        loop = self._loop
        if loop is None:
            with self._enqueue_lock:
                try:
                    self._msg_queue.put_nowait(event)
                except asyncio.QueueFull:
                    self._dropped += 1
            return

        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is loop:
            self._put(event)
            return
        try:
            loop.call_soon_threadsafe(self._put, event)
        except RuntimeError:
            # Loop already closed.
            self._drop()

    def _log(self, level: LogLevel, msg: str) -> None:
        if self._is_running and self._config.base_level <= level:
            self._process_log(level, msg)

    async def _drain(self, timeout: float | None = None) -> None:
        """Wait for the queue to empty, respecting an optional timeout.

        :param timeout: Maximum seconds to wait for the queue to drain.
        :raises asyncio.TimeoutError: If the drain does not complete in time.
        """
        if timeout is None:
            await self._msg_queue.join()
        else:
            await asyncio.wait_for(self._msg_queue.join(), timeout=timeout)

    def set_log_level(self, level: LogLevel) -> None:
        """Modify the logger's base log level at runtime.

        :param level: New minimum level accepted by the logger.
        """
        self.debug(f"Changing base log level from {self._config.base_level.name} to {level.name}")
        self._config.base_level = level
        for handler in self._handlers:
            handler.add_primary_config(self._config)

    def trace(self, msg: str) -> None:
        """Emit a trace-level log message."""
        self._log(LogLevel.TRACE, msg)

    def debug(self, msg: str) -> None:
        """Emit a debug-level log message."""
        self._log(LogLevel.DEBUG, msg)

    def info(self, msg: str) -> None:
        """Emit an info-level log message."""
        self._log(LogLevel.INFO, msg)

    def warning(self, msg: str) -> None:
        """Emit a warning-level log message."""
        self._log(LogLevel.WARNING, msg)

    def error(self, msg: str) -> None:
        """Emit an error-level log message."""
        self._log(LogLevel.ERROR, msg)

    def critical(self, msg: str) -> None:
        """Emit a critical-level log message."""
        self._log(LogLevel.CRITICAL, msg)

    async def start(self) -> None:
        """Start the logger ingest task and underlying handlers."""
        self._loop = asyncio.get_running_loop()
        if self._config.do_stdout:
            just_fix_windows_console()
        self._is_running = True
        for h in self._handlers:
            if hasattr(h, "start"):
                await h.start()
        self._log_ingestor_task = asyncio.create_task(self._log_ingestor())

    async def shutdown(self) -> None:
        """Flush remaining events and stop the logger and handlers."""
        self._is_running = False

        await asyncio.sleep(0)

        try:
            await self._drain(timeout=2.0)
        except asyncio.TimeoutError:
            print("[Logger] drain timeout; forcing shutdown", file=sys.stderr)

        if self._buffer:
            await self._flush_buffer()

        if self._log_ingestor_task is not None:
            self._log_ingestor_task.cancel()
            try:
                await self._log_ingestor_task
            except asyncio.CancelledError:
                pass
            self._log_ingestor_task = None
        self._loop = None

        for h in self._handlers:
            if hasattr(h, "shutdown"):
                try:
                    await h.shutdown()
                except Exception:
                    traceback.print_exc(file=sys.stderr)

        self._buffer.clear()

    @property
    def dropped(self) -> int:
        """Number of records discarded because the queue was full."""
        return self._dropped

    def pending(self) -> int:
        """Return the number of records waiting to be dispatched."""
        return self._msg_queue.qsize()

    def is_running(self) -> bool:
        """Return whether the logger accepts new records."""
        return self._is_running

    def get_name(self) -> str:
        """Return the logger name."""
        return self._name

    def get_config(self) -> LoggerConfig:
        """Return the logger configuration object."""
        return self._config
