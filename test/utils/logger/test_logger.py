import asyncio
import os
import threading
from typing import List

import pytest

from truthcast.utils.logger.config import LogEvent, LogLevel, LoggerConfig
from truthcast.utils.logger.handlers.base import BaseLogHandler
from truthcast.utils.logger.handlers.rotating_file import ErrorFileHandler, RotatingFileHandler
from truthcast.utils.logger.logger import Logger
from truthcast.utils.logger_factory import EnhancedLoggerFactory, log_exception


class MemoryHandler(BaseLogHandler):
    def __init__(self) -> None:
        super().__init__()
        self.batches: List[List[LogEvent]] = []

    async def push(self, records: List[LogEvent]) -> None:
        self.batches.append(list(records))

    @property
    def texts(self) -> List[str]:
        return [ev.text for batch in self.batches for ev in batch]


def plain_config(level: LogLevel = LogLevel.INFO) -> LoggerConfig:
    return LoggerConfig(base_level=level, do_stdout=False, str_format="[%(levelname)s] %(name)s - %(message)s")


def test_log_level_from_name():
    assert LogLevel.from_name("debug") is LogLevel.DEBUG
    with pytest.raises(ValueError, match="Unknown log level"):
        LogLevel.from_name("chatty")


@pytest.mark.parametrize(
    "kwargs",
    [{"buffer_capacity": 0}, {"buffer_capacity": 1.5}, {"buffer_timeout": 0.0}, {"str_format": "%(name)s"},
     {"queue_capacity": 0}, {"queue_capacity": 2.5}],
)
def test_logger_config_validation(kwargs):
    with pytest.raises(ValueError):
        LoggerConfig(**kwargs)


def test_logger_rejects_foreign_handlers():
    with pytest.raises(TypeError):
        Logger(config=plain_config(), handlers=[object()])


@pytest.mark.asyncio
async def test_logger_dispatches_to_handlers():
    handler = MemoryHandler()
    log = Logger(config=plain_config(), name="truthcast", handlers=[handler])
    await log.start()

    log.debug("hidden")
    log.info("kept")
    log.error("failed")
    await log.shutdown()

    assert handler.texts == ["[INFO] truthcast - kept", "[ERROR] truthcast - failed"]
    assert handler.primary_config is log.get_config()
    assert log.is_running() is False


@pytest.mark.asyncio
async def test_warning_flushes_immediately():
    handler = MemoryHandler()
    log = Logger(config=plain_config(), handlers=[handler])
    await log.start()

    log.info("first")
    log.warning("second")
    log.info("third")
    await log.shutdown()

    # The warning flushed what was buffered; "third" waited for shutdown.
    assert handler.batches == [
        [LogEvent("[INFO]  - first", LogLevel.INFO), LogEvent("[WARNING]  - second", LogLevel.WARNING)],
        [LogEvent("[INFO]  - third", LogLevel.INFO)],
    ]


@pytest.mark.asyncio
async def test_records_before_start_are_kept():
    handler = MemoryHandler()
    log = Logger(config=plain_config(), name="early", handlers=[handler])
    log.info("queued")
    await log.start()
    await log.shutdown()
    assert handler.texts == ["[INFO] early - queued"]


def test_queue_is_bounded_before_start():
    handler = MemoryHandler()
    log = Logger(config=LoggerConfig(do_stdout=False, queue_capacity=3), handlers=[handler])
    for i in range(10):
        log.info(f"message {i}")
    assert log.pending() == 3
    assert log.dropped == 7


@pytest.mark.asyncio
async def test_backlog_is_dispatched_after_start():
    handler = MemoryHandler()
    log = Logger(config=LoggerConfig(do_stdout=False, queue_capacity=2, str_format="%(message)s"),
                 handlers=[handler])
    for i in range(4):
        log.info(f"message {i}")
    await log.start()
    await log.shutdown()
    assert handler.texts == ["message 0", "message 1"]
    assert log.pending() == 0
    assert log.dropped == 2


@pytest.mark.asyncio
async def test_records_from_other_threads_reach_handlers():
    handler = MemoryHandler()
    log = Logger(config=LoggerConfig(do_stdout=False, str_format="%(message)s"), handlers=[handler])
    await log.start()

    workers = [threading.Thread(target=log.info, args=(f"worker {i}",)) for i in range(4)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    # Let the loop run the callbacks handed over by the worker threads.
    await asyncio.sleep(0.05)
    await log.shutdown()

    assert sorted(handler.texts) == [f"worker {i}" for i in range(4)]
    assert log.dropped == 0


@pytest.mark.asyncio
async def test_set_log_level():
    handler = MemoryHandler()
    log = Logger(config=plain_config(LogLevel.ERROR), handlers=[handler])
    await log.start()
    log.info("dropped")
    log.set_log_level(LogLevel.TRACE)
    log.trace("kept")
    await log.shutdown()
    assert handler.texts == ["[TRACE]  - kept"]


@pytest.mark.asyncio
async def test_rotating_file_handlers(tmp_path):
    events = [LogEvent("ok line", LogLevel.INFO), LogEvent("bad line", LogLevel.ERROR)]
    full = RotatingFileHandler(base_dir=str(tmp_path), filename_prefix="truthcast")
    errors = ErrorFileHandler(base_dir=str(tmp_path), filename_prefix="truthcast")

    await full.push(events)
    await errors.push(events)
    await errors.push([LogEvent("only info", LogLevel.INFO)])

    files = sorted(os.listdir(tmp_path / "truthcast"))
    assert len(files) == 2
    error_file = next(name for name in files if name.endswith(".error.log"))
    log_file = next(name for name in files if not name.endswith(".error.log"))
    assert (tmp_path / "truthcast" / log_file).read_text(encoding="utf-8") == "ok line\nbad line\n"
    assert (tmp_path / "truthcast" / error_file).read_text(encoding="utf-8") == "bad line\n"


def test_rotating_file_handler_rejects_unknown_rotation(tmp_path):
    with pytest.raises(ValueError):
        RotatingFileHandler(base_dir=str(tmp_path), rotation="weekly")


@pytest.mark.asyncio
async def test_application_logger_writes_files(tmp_path):
    log = EnhancedLoggerFactory.create_application_logger(base_dir=str(tmp_path), log_level=LogLevel.DEBUG)
    await log.start()
    log.debug("configured")
    try:
        raise RuntimeError("no luck")
    except RuntimeError as exc:
        log_exception(log, exc, context="evaluate")
    await log.shutdown()

    folder = tmp_path / "truthcast"
    contents = {name: (folder / name).read_text(encoding="utf-8") for name in os.listdir(folder)}
    assert len(contents) == 2
    error_text = next(text for name, text in contents.items() if name.endswith(".error.log"))
    assert "EXCEPTION in evaluate: RuntimeError: no luck" in error_text
    assert "configured" not in error_text
    assert any("[DEBUG] truthcast - configured" in text for text in contents.values())


def test_application_logger_without_prefix(tmp_path):
    log = EnhancedLoggerFactory.create_application_logger(base_dir=str(tmp_path), config_prefix="")
    assert log.get_name() == "truthcast"
    assert not (tmp_path / "truthcast").exists()
