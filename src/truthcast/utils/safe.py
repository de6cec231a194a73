"""Run-and-recover helpers for code that must never raise."""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from truthcast.utils.casting import coerce_bool
from truthcast.utils.logger.logger import Logger
from truthcast.utils.logger_factory import log_exception

T = TypeVar("T")


def safe_get(
    operation: Callable[[], Any],
    default: T,
    cast: Optional[Callable[[Any], T]] = None,
    *,
    logger: Optional[Logger] = None,
    context: str = "",
) -> T:
    """Call ``operation`` and return its (cast) result, or ``default`` on failure.

    Any :class:`Exception` raised by ``operation`` or by ``cast`` is
    recovered. ``BaseException`` subclasses such as ``KeyboardInterrupt``
    are left to propagate.

    :param operation: Zero-argument callable to run.
    :param default: Value returned when the operation or the cast fails.
    :param cast: Optional conversion applied to a successful result.
    :param logger: Optional logger receiving the failure and its traceback.
    :param context: Text naming the call site in the failure record.
    :return: The cast result, or ``default``.
    """
    try:
        result = operation()
        return cast(result) if cast is not None else result
    except Exception as exc:
        if logger is not None:
            log_exception(logger, exc, context or getattr(operation, "__name__", "operation"))
        return default


def safe_bool(
    operation: Callable[[], Any],
    default: bool = False,
    *,
    logger: Optional[Logger] = None,
    context: str = "",
) -> bool:
    """:func:`safe_get` with the loose boolean cast applied to the result."""
    return safe_get(operation, default, coerce_bool, logger=logger, context=context)
