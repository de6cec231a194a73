"""Exception-safe conversion of arbitrary values to booleans.

Example::

    data = {"key1": 1, "key2": "on", "key3": "off"}

    evaluate(data["key1"])  # True
    evaluate(data["key2"])  # True
    evaluate(data["key3"])  # False

Non-strict evaluation consults a truthy list: the evaluator's default list,
or a custom list passed for a single call. Strict evaluation accepts only
``True``, ``1``, ``"1"`` and ``"true"``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from threading import Lock
from typing import Any, Optional

from truthcast.configs.env_config import Env
from truthcast.utils.logger.logger import Logger
from truthcast.utils.logger_factory import EnhancedLoggerFactory
from truthcast.utils.safe import safe_bool

DEFAULT_TRUTHY_VALUES: tuple[Any, ...] = (
    1, True, "1", "true", "on", "yes", "y", "ok", "+", "active", "enable", "enabled",
)

# Whitespace stripped from string input before comparison.
_TRIM_CHARS = " \t\n\r\0\x0b"


def _as_truthy_list(candidate: Any) -> Optional[Sequence[Any]]:
    """Return ``candidate`` as a truthy list, or ``None`` if it cannot serve as one.

    Mappings contribute their values in order; keys are discarded.
    """
    if isinstance(candidate, Mapping):
        return list(candidate.values())
    if isinstance(candidate, Sequence) and not isinstance(candidate, (str, bytes, bytearray)):
        return candidate
    return None


def _strict_equal(left: Any, right: Any) -> bool:
    """Compare by concrete type and value, recursing into containers."""
    if type(left) is not type(right):
        return False
    if isinstance(left, (list, tuple)):
        return len(left) == len(right) and all(_strict_equal(a, b) for a, b in zip(left, right))
    if isinstance(left, Mapping):
        # Same keys in the same order, keys and values compared strictly.
        return len(left) == len(right) and all(
            _strict_equal(lk, rk) and _strict_equal(lv, rv)
            for (lk, lv), (rk, rv) in zip(left.items(), right.items())
        )
    if isinstance(left, (set, frozenset)):
        return len(left) == len(right) and all(any(_strict_equal(a, b) for b in right) for a in left)
    return bool(left == right)


class TruthEvaluator:
    """Convert values to booleans against a configurable truthy list.

    The default list is held as an immutable tuple. :meth:`configure`
    swaps it under a lock and :meth:`evaluate` reads it under the same
    lock, so a concurrent reader sees either the old or the new list.
    """

    def __init__(self, truthy_values: Optional[Sequence[Any]] = None, *, logger: Optional[Logger] = None) -> None:
        """Create an evaluator.

        :param truthy_values: Initial default list; ``None`` keeps :data:`DEFAULT_TRUTHY_VALUES`.
        :param logger: Optional logger for configuration changes and recovered failures.
        """
        self._lock = Lock()
        self._logger = logger
        self._truthy_values: tuple[Any, ...] = DEFAULT_TRUTHY_VALUES
        self.configure(truthy_values)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "TruthEvaluator":
        """Build an evaluator from the ``TRUTH*`` environment settings.

        The ``.env`` file is read here, never at import time. When
        ``TRUTH_LOG_ENABLED`` is set the evaluator gets an application logger
        that only writes files once running: the caller must
        ``await evaluator.logger.start()`` inside its event loop, and
        ``await evaluator.logger.shutdown()`` before exiting. Until then at
        most ``LoggerConfig.queue_capacity`` records are kept.

        :param dotenv_path: Explicit ``.env`` file; searched from the working directory if omitted.
        :raises ValueError: If an environment variable holds an invalid value.
        """
        Env.load(dotenv_path)
        Env.validate()
        logger = None
        if Env.log_enabled():
            logger = EnhancedLoggerFactory.create_application_logger(
                enable_stdout=Env.log_stdout(),
                log_level=Env.log_level(),
                base_dir=Env.LOG_DIR,
            )
        return cls(Env.truthy_values(), logger=logger)

    @property
    def truthy_values(self) -> tuple[Any, ...]:
        """The current default truthy list."""
        with self._lock:
            return self._truthy_values

    @property
    def logger(self) -> Optional[Logger]:
        return self._logger

    def configure(self, truthy_values: Optional[Sequence[Any]] = None) -> None:
        """Replace the default truthy list.

        ``None`` entries are dropped and the remaining order is kept. A
        mapping contributes its values, re-indexed in order. Passing ``None``,
        or anything that is neither a sequence nor a mapping (a plain string
        included), leaves the current list untouched.

        :param truthy_values: New default list of truthy values of any type.
        """
        values = _as_truthy_list(truthy_values)
        if values is None:
            return
        replacement = tuple(value for value in values if value is not None)
        with self._lock:
            self._truthy_values = replacement
        if self._logger is not None:
            self._logger.debug(f"Truthy list replaced ({len(replacement)} entries)")

    def reset(self) -> None:
        """Restore :data:`DEFAULT_TRUTHY_VALUES` as the default list."""
        self.configure(DEFAULT_TRUTHY_VALUES)

    def evaluate(self, value: Any, strict: bool = False,
                 custom_truthy_values: Optional[Sequence[Any]] = None) -> bool:
        """Safely convert ``value`` to a boolean.

        :param value: The value to convert.
        :param strict: Only accept ``True``, ``1``, ``"1"`` and ``"true"``.
        :param custom_truthy_values: List replacing the default one for this call.
        :return: The boolean interpretation; ``False`` if the conversion fails.
        """
        return safe_bool(
            lambda: self._convert(value, strict, custom_truthy_values),
            False,
            logger=self._logger,
            context=f"TruthEvaluator.evaluate({type(value).__name__})",
        )

    def _convert(self, value: Any, strict: bool, custom_truthy_values: Optional[Sequence[Any]]) -> bool:
        if strict:
            return (
                value is True
                or (type(value) is int and value == 1)
                or (isinstance(value, str) and value in ("1", "true"))
            )
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return value != 0
        if value is None:
            return False

        truthy_values = _as_truthy_list(custom_truthy_values)
        if truthy_values is None:
            truthy_values = self.truthy_values

        if isinstance(value, str):
            normalized = value.strip(_TRIM_CHARS).lower()
            for truthy in truthy_values:
                if isinstance(truthy, str) and truthy.lower() == normalized:
                    return True
                if _strict_equal(truthy, value):
                    return True
            return False

        return any(_strict_equal(truthy, value) for truthy in truthy_values)


_default_evaluator: Optional[TruthEvaluator] = None
_default_lock = Lock()


def get_default_evaluator() -> TruthEvaluator:
    """Return the process-wide evaluator, creating it on first use."""
    global _default_evaluator
    with _default_lock:
        if _default_evaluator is None:
            _default_evaluator = TruthEvaluator()
        return _default_evaluator


def set_default_evaluator(evaluator: Optional[TruthEvaluator]) -> None:
    """Install ``evaluator`` as the process-wide instance; ``None`` starts afresh."""
    global _default_evaluator
    with _default_lock:
        _default_evaluator = evaluator


def configure(truthy_values: Optional[Sequence[Any]] = None) -> None:
    """Replace the process-wide default truthy list (see :meth:`TruthEvaluator.configure`)."""
    get_default_evaluator().configure(truthy_values)


def evaluate(value: Any, strict: bool = False, custom_truthy_values: Optional[Sequence[Any]] = None) -> bool:
    """Convert ``value`` with the process-wide evaluator (see :meth:`TruthEvaluator.evaluate`)."""
    return get_default_evaluator().evaluate(value, strict, custom_truthy_values)
