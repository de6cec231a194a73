"""Boolean casting helpers.

``coerce_bool`` is the forgiving cast applied to every result that leaves
:func:`truthcast.utils.safe.safe_bool`; ``parse_flag`` is the strict parser
used for configuration flags, where an ambiguous value is an error.
"""

from typing import Any

_FLAG_TRUE = {"1", "true", "t", "yes", "y", "on"}
_FLAG_FALSE = {"0", "false", "f", "no", "n", "off"}


def coerce_bool(value: Any) -> bool:
    """Loosely coerce ``value`` to a boolean.

    Booleans pass through, numbers are true when non-zero (so ``nan`` is
    true), ``None`` is false and anything else follows Python truthiness.

    :param value: Value to coerce.
    :return: Coerced boolean.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if value is None:
        return False
    return bool(value)


def parse_flag(value: Any) -> bool:
    """Parse a boolean flag while rejecting ambiguous values.

    :param value: Value to convert; accepts bools or truthy/falsy strings.
    :return: Parsed boolean value.
    :raises ValueError: If ``value`` cannot be interpreted as a boolean.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        s = value.strip().lower()
        if s in _FLAG_TRUE:
            return True
        if s in _FLAG_FALSE:
            return False
    raise ValueError(f"Cannot strictly parse bool from: {value!r}")
