"""Exception-safe boolean conversion with configurable truthy values."""

from truthcast.utils.safe import safe_bool, safe_get
from truthcast.utils.truth import (
    DEFAULT_TRUTHY_VALUES,
    TruthEvaluator,
    configure,
    evaluate,
    get_default_evaluator,
    set_default_evaluator,
)

__all__ = [
    "DEFAULT_TRUTHY_VALUES",
    "TruthEvaluator",
    "configure",
    "evaluate",
    "get_default_evaluator",
    "safe_bool",
    "safe_get",
    "set_default_evaluator",
]
