import pathlib
from typing import Any, List

import yaml
import pytest

from truthcast.configs.env_config import Env
from truthcast.utils.truth import TruthEvaluator, set_default_evaluator

ENV_VARS = {
    "TRUTHY_VALUES": "TRUTHY_VALUES",
    "LOG_ENABLED": "TRUTH_LOG_ENABLED",
    "LOG_LEVEL": "TRUTH_LOG_LEVEL",
    "LOG_STDOUT": "TRUTH_LOG_STDOUT",
    "LOG_DIR": "TRUTH_LOG_DIR",
}


class DummyLogger:
    def __init__(self) -> None:
        self.records: List[tuple[str, str]] = []

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.records.append(("debug", msg))

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.records.append(("warning", msg))

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self.records.append(("error", msg))


@pytest.fixture(scope="session")
def truthy_lists():
    config_path = pathlib.Path(__file__).parent / "fixtures" / "truthy_lists.yaml"
    with config_path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def dummy_logger() -> DummyLogger:
    return DummyLogger()


@pytest.fixture
def evaluator() -> TruthEvaluator:
    return TruthEvaluator()


@pytest.fixture(autouse=True)
def fresh_default_evaluator():
    set_default_evaluator(None)
    yield
    set_default_evaluator(None)


@pytest.fixture
def env(monkeypatch, tmp_path):
    """Isolate ``Env`` and the TRUTH* variables; run from an empty directory."""
    for attr, var in ENV_VARS.items():
        monkeypatch.setattr(Env, attr, getattr(Env, attr))
        # setenv first so the variable is restored (or removed) afterwards.
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    monkeypatch.chdir(tmp_path)
    return monkeypatch
