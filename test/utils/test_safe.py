import pytest

from truthcast.utils.safe import safe_bool, safe_get


def boom():
    raise ValueError("boom")


def test_safe_get_returns_operation_result():
    assert safe_get(lambda: 42, 0) == 42


def test_safe_get_applies_cast():
    assert safe_get(lambda: "7", 0, int) == 7


def test_safe_get_returns_default_on_failure():
    assert safe_get(boom, "fallback") == "fallback"


def test_safe_get_recovers_failing_cast():
    assert safe_get(lambda: "seven", -1, int) == -1


def test_safe_get_logs_failure(dummy_logger):
    assert safe_get(boom, None, logger=dummy_logger) is None

    level, msg = dummy_logger.records[0]
    assert level == "error"
    assert msg.startswith("EXCEPTION in boom: ValueError: boom")
    assert "Traceback" in msg


def test_safe_get_uses_given_context(dummy_logger):
    safe_get(boom, None, logger=dummy_logger, context="parsing flags")
    assert dummy_logger.records[0][1].startswith("EXCEPTION in parsing flags:")


def test_safe_get_lets_base_exceptions_through():
    def interrupt():
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        safe_get(interrupt, False)


@pytest.mark.parametrize(
    "result, expected",
    [(True, True), (False, False), (2, True), (0, False), (0.0, False),
     (float("nan"), True), (None, False), ("", False), ("no", True), ([], False)],
)
def test_safe_bool_coerces_result(result, expected):
    assert safe_bool(lambda: result) is expected


def test_safe_bool_default():
    assert safe_bool(boom) is False
    assert safe_bool(boom, True) is True
