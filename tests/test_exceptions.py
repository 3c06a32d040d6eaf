import logging
from unittest.mock import patch

import pytest

from decaes_runner.core.exceptions import (
    ConfigurationError,
    DecaesRunnerError,
    InvalidArgumentType,
    InvalidThreadCount,
    MissingInputError,
    ToolNotFound,
    UnsupportedArgumentType,
    with_error_handling,
)


@with_error_handling
def _fail_runner() -> None:
    raise InvalidThreadCount("abc")


@with_error_handling
def _fail_other() -> None:
    raise ValueError("boom")


def test_with_error_handling_reraises_runner_error_unchanged() -> None:
    with pytest.raises(InvalidThreadCount) as excinfo:
        _fail_runner()
    assert excinfo.value.value == "abc"


def test_with_error_handling_does_not_wrap_other_errors() -> None:
    with pytest.raises(ValueError, match="boom"):
        _fail_other()


def test_with_error_handling_logs_error() -> None:
    with patch("decaes_runner.core.exceptions.get_logger") as mock_get_logger:
        mock_logger = logging.getLogger("test")
        mock_get_logger.return_value = mock_logger
        with pytest.raises(InvalidThreadCount):
            _fail_runner()
        assert mock_get_logger.called


@pytest.mark.parametrize(
    "error_type",
    [
        ConfigurationError,
        InvalidThreadCount,
        InvalidArgumentType,
        UnsupportedArgumentType,
        MissingInputError,
        ToolNotFound,
    ],
)
def test_all_errors_share_base_class(error_type) -> None:
    assert issubclass(error_type, DecaesRunnerError)


def test_builtin_bases_for_existing_handlers() -> None:
    assert issubclass(InvalidThreadCount, ValueError)
    assert issubclass(InvalidArgumentType, TypeError)
    assert issubclass(UnsupportedArgumentType, TypeError)
    assert issubclass(ToolNotFound, FileNotFoundError)


def test_unsupported_argument_type_carries_position() -> None:
    error = UnsupportedArgumentType(3, {"a": 1})
    assert error.position == 3
    assert error.value == {"a": 1}
    assert "Argument 3" in str(error)
    assert "dict" in str(error)


def test_tool_not_found_message() -> None:
    error = ToolNotFound("julia")
    assert error.binary == "julia"
    assert "julia" in str(error)
