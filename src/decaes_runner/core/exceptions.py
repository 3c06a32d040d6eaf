"""Custom exceptions and error handling utilities for the DECAES runner."""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, TypeVar

from .logging_config import get_logger


class DecaesRunnerError(Exception):
    """Base exception for all DECAES runner errors."""


class ConfigurationError(DecaesRunnerError):
    """Error raised for invalid configuration options."""


class InvalidThreadCount(DecaesRunnerError, ValueError):
    """Thread count is non-positive, non-integral or unparseable."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Number of threads must be a positive integer; got {value!r}")
        self.value = value


class InvalidArgumentType(DecaesRunnerError, TypeError):
    """Thread count was given as something other than text or a number."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            "Number of threads must be a positive integer text or numeric value; "
            f"got {type(value).__name__}"
        )
        self.value = value


class UnsupportedArgumentType(DecaesRunnerError, TypeError):
    """A forwarded argument is not text, boolean, numeric or a numeric array."""

    def __init__(self, position: int, value: Any) -> None:
        super().__init__(
            f"Argument {position} has unsupported type {type(value).__name__}; "
            "arguments must be text, boolean or numeric values, or arrays of such values"
        )
        self.position = position
        self.value = value


class MissingInputError(DecaesRunnerError, ValueError):
    """No input image or settings file was forwarded."""


class ToolNotFound(DecaesRunnerError, FileNotFoundError):
    """The Julia executable could not be found on the search path."""

    def __init__(self, binary: str) -> None:
        super().__init__(f"Julia executable not found: {binary!r}")
        self.binary = binary


F = TypeVar("F", bound=Callable[..., Any])


def with_error_handling(func: F) -> F:
    """Log runner errors raised by ``func`` and re-raise them unchanged."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:  # type: ignore[override]
        logger = get_logger("decaes-runner")
        try:
            return func(*args, **kwargs)
        except DecaesRunnerError as exc:
            logger.error(f"{func.__name__} failed: {exc}")
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error(f"Unhandled error in {func.__name__}: {exc}", exc_info=True)
            raise

    return wrapper  # type: ignore[return-value]
