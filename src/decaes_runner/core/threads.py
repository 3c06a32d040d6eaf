"""Thread count validation."""

import math
import numbers
from typing import Any, Union

import numpy as np

from .exceptions import InvalidArgumentType, InvalidThreadCount


def _parse_text(text: str) -> Union[int, float]:
    stripped = text.strip()
    try:
        return int(stripped)
    except ValueError:
        pass
    try:
        return float(stripped)
    except ValueError:
        raise InvalidThreadCount(text) from None


def check_nthreads(nthreads: Any) -> str:
    """
    Validate a thread count and normalize it for ``JULIA_NUM_THREADS``.

    Args:
        nthreads: Positive integer given as a number or as text. Whole
            floats such as ``4.0`` (or ``"4.0"``) are accepted.

    Returns:
        Decimal integer text, e.g. ``"4"``.

    Raises:
        InvalidThreadCount: Non-positive, non-integral or unparseable value.
        InvalidArgumentType: Value is neither text nor a real number.
    """
    if isinstance(nthreads, (bool, np.bool_)):
        raise InvalidArgumentType(nthreads)

    value: Union[int, float]
    if isinstance(nthreads, str):
        value = _parse_text(nthreads)
    elif isinstance(nthreads, numbers.Integral):
        value = int(nthreads)
    elif isinstance(nthreads, numbers.Real):
        value = float(nthreads)
    elif (
        isinstance(nthreads, np.ndarray)
        and nthreads.ndim == 0
        and nthreads.dtype.kind in "iuf"
    ):
        value = nthreads.item()
    else:
        raise InvalidArgumentType(nthreads)

    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise InvalidThreadCount(nthreads)
        value = int(value)

    if value <= 0:
        raise InvalidThreadCount(nthreads)

    return str(value)
