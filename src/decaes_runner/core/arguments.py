"""Serialization of forwarded arguments into command line tokens."""

import math
import numbers
import os
from typing import Annotated, Any, Iterator, List, Literal, Sequence, Union

import numpy as np
from pydantic import BaseModel, Field, StrictFloat, StrictInt

from .exceptions import UnsupportedArgumentType

Number = Union[StrictInt, StrictFloat]


def format_number(value: Union[bool, int, float]) -> str:
    """
    Format a numeric value as a single token.

    Integers are written as plain decimal digits. Floats use the shortest
    text that round-trips (``0.007``, ``2.0``, ``1e-20``); non-finite values
    use Julia's spelling (``NaN``, ``Inf``, ``-Inf``).
    """
    if isinstance(value, (bool, np.bool_)):
        return str(int(value))
    if isinstance(value, numbers.Integral):
        return str(int(value))
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Inf" if value > 0 else "-Inf"
    return repr(value)


class TextArgument(BaseModel):
    """Text forwarded as one token, unchanged."""

    kind: Literal["text"] = "text"
    value: str

    def tokens(self) -> List[str]:
        return [self.value]


class FlagArgument(BaseModel):
    """Boolean forwarded as ``0`` or ``1``."""

    kind: Literal["flag"] = "flag"
    value: bool

    def tokens(self) -> List[str]:
        return [format_number(int(self.value))]


class NumberArgument(BaseModel):
    """Numeric scalar forwarded as one token."""

    kind: Literal["number"] = "number"
    value: Number

    def tokens(self) -> List[str]:
        return [format_number(self.value)]


class NumberArrayArgument(BaseModel):
    """Numeric array forwarded as one token per element."""

    kind: Literal["array"] = "array"
    values: List[Number] = Field(default_factory=list)

    def tokens(self) -> List[str]:
        return [format_number(v) for v in self.values]


Argument = Annotated[
    Union[TextArgument, FlagArgument, NumberArgument, NumberArrayArgument],
    Field(discriminator="kind"),
]


def _as_python_number(value: Any) -> Union[int, float]:
    if isinstance(value, (bool, np.bool_)):
        return int(value)
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, np.floating) and not isinstance(value, np.float64):
        # float32(0.1) should print as 0.1, not 0.10000000149011612
        return float(str(value))
    return float(value)


def _is_numeric_scalar(value: Any) -> bool:
    return isinstance(value, (numbers.Real, np.bool_)) and not isinstance(
        value, np.ndarray
    )


def _flatten_numeric(value: Any, position: int) -> Iterator[Union[int, float]]:
    if isinstance(value, np.ndarray):
        if value.dtype.kind not in "biuf":
            raise UnsupportedArgumentType(position, value)
        for element in value.ravel():
            yield _as_python_number(element)
        return
    for element in value:
        if isinstance(element, (list, tuple, np.ndarray)):
            yield from _flatten_numeric(element, position)
        elif _is_numeric_scalar(element):
            yield _as_python_number(element)
        else:
            raise UnsupportedArgumentType(position, value)


def classify_argument(value: Any, position: int) -> Argument:
    """
    Map a raw argument onto its tagged variant.

    Args:
        value: Raw argument value.
        position: 1-based position of the argument, used in error messages.

    Raises:
        UnsupportedArgumentType: Value is not text, boolean, numeric or an
            array of numeric values.
    """
    if isinstance(value, str):
        return TextArgument(value=value)
    if isinstance(value, os.PathLike):
        path = os.fspath(value)
        if isinstance(path, str):
            return TextArgument(value=path)
        raise UnsupportedArgumentType(position, value)
    if isinstance(value, (bool, np.bool_)):
        return FlagArgument(value=bool(value))
    if _is_numeric_scalar(value):
        return NumberArgument(value=_as_python_number(value))
    if isinstance(value, (list, tuple, np.ndarray)):
        return NumberArrayArgument(values=list(_flatten_numeric(value, position)))
    raise UnsupportedArgumentType(position, value)


def serialize_arguments(args: Sequence[Any]) -> List[str]:
    """Flatten forwarded arguments into command line tokens, in order."""
    tokens: List[str] = []
    for position, value in enumerate(args, start=1):
        tokens.extend(classify_argument(value, position).tokens())
    return tokens
