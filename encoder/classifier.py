"""
Value classification: decides whether a value is a scalar, a composite, or
something the form encoding cannot represent, and renders scalars as text.
"""
import asyncio
import collections.abc
import datetime
import math
import queue
import types
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Any, Optional
from urllib.parse import DefragResult, ParseResult, SplitResult

from encoder.errors import MarshalError, UnsupportedKindError
from encoder.fields import is_struct_type, struct_values
from encoder.marshal import find_marshaler


class Kind(Enum):
    NONE = "none"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    COMPLEX = "complex"
    DECIMAL = "decimal"
    STRING = "string"
    BYTES = "bytes"
    TIME = "time"
    DATE = "date"
    CLOCK = "clock"
    URL = "url"
    ENUM = "enum"
    STRUCT = "struct"
    MAP = "map"
    SEQUENCE = "sequence"
    SET = "set"
    FUNC = "func"
    CHAN = "chan"
    ITERATOR = "iterator"
    TYPE = "type"
    MODULE = "module"
    UNSUPPORTED = "unsupported"


SCALAR_KINDS = frozenset({
    Kind.BOOL, Kind.INT, Kind.FLOAT, Kind.COMPLEX, Kind.DECIMAL, Kind.STRING,
    Kind.BYTES, Kind.TIME, Kind.DATE, Kind.CLOCK, Kind.URL,
})
COMPOSITE_KINDS = frozenset({Kind.STRUCT, Kind.MAP, Kind.SEQUENCE, Kind.SET})
UNSUPPORTED_KINDS = frozenset({
    Kind.FUNC, Kind.CHAN, Kind.ITERATOR, Kind.TYPE, Kind.MODULE, Kind.UNSUPPORTED,
})

URL_TYPES = (ParseResult, SplitResult, DefragResult)
CHANNEL_TYPES = (queue.Queue, queue.SimpleQueue, asyncio.Queue)
ITERATOR_TYPES = (
    types.GeneratorType,
    types.CoroutineType,
    types.AsyncGeneratorType,
    collections.abc.Iterator,
    collections.abc.AsyncIterator,
)

_ZERO_DATETIME = datetime.datetime.min
_ZERO_OFFSET = datetime.timedelta(0)


def _defines(cls: type, attr: str) -> bool:
    return any(attr in vars(base) for base in cls.__mro__)


@lru_cache(maxsize=None)
def kind_of(cls: type) -> Kind:
    """
    Resolve the kind of a concrete type.

    The result only depends on the type, so it is computed once per type.
    """
    if cls is type(None):
        return Kind.NONE
    if issubclass(cls, Enum):
        return Kind.ENUM
    if issubclass(cls, bool):
        return Kind.BOOL
    if issubclass(cls, int):
        return Kind.INT
    if issubclass(cls, float):
        return Kind.FLOAT
    if issubclass(cls, complex):
        return Kind.COMPLEX
    if issubclass(cls, Decimal):
        return Kind.DECIMAL
    if issubclass(cls, str):
        return Kind.STRING
    if issubclass(cls, (bytes, bytearray, memoryview)):
        return Kind.BYTES
    if issubclass(cls, datetime.datetime):
        return Kind.TIME
    if issubclass(cls, datetime.date):
        return Kind.DATE
    if issubclass(cls, datetime.time):
        return Kind.CLOCK
    if issubclass(cls, URL_TYPES):
        return Kind.URL
    if issubclass(cls, type):
        return Kind.TYPE
    if issubclass(cls, types.ModuleType):
        return Kind.MODULE
    if issubclass(cls, collections.abc.Mapping):
        return Kind.MAP
    if is_struct_type(cls):
        return Kind.STRUCT
    if issubclass(cls, CHANNEL_TYPES):
        return Kind.CHAN
    if issubclass(cls, ITERATOR_TYPES):
        return Kind.ITERATOR
    if issubclass(cls, collections.abc.Sequence):
        return Kind.SEQUENCE
    if issubclass(cls, collections.abc.Set):
        return Kind.SET
    if _defines(cls, "__call__"):
        return Kind.FUNC
    if _defines(cls, "__dict__"):
        return Kind.STRUCT
    return Kind.UNSUPPORTED


def kind_of_value(value: Any) -> Kind:
    return kind_of(type(value))


def type_name(value: Any) -> str:
    cls = type(value)
    if cls.__module__ in ("builtins", None):
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def raise_unsupported(value: Any, kind: Kind) -> None:
    raise UnsupportedKindError(type_name(value), kind.value)


def marshal_value(value: Any) -> Optional[str]:
    """
    Render value through its custom textual form, if it has one.

    Returns:
        The text, or None when value has no custom textual form

    Raises:
        MarshalError: the conversion raised or did not return text
    """
    func = find_marshaler(value)
    if func is None:
        return None
    try:
        text = func(value)
    except Exception as e:
        raise MarshalError(type_name(value), e) from e
    if isinstance(text, (bytes, bytearray)):
        return bytes(text).decode("utf-8", "surrogateescape")
    if not isinstance(text, str):
        cause = TypeError(f"text form must be str or bytes, not {type(text).__name__}")
        raise MarshalError(type_name(value), cause)
    return text


def is_empty_value(value: Any, kind: Optional[Kind] = None) -> bool:
    """Report whether value is the zero value of its kind."""
    if kind is None:
        kind = kind_of_value(value)

    if kind is Kind.NONE:
        return True
    if kind is Kind.BOOL:
        return not value
    if kind in (Kind.INT, Kind.FLOAT, Kind.COMPLEX, Kind.DECIMAL):
        return value == 0
    if kind in (Kind.STRING, Kind.BYTES, Kind.MAP, Kind.SEQUENCE, Kind.SET):
        return len(value) == 0
    if kind is Kind.TIME:
        return value.replace(tzinfo=None) == _ZERO_DATETIME and _has_zero_offset(value)
    if kind is Kind.DATE:
        return value == datetime.date.min
    if kind is Kind.CLOCK:
        return _is_midnight(value) and _has_zero_offset(value)
    if kind is Kind.URL:
        return not any(value)
    if kind is Kind.ENUM:
        return is_empty_value(value.value)
    if kind is Kind.STRUCT:
        return all(is_empty_value(member) for member in struct_values(value))
    return False


def _has_zero_offset(value) -> bool:
    offset = value.utcoffset()
    return offset is None or offset == _ZERO_OFFSET


def _is_midnight(value) -> bool:
    return value.hour == 0 and value.minute == 0 and value.second == 0 and value.microsecond == 0


def format_float(value: float) -> str:
    """
    Format a float with the shortest digits that round-trip, switching to
    exponent notation for exponents below -4 or from 6 up.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    n = len(digits)
    point = n + exponent  # position of the decimal point within digits
    exp10 = point - 1
    prefix = "-" if sign else ""

    if exp10 < -4 or exp10 >= 6:
        mantissa = digits[0]
        if n > 1:
            mantissa += "." + digits[1:]
        exp_sign = "-" if exp10 < 0 else "+"
        return f"{prefix}{mantissa}e{exp_sign}{abs(exp10):02d}"

    if point <= 0:
        return f"{prefix}0.{'0' * -point}{digits}"
    if point >= n:
        return f"{prefix}{digits}{'0' * (point - n)}"
    return f"{prefix}{digits[:point]}.{digits[point:]}"


def format_complex(value: complex) -> str:
    real = format_float(value.real)
    imag = format_float(value.imag)
    if not imag.startswith(("+", "-")):
        imag = "+" + imag
    return f"{real}{imag}i"


def _format_offset(value) -> str:
    offset = value.utcoffset()
    if offset is None:
        return ""
    if offset == _ZERO_OFFSET:
        return "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def _format_clock(value) -> str:
    text = f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    return text + _format_offset(value)


def format_time(value: datetime.datetime) -> str:
    """
    Format a datetime using the narrowest layout that loses nothing.

    A datetime on 0001-01-01 is a time of day and renders time-only; one at
    exactly midnight renders date-only; anything else is a full timestamp.
    """
    if value.date() == datetime.date.min:
        return _format_clock(value)
    if _is_midnight(value):
        return format_date(value.date())
    return f"{format_date(value.date())}T{_format_clock(value)}"


def format_date(value: datetime.date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def encode_scalar(value: Any, kind: Kind) -> str:
    """Render a value of a scalar kind as its literal form text."""
    if kind is Kind.BOOL:
        return "true" if value else "false"
    if kind is Kind.INT:
        return str(int(value))
    if kind is Kind.FLOAT:
        return format_float(float(value))
    if kind is Kind.COMPLEX:
        return format_complex(complex(value))
    if kind is Kind.DECIMAL:
        return str(value)
    if kind is Kind.STRING:
        return str(value)
    if kind is Kind.BYTES:
        return bytes(value).decode("utf-8", "surrogateescape")
    if kind is Kind.TIME:
        return format_time(value)
    if kind is Kind.DATE:
        return format_date(value)
    if kind is Kind.CLOCK:
        return _format_clock(value)
    if kind is Kind.URL:
        return value.geturl()
    raise_unsupported(value, kind)


def can_index_ordinally(value: Any) -> bool:
    """Report whether value holds an ordered sequence of elements."""
    return kind_of_value(value) is Kind.SEQUENCE
