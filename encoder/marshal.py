"""
Custom textual form capability.

A type opts in by subclassing (or registering with) TextMarshaler, or by
having a conversion function registered for it with register_marshaler().
"""
import datetime
import uuid
from abc import ABC, abstractmethod
from pathlib import PurePath
from typing import Any, Callable, Dict, Optional, Union

Text = Union[str, bytes]
Marshaler = Callable[[Any], Text]

# Process-wide registry; register types before encoding concurrently.
_marshalers: Dict[type, Marshaler] = {}


class TextMarshaler(ABC):
    """Values that know how to render themselves as a single string."""

    @abstractmethod
    def marshal_text(self) -> Text:
        ...


def register_marshaler(cls: type, func: Marshaler) -> None:
    """
    Register func as the textual form for instances of cls (and subclasses).

    Args:
        cls: The type to register
        func: Callable taking the value and returning str or bytes
    """
    _marshalers[cls] = func


def unregister_marshaler(cls: type) -> None:
    _marshalers.pop(cls, None)


def skip_text_marshaling(cls: type) -> bool:
    # Dates and times always use the built-in layouts.
    return issubclass(cls, (datetime.date, datetime.time))


def find_marshaler(value: Any) -> Optional[Marshaler]:
    """Return the textual form function that applies to value, if any."""
    cls = type(value)
    if skip_text_marshaling(cls):
        return None
    if isinstance(value, TextMarshaler):
        return type(value).marshal_text
    for base in cls.__mro__:
        func = _marshalers.get(base)
        if func is not None:
            return func
    return None


register_marshaler(uuid.UUID, str)
register_marshaler(PurePath, str)
