"""
Exceptions raised by the form encoder.

Three families exist: configuration errors (checked before any encoding),
value errors (raised while building the tree) and sink errors (the output
stream did not take everything).
"""
from typing import Optional


class FormError(Exception):
    """Base class for every error raised by the encoder."""


class OptionsError(FormError, ValueError):
    """Options failed validation."""

    message = "invalid options"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class InvalidOptionsError(OptionsError):
    message = "options are entirely zero-valued"


class InvalidDelimiterError(OptionsError):
    message = "delimiter must be a single non-NUL character"


class InvalidEscapeError(OptionsError):
    message = "escape must be a single non-NUL character"


class InvalidImplicitKeyError(OptionsError):
    message = "implicit key must not be empty"


class InvalidOmittedKeyError(OptionsError):
    message = "omitted key must not be empty"


class EncodeError(FormError):
    """A value could not be encoded."""

    def __init__(self, message: str, type_name: str = "", kind: str = ""):
        super().__init__(message)
        self.type_name = type_name
        self.kind = kind


class UnsupportedKindError(EncodeError):
    """The value belongs to a kind with no form representation."""

    def __init__(self, type_name: str, kind: str):
        super().__init__(f"{type_name} has unsupported kind {kind}", type_name, kind)


class MarshalError(EncodeError):
    """A custom textual form conversion failed."""

    def __init__(self, type_name: str, cause: Exception):
        super().__init__(f"{type_name} could not be marshaled to text: {cause}", type_name, "marshaler")
        self.cause = cause


class ShortWriteError(FormError):
    """The output stream accepted fewer characters than were produced."""

    def __init__(self, written: int, expected: int):
        super().__init__(f"could not write data completely ({written} of {expected})")
        self.written = written
        self.expected = expected
