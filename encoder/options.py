"""
Options controlling how values are encoded to forms.
"""
from dataclasses import dataclass, fields, replace

from encoder import settings
from encoder.errors import (
    OptionsError,
    InvalidOptionsError,
    InvalidDelimiterError,
    InvalidEscapeError,
    InvalidImplicitKeyError,
    InvalidOmittedKeyError,
)

STANDARD_DELIMITER = "."
STANDARD_ESCAPE = "\\"
STANDARD_IMPLICIT_KEY = "_"
STANDARD_OMITTED_KEY = "-"


def _is_valid_rune(value: str) -> bool:
    return isinstance(value, str) and len(value) == 1 and value != "\x00"


@dataclass(frozen=True)
class Options:
    """
    Behavioral switches shared by the encoder and its decoder counterpart.

    Attributes:
        zeros: Keep zero values in their literal form instead of ""
        tolerant: Tolerate malformed input when decoding
        caseless: Fall back to case-insensitive field name matching
        delimiter: Separator between composite key segments
        escape: Character used to escape the delimiter and itself
        implicit_key: Marker for positions with no natural key
        omitted_key: Field name that drops a field entirely
    """
    zeros: bool = False
    tolerant: bool = False
    caseless: bool = False
    delimiter: str = STANDARD_DELIMITER
    escape: str = STANDARD_ESCAPE
    implicit_key: str = STANDARD_IMPLICIT_KEY
    omitted_key: str = STANDARD_OMITTED_KEY

    @classmethod
    def zero(cls) -> "Options":
        """Return the entirely zero-valued options, which never validate."""
        return cls(False, False, False, "", "", "", "")

    @classmethod
    def from_env(cls) -> "Options":
        """Build options from the FORM_* environment settings."""
        return cls(
            zeros=settings.FORM_KEEP_ZEROS,
            tolerant=settings.FORM_TOLERANT,
            caseless=settings.FORM_CASELESS,
            delimiter=settings.FORM_DELIMITER,
            escape=settings.FORM_ESCAPE,
            implicit_key=settings.FORM_IMPLICIT_KEY,
            omitted_key=settings.FORM_OMITTED_KEY,
        )

    def validate(self) -> None:
        """
        Check the options, raising the first problem found.

        Raises:
            InvalidOptionsError: every field is zero-valued
            InvalidDelimiterError: delimiter is not a single non-NUL character
            InvalidEscapeError: escape is not a single non-NUL character, or
                equals the delimiter
            InvalidImplicitKeyError: implicit key is empty
            InvalidOmittedKeyError: omitted key is empty
        """
        if not any(getattr(self, f.name) for f in fields(self)):
            raise InvalidOptionsError()
        if not _is_valid_rune(self.delimiter):
            raise InvalidDelimiterError()
        if not _is_valid_rune(self.escape):
            raise InvalidEscapeError()
        if self.escape == self.delimiter:
            # An escaped delimiter would be indistinguishable from a bare one.
            raise InvalidEscapeError("escape must differ from the delimiter")
        if not self.implicit_key:
            raise InvalidImplicitKeyError()
        if not self.omitted_key:
            raise InvalidOmittedKeyError()

    def is_valid(self) -> bool:
        try:
            self.validate()
        except OptionsError:
            return False
        return True

    def with_delimiter(self, delimiter: str) -> "Options":
        return replace(self, delimiter=delimiter)

    def with_escape(self, escape: str) -> "Options":
        return replace(self, escape=escape)

    def with_zeros(self, zeros: bool) -> "Options":
        return replace(self, zeros=zeros)

    def with_caseless(self, caseless: bool) -> "Options":
        return replace(self, caseless=caseless)

    def with_tolerant(self, tolerant: bool) -> "Options":
        return replace(self, tolerant=tolerant)


# Process-wide defaults. Not synchronized: set once, before any concurrent
# encoding starts, and treat as read-only afterwards.
DEFAULT = Options.from_env()
