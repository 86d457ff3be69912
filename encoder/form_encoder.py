"""
Public entry points: encode values to form strings, value maps, or streams.
"""
import io
import logging
from dataclasses import replace
from typing import Any, BinaryIO, Dict, List, Optional, TextIO, Union

from encoder.builder import build_tree
from encoder.classifier import type_name
from encoder.errors import EncodeError, FormError, ShortWriteError
from encoder.node import Pair, flatten, to_values
from encoder.options import Options
from encoder import options as options_module
from encoder.wire import encode_pairs

logger = logging.getLogger(__name__)


def _resolve(options: Optional[Options]) -> Options:
    # Read DEFAULT at call time so reconfiguring it takes effect.
    resolved = options if options is not None else options_module.DEFAULT
    resolved.validate()
    return resolved


def encode_to_pairs(value: Any, options: Optional[Options] = None) -> List[Pair]:
    """
    Encode value to flattened (composite key, value) pairs in tree order.

    Args:
        value: The value to encode
        options: Encoding options; DEFAULT when omitted

    Returns:
        The pairs, depth-first in construction order

    Raises:
        OptionsError: the options are invalid
        EncodeError: the value cannot be encoded
    """
    options = _resolve(options)
    node = build_tree(value, options)
    try:
        return flatten(node, options.delimiter, options.escape)
    except Exception as e:
        raise EncodeError(f"could not flatten {type_name(value)}: {e}", type_name(value)) from e


def encode_to_string(value: Any) -> str:
    """Encode value as a form string using the default options."""
    return encode_to_string_with(value, None)


def encode_to_string_with(value: Any, options: Optional[Options]) -> str:
    """Encode value as a form string using options."""
    pairs = encode_to_pairs(value, options)
    try:
        return encode_pairs(pairs)
    except FormError:
        raise
    except Exception as e:
        # e.g. lone surrogates that have no UTF-8 encoding
        raise EncodeError(f"could not encode {type_name(value)} as a form: {e}", type_name(value)) from e


def encode_to_values(value: Any) -> Dict[str, List[str]]:
    """Encode value as a key -> values mapping using the default options."""
    return encode_to_values_with(value, None)


def encode_to_values_with(value: Any, options: Optional[Options]) -> Dict[str, List[str]]:
    """Encode value as a key -> values mapping using options."""
    return to_values(encode_to_pairs(value, options))


class Encoder:
    """Encodes values as forms and writes them to a stream."""

    def __init__(self, stream: Union[TextIO, BinaryIO], options: Optional[Options] = None):
        """
        Initialize encoder.

        Args:
            stream: Text or binary stream receiving each encoded form
            options: Encoding options; DEFAULT when omitted
        """
        self.stream = stream
        self.options = options if options is not None else options_module.DEFAULT

    def delimit_with(self, delimiter: str) -> "Encoder":
        """Set the composite key delimiter ('.' by default)."""
        self.options = replace(self.options, delimiter=delimiter)
        return self

    def escape_with(self, escape: str) -> "Encoder":
        """Set the character escaping delimiters and itself ('\\' by default)."""
        self.options = replace(self.options, escape=escape)
        return self

    def keep_zeros(self, zeros: bool) -> "Encoder":
        """Keep zero values in literal form instead of encoding them as ""."""
        self.options = replace(self.options, zeros=zeros)
        return self

    def encode(self, value: Any) -> None:
        """
        Encode value and write it to the stream in a single write.

        Nothing is written if encoding fails.

        Raises:
            OptionsError: the options are invalid
            EncodeError: the value cannot be encoded
            ShortWriteError: the stream accepted only part of the output
        """
        data = encode_to_string_with(value, self.options)
        if isinstance(self.stream, (io.RawIOBase, io.BufferedIOBase)):
            payload = data.encode("ascii")
        else:
            payload = data

        written = self.stream.write(payload)
        if written is not None and written != len(payload):
            raise ShortWriteError(written, len(payload))
        logger.debug(f"Wrote {len(payload)} characters of form data")
