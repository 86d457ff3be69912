"""
Form encoding engine: typed values to flat, delimited form key/value pairs.
"""
from encoder.errors import (
    FormError,
    OptionsError,
    InvalidOptionsError,
    InvalidDelimiterError,
    InvalidEscapeError,
    InvalidImplicitKeyError,
    InvalidOmittedKeyError,
    EncodeError,
    UnsupportedKindError,
    MarshalError,
    ShortWriteError,
)
from encoder.options import Options, DEFAULT
from encoder.marshal import TextMarshaler, register_marshaler
from encoder.fields import form_field, find_field
from encoder.node import escape_segment, unescape_segment, split_key
from encoder.form_encoder import (
    Encoder,
    encode_to_string,
    encode_to_string_with,
    encode_to_values,
    encode_to_values_with,
    encode_to_pairs,
)
