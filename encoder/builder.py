"""
Tree builder: recursively classifies a value into a node tree.
"""
import logging
from typing import Any

from encoder.classifier import (
    Kind,
    COMPOSITE_KINDS,
    SCALAR_KINDS,
    encode_scalar,
    is_empty_value,
    kind_of_value,
    marshal_value,
    raise_unsupported,
    type_name,
)
from encoder.errors import EncodeError
from encoder.fields import field_info, struct_members
from encoder.marshal import find_marshaler
from encoder.node import Node
from encoder.options import Options

logger = logging.getLogger(__name__)


class TreeBuilder:
    """Builds the node tree of a value under a fixed set of options."""

    def __init__(self, options: Options):
        """
        Initialize tree builder.

        Args:
            options: Validated encoding options
        """
        self.options = options

    def build(self, value: Any) -> Node:
        """
        Build the node tree for value.

        Raises:
            UnsupportedKindError: value (or something inside it) has no form
            MarshalError: a custom textual form conversion failed
        """
        kind = kind_of_value(value)

        text = marshal_value(value)
        if text is not None:
            return text
        if not self.options.zeros and is_empty_value(value, kind):
            return ""

        if kind is Kind.NONE:
            # Nothing to point at; even kept zeros render as empty.
            return ""
        if kind is Kind.ENUM:
            return self.build(value.value)
        if kind in SCALAR_KINDS:
            return encode_scalar(value, kind)
        if kind in COMPOSITE_KINDS:
            return self._build_composite(value, kind)
        raise_unsupported(value, kind)

    def build_root(self, value: Any) -> Node:
        """
        Build the tree of a top-level value.

        A composite at the root is never collapsed to "" when it is zero:
        there is no key to hold that empty string, so its entries are built
        (and an all-omitted composite yields no pairs at all).
        """
        kind = kind_of_value(value)
        if kind in COMPOSITE_KINDS and find_marshaler(value) is None:
            return self._build_composite(value, kind)
        return self.build(value)

    def _build_composite(self, value: Any, kind: Kind) -> Node:
        if kind is Kind.STRUCT:
            return self._build_struct(value)
        if kind is Kind.MAP:
            return self._build_map(value)
        if kind is Kind.SET:
            return self._build_sequence(sorted(value, key=repr))
        return self._build_sequence(value)

    def _build_struct(self, value: Any) -> Node:
        node = {}
        for member in struct_members(value):
            key, omitempty = field_info(self.options, member)
            if key == self.options.omitted_key:
                continue
            field_value = getattr(value, member.attr)
            if omitempty and is_empty_value(field_value):
                node.pop(key, None)
            else:
                node[key] = self.build(field_value)
        return node

    def _build_map(self, value: Any) -> Node:
        node = {}
        for map_key, map_value in value.items():
            key = self.build(map_key)
            if not isinstance(key, str):
                raise EncodeError(
                    f"map key of type {type_name(map_key)} does not encode to a scalar",
                    type_name(map_key),
                    kind_of_value(map_key).value,
                )
            # Keys that render alike collide; the last one wins.
            node[key] = self.build(map_value)
        return node

    def _build_sequence(self, value: Any) -> Node:
        return {str(i): self.build(element) for i, element in enumerate(value)}


def build_tree(value: Any, options: Options) -> Node:
    """
    Build the node tree of value, turning any unexpected failure into an
    EncodeError so that callers see a single error type.
    """
    try:
        node = TreeBuilder(options).build_root(value)
    except EncodeError:
        raise
    except RecursionError as e:
        raise EncodeError(
            f"{type_name(value)} is nested too deeply (or contains itself)",
            type_name(value),
            kind_of_value(value).value,
        ) from e
    except Exception as e:
        raise EncodeError(f"could not encode {type_name(value)}: {e}", type_name(value)) from e

    logger.debug(f"Built form tree for {type_name(value)}")
    return node
