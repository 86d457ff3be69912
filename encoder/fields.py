"""
Struct field descriptors: tag parsing, member enumeration and field lookup.

A struct is a dataclass, a named tuple, or a plain object carrying its
attributes in __dict__. Dataclass fields take a form tag of the shape
"name" or "name,omitempty" through form_field().
"""
import dataclasses
from functools import lru_cache
from typing import Any, List, NamedTuple, Optional, Tuple

from encoder.options import Options

TAG_KEY = "form"
EMBEDDED_KEY = "form_embedded"
OMITEMPTY = "omitempty"


class Member(NamedTuple):
    attr: str
    tag: str = ""
    embedded: bool = False


class FieldInfo(NamedTuple):
    key: str
    omitempty: bool


class FieldMatch(NamedTuple):
    """A field found by name: the object holding it and its attribute."""
    owner: Any
    attr: str
    key: str

    @property
    def value(self) -> Any:
        return getattr(self.owner, self.attr)


def form_field(tag: str = "", *, embedded: bool = False, **kwargs) -> Any:
    """
    Declare a dataclass field with a form tag.

    Args:
        tag: "name", "name,omitempty" or ",omitempty"; the omitted key ("-")
            as name drops the field
        embedded: Treat the field as an embedded struct whose fields can be
            found by name from the outer struct
        **kwargs: Passed through to dataclasses.field

    Returns:
        The dataclass field
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    if tag:
        metadata[TAG_KEY] = tag
    if embedded:
        metadata[EMBEDDED_KEY] = True
    return dataclasses.field(metadata=metadata, **kwargs)


def is_struct_type(cls: type) -> bool:
    """Dataclasses and named tuples; plain objects are recognized by kind."""
    if dataclasses.is_dataclass(cls):
        return True
    return issubclass(cls, tuple) and hasattr(cls, "_fields")


@lru_cache(maxsize=None)
def _dataclass_members(cls: type) -> Tuple[Member, ...]:
    return tuple(
        Member(f.name, f.metadata.get(TAG_KEY, ""), bool(f.metadata.get(EMBEDDED_KEY, False)))
        for f in dataclasses.fields(cls)
    )


def struct_members(value: Any) -> Tuple[Member, ...]:
    """Return the members of a struct value in declaration order."""
    cls = type(value)
    if dataclasses.is_dataclass(cls):
        return _dataclass_members(cls)
    if issubclass(cls, tuple) and hasattr(cls, "_fields"):
        return tuple(Member(name) for name in cls._fields)
    return tuple(Member(name) for name in vars(value))


def struct_values(value: Any) -> List[Any]:
    return [getattr(value, member.attr) for member in struct_members(value)]


def parse_tag(tag: str) -> Tuple[str, bool]:
    name, _, flags = tag.partition(",")
    return name, OMITEMPTY in flags.split(",")


def field_info(options: Options, member: Member) -> FieldInfo:
    """
    Resolve the form key of a struct member and whether it is omitempty.

    Private members (leading underscore) resolve to the omitted key.
    """
    if member.attr.startswith("_"):
        return FieldInfo(options.omitted_key, False)
    if not member.tag:
        return FieldInfo(member.attr, False)

    name, omitempty = parse_tag(member.tag)
    return FieldInfo(name or member.attr, omitempty)


def find_field(options: Options, obj: Any, name: str) -> Optional[FieldMatch]:
    """
    Find the field of struct obj that a form key segment refers to.

    Lookup order: an exact match on a visible field, then (with caseless
    options) the first case-insensitive match, then a depth-first search of
    embedded struct fields.

    Args:
        options: Encoding options (caseless and omitted_key are used)
        obj: The struct to search
        name: Key segment to resolve

    Returns:
        The matching field, or None
    """
    members = struct_members(obj)
    lower_name = name.lower() if options.caseless else None
    caseless_match = None

    for member in members:
        key, _ = field_info(options, member)
        if key == options.omitted_key:
            continue
        if key == name:
            return FieldMatch(obj, member.attr, key)
        if caseless_match is None and lower_name is not None and key.lower() == lower_name:
            caseless_match = FieldMatch(obj, member.attr, key)

    if caseless_match is not None:
        return caseless_match

    for member in members:
        if not member.embedded:
            continue
        key, _ = field_info(options, member)
        if key == options.omitted_key:
            continue
        inner = getattr(obj, member.attr)
        if inner is None or not is_struct_type(type(inner)):
            continue
        found = find_field(options, inner, name)
        if found is not None:
            return found

    return None
