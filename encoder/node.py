"""
The intermediate tree and its flattening into delimited composite keys.

A node is either a scalar string or a dict of child nodes keyed by path
segment. Flattening walks the tree depth-first and joins escaped segments
with the delimiter.
"""
from typing import Dict, List, Tuple, Union

Node = Union[str, Dict[str, "Node"]]
Pair = Tuple[str, str]


def escape_segment(segment: str, delimiter: str, escape: str) -> str:
    """Prefix every delimiter and escape character in segment with escape."""
    if delimiter not in segment and escape not in segment:
        return segment
    return "".join(escape + c if c == delimiter or c == escape else c for c in segment)


def unescape_segment(segment: str, escape: str) -> str:
    """Drop the escape character in front of each escaped character."""
    chars = []
    escaped = False
    for c in segment:
        if c == escape and not escaped:
            escaped = True
            continue
        chars.append(c)
        escaped = False
    if escaped:
        # A trailing lone escape stands for itself.
        chars.append(escape)
    return "".join(chars)


def split_key(key: str, delimiter: str, escape: str) -> List[str]:
    """
    Split a composite key into its unescaped path segments.

    Args:
        key: The composite key, as produced by flatten()
        delimiter: Segment separator
        escape: Escape character

    Returns:
        The path segments, outermost first
    """
    segments = []
    current = []
    escaped = False
    for c in key:
        if escaped:
            current.append(c)
            escaped = False
        elif c == escape:
            escaped = True
        elif c == delimiter:
            segments.append("".join(current))
            current = []
        else:
            current.append(c)
    if escaped:
        current.append(escape)
    segments.append("".join(current))
    return segments


def flatten(node: Node, delimiter: str, escape: str) -> List[Pair]:
    """
    Flatten a node tree into (composite key, value) pairs in tree order.

    A scalar at the root yields a single pair with an empty key; composites
    with no entries yield nothing.
    """
    pairs: List[Pair] = []
    _flatten_into(pairs, node, "", delimiter, escape)
    return pairs


def _flatten_into(pairs: List[Pair], node: Node, path: str, delimiter: str, escape: str):
    if isinstance(node, str):
        pairs.append((path, node))
        return
    for segment, child in node.items():
        segment = escape_segment(segment, delimiter, escape)
        child_path = path + delimiter + segment if path else segment
        _flatten_into(pairs, child, child_path, delimiter, escape)


def to_values(pairs: List[Pair]) -> Dict[str, List[str]]:
    """Group pairs into a key -> list of values mapping, keys in first-seen order."""
    values: Dict[str, List[str]] = {}
    for key, value in pairs:
        values.setdefault(key, []).append(value)
    return values
