"""
application/x-www-form-urlencoded serialization of flattened pairs.
"""
import urllib.parse as urlparse
from typing import Iterable, Tuple


def quote_component(text: str) -> str:
    """Percent-encode text: unreserved characters pass, space becomes '+'."""
    return urlparse.quote_plus(text, safe="", encoding="utf-8", errors="surrogateescape")


def encode_pairs(pairs: Iterable[Tuple[str, str]]) -> str:
    """
    Serialize pairs as a form body, sorted by key and then by value.

    Args:
        pairs: (key, value) pairs, in any order

    Returns:
        The encoded string, e.g. "A.B=1&A.C.0=2"
    """
    return "&".join(
        quote_component(key) + "=" + quote_component(value)
        for key, value in sorted(pairs)
    )
