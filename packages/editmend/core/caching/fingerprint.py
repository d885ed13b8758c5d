"""Content fingerprints for cache keys."""

from __future__ import annotations

from collections.abc import Sequence
import hashlib
import json
import re

_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def _join_surrogate_pairs(value: str) -> str:
    # A high/low pair stored as two code points becomes the character it encodes
    return value.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def compute_fingerprint(fields: Sequence[str]) -> str:
    """Compute a stable SHA256 fingerprint of an ordered sequence of strings.

    The sequence is serialized as a compact JSON array (no whitespace,
    non-ASCII characters kept as-is) before hashing, so field order is part
    of the fingerprint and no field boundary can be forged by content.

    Unpaired surrogates, e.g. from text decoded with ``surrogateescape``,
    are written as ``\\uXXXX`` escapes the way ``JSON.stringify`` writes
    them, so any ``str`` can be fingerprinted.

    Args:
        fields: Ordered input values

    Returns:
        64-character lowercase hex digest

    Example:
        >>> compute_fingerprint(["a", "b"]) == compute_fingerprint(["a", "b"])
        True
        >>> compute_fingerprint(["a", "b"]) == compute_fingerprint(["b", "a"])
        False
    """
    canonical = json.dumps(
        [_join_surrogate_pairs(field) for field in fields],
        separators=(",", ":"),
        ensure_ascii=False,
    )
    canonical = _LONE_SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", canonical)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
