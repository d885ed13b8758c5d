"""Tests for content fingerprints."""

import hashlib

from editmend.core.caching import compute_fingerprint

FIELDS = ("content", "old", "new", "instr", "err")


def test_fingerprint_is_deterministic():
    assert compute_fingerprint(FIELDS) == compute_fingerprint(list(FIELDS))


def test_fingerprint_is_full_sha256_hex():
    fingerprint = compute_fingerprint(FIELDS)

    assert len(fingerprint) == 64
    assert all(c in "0123456789abcdef" for c in fingerprint)


def test_fingerprint_matches_compact_json_array_digest():
    """Digest of the compact JSON array, same bytes JSON.stringify would produce."""
    assert (
        compute_fingerprint(FIELDS)
        == "abc395ffbc5527e66bebe91f4136527a7e466c9cfbc13d948fc86656f1e75671"
    )


def test_fingerprint_escapes_quotes_and_newlines():
    assert (
        compute_fingerprint(['a"b', "line\nbreak"])
        == "678753540402829dc673a7916c3f478ee0a2b7732c458c9a97dce44595660fa8"
    )


def test_fingerprint_keeps_non_ascii_verbatim():
    expected = hashlib.sha256('["café","日本"]'.encode()).hexdigest()

    assert compute_fingerprint(["café", "日本"]) == expected


def test_changing_any_field_changes_fingerprint():
    base = compute_fingerprint(FIELDS)

    for i in range(len(FIELDS)):
        changed = list(FIELDS)
        changed[i] = changed[i] + "!"
        assert compute_fingerprint(changed) != base


def test_field_order_matters():
    assert compute_fingerprint(["a", "b"]) != compute_fingerprint(["b", "a"])


def test_field_boundaries_cannot_be_shifted():
    assert compute_fingerprint(["ab", "c"]) != compute_fingerprint(["a", "bc"])


def test_fingerprint_escapes_lone_surrogates():
    """Lone surrogates are written as lowercase \\u escapes instead of failing to encode."""
    content = b"caf\xe9 = 1\n".decode("utf-8", "surrogateescape")

    assert (
        compute_fingerprint([content])
        == "863b63e5911fd6020ef55441ab951dd54c58ca0d8e0eee07a706720b1558d5b6"
    )
    assert (
        compute_fingerprint(["x\ud800"])
        == "ee33e834eeeab7ab8fab3888b5c33f496334cf9b233d41483c143d0ed1b0e437"
    )


def test_fingerprint_joins_surrogate_pairs():
    """A surrogate pair hashes like the character it encodes."""
    assert compute_fingerprint(["\ud83d\ude00"]) == compute_fingerprint(["\U0001f600"])
    assert (
        compute_fingerprint(["\U0001f600"])
        == "aff2a0387611973d359e99d65ccf8953b41a00e9415a4e83ee6aab1e3c72a4ab"
    )
