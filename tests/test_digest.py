"""
Tests for the Hash Combiner and digest labels

- combine() is Keccak-256 over left ‖ right
- Strict parsing at input boundaries
- Lenient decoding of placeholder labels
"""

import pytest
from eth_utils import keccak

from merkleviz import (
    DIGEST_SIZE,
    ZERO_DIGEST,
    MalformedDigestError,
    combine,
    combine_labels,
    is_digest_label,
    label_bytes,
    normalize_label,
    parse_digest,
    to_label,
)

A = bytes(range(32))
B = bytes(range(32, 64))


class TestCombine:
    """Tests for combine()."""

    def test_zero_pair(self):
        """H(0 ‖ 0) matches the well-known Keccak zero-subtree hash."""
        expected = "ad3228b676f7d3cd4284a5443f17f1962b36e491b30a40b2405849e597ba5fb5"
        assert combine(ZERO_DIGEST, ZERO_DIGEST).hex() == expected

    def test_is_keccak_of_concatenation(self):
        assert combine(A, B) == keccak(A + B)

    def test_order_matters(self):
        """Operands are not sorted."""
        assert combine(A, B) != combine(B, A)

    def test_output_size(self):
        assert len(combine(A, B)) == DIGEST_SIZE

    def test_deterministic(self):
        assert combine(A, B) == combine(A, B)

    @pytest.mark.parametrize("left,right", [
        (b"", B),
        (A, b"\x00" * 31),
        (A + b"\x00", B),
    ])
    def test_wrong_length_rejected(self, left, right):
        with pytest.raises(ValueError):
            combine(left, right)


class TestParseDigest:
    """Strict parsing used at input boundaries."""

    def test_with_prefix(self):
        assert parse_digest("0x" + A.hex()) == A

    def test_without_prefix(self):
        assert parse_digest(A.hex()) == A

    def test_uppercase_and_whitespace(self):
        assert parse_digest("  0X" + A.hex().upper() + "\n") == A

    @pytest.mark.parametrize("text", [
        "",
        "0x",
        "root",
        "proof[0]",
        "0x" + "00" * 31,
        "0x" + "00" * 33,
        "0x" + "zz" * 32,
        "0x" + "0" * 63,
    ])
    def test_malformed(self, text):
        with pytest.raises(MalformedDigestError):
            parse_digest(text)

    def test_malformed_is_value_error(self):
        with pytest.raises(ValueError):
            parse_digest("nope")

    def test_normalize_label(self):
        assert normalize_label("0X" + A.hex().upper()) == "0x" + A.hex()

    def test_is_digest_label(self):
        assert is_digest_label(to_label(A))
        assert not is_digest_label("proof[3]")
        assert not is_digest_label("")


class TestLenientLabels:
    """Placeholders combine as their lenient byte decoding."""

    def test_digest_label(self):
        assert label_bytes(to_label(A)) == A

    @pytest.mark.parametrize("label", ["", "root", "proof[0]", "0x"])
    def test_placeholders_decode_empty(self, label):
        assert label_bytes(label) == b""

    def test_stops_at_first_non_hex(self):
        assert label_bytes("0xabcdzz") == bytes.fromhex("abcd")

    def test_odd_length_truncated(self):
        assert label_bytes("0xabc") == bytes.fromhex("ab")

    def test_combine_labels_matches_combine(self):
        assert combine_labels(to_label(A), to_label(B)) == to_label(combine(A, B))

    def test_combine_placeholders(self):
        """Two placeholders hash like the empty string."""
        assert combine_labels("proof[1]", "") == to_label(keccak(b""))
        assert combine_labels("proof[1]", "").endswith("5d85a470")
