"""
Hash Combiner and Digest Labels

Keccak-256 pair hashing, as used by the tournament contract:
    parent = keccak256(left ‖ right)

Labels are the display form of a digest: lowercase hex with a 0x prefix.
Placeholder labels ("root", "proof[3]", "") are decoded leniently so that
a partially specified proof can still be recomputed.
"""

import string

from eth_utils import keccak

from .errors import MalformedDigestError

DIGEST_SIZE = 32
"""Size of every digest in bytes."""

LABEL_PREFIX = "0x"

ZERO_DIGEST = bytes(DIGEST_SIZE)

_HEX = frozenset(string.hexdigits)


def combine(left: bytes, right: bytes) -> bytes:
    """Hash two 32-byte digests in the given order: H(left ‖ right)."""
    if len(left) != DIGEST_SIZE:
        raise ValueError(f"Left operand must be {DIGEST_SIZE} bytes, got {len(left)}")
    if len(right) != DIGEST_SIZE:
        raise ValueError(f"Right operand must be {DIGEST_SIZE} bytes, got {len(right)}")
    return keccak(left + right)


def to_label(digest: bytes) -> str:
    """Render a digest as a 0x-prefixed lowercase hex label."""
    return LABEL_PREFIX + digest.hex()


def parse_digest(text: str) -> bytes:
    """
    Parse a label that must be a well-formed 32-byte hex digest.

    Accepts an optional 0x prefix and surrounding whitespace.

    Raises:
        MalformedDigestError: if the text is not exactly 64 hex characters
    """
    value = text.strip()
    if value[:2].lower() == LABEL_PREFIX:
        value = value[2:]
    if len(value) != 2 * DIGEST_SIZE or not _HEX.issuperset(value):
        raise MalformedDigestError(f"Not a {DIGEST_SIZE}-byte hex digest: {text!r}")
    return bytes.fromhex(value)


def normalize_label(text: str) -> str:
    """Canonical label form of a well-formed digest (lowercase, 0x prefix)."""
    return to_label(parse_digest(text))


def is_digest_label(label: str) -> bool:
    """True if the label holds a real 32-byte digest rather than a placeholder."""
    try:
        parse_digest(label)
    except MalformedDigestError:
        return False
    return True


def label_bytes(label: str) -> bytes:
    """
    Decode a label permissively.

    The first two characters are dropped as the prefix, then the longest
    run of hex characters is taken, cut to an even length. Placeholders
    such as "root" or "proof[2]" decode to b''.
    """
    body = label[2:]
    end = 0
    while end < len(body) and body[end] in _HEX:
        end += 1
    end -= end % 2
    return bytes.fromhex(body[:end])


def combine_labels(left: str, right: str) -> str:
    """
    Combine two labels, tolerating placeholders.

    For well-formed labels this equals to_label(combine(...)).
    """
    return to_label(keccak(label_bytes(left) + label_bytes(right)))
