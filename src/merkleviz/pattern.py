"""
Orientation Patterns

pattern[L-1] is True when the sibling at level L is the left operand:
    True:  parent = H(sibling ‖ current)
    False: parent = H(current ‖ sibling)
"""

from typing import Iterable, Tuple

Pattern = Tuple[bool, ...]


def default_pattern(height: int) -> Pattern:
    """Alternating pattern: top sibling on the left, then right, etc."""
    return tuple(i % 2 == 0 for i in range(height))


def uniform_pattern(height: int, sibling_left: bool = True) -> Pattern:
    """Same orientation at every level."""
    return (bool(sibling_left),) * height


def normalize_pattern(pattern: Iterable[bool], height: int) -> Pattern:
    """
    Resize a pattern to height.

    Longer patterns are truncated; shorter ones are extended with the
    default alternating pattern at the missing indices.
    """
    p = tuple(bool(b) for b in pattern)[:height]
    if len(p) < height:
        p = p + default_pattern(height)[len(p):]
    return p


def toggle(pattern: Pattern, level: int) -> Pattern:
    """Flip the orientation of the sibling at level (1-based)."""
    if not 1 <= level <= len(pattern):
        raise IndexError(f"Level {level} out of range [1, {len(pattern)}]")
    i = level - 1
    return pattern[:i] + (not pattern[i],) + pattern[i + 1:]


def parse_pattern(text: str) -> Pattern:
    """
    Parse a compact pattern string, top level first.

    'L'/'1' marks a left sibling, 'R'/'0' a right one, e.g. "LRRL".
    """
    result = []
    for ch in text.strip().upper():
        if ch in ('L', '1'):
            result.append(True)
        elif ch in ('R', '0'):
            result.append(False)
        elif ch in (' ', ',', '-'):
            continue
        else:
            raise ValueError(f"Invalid orientation character {ch!r} in {text!r}")
    return tuple(result)


def format_pattern(pattern: Pattern) -> str:
    return ''.join('L' if b else 'R' for b in pattern)
