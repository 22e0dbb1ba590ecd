"""Error types raised at the merkleviz input boundaries."""


class MalformedDigestError(ValueError):
    """A label or proof entry is not a fixed-length hex digest."""


class TreeStructureError(ValueError):
    """Height, pattern and node set disagree with each other."""


class CalldataError(ValueError):
    """Transaction input is not a joinTournament call."""
