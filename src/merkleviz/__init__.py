"""
merkleviz: Merkle Inclusion Proof Recomputation and Layout

Given a leaf, the proof siblings (bottom-up) and a left/right orientation
per level, derive every node up to the root and lay the path out as a
diagram:

    leaf → H(sib ‖ cur) or H(cur ‖ sib) per level → root

with H = Keccak-256.

Usage:
    from merkleviz import build_tree, recompute, on_edit, project, NodeId

    tree = recompute(build_tree(2, (True, False), proof=[p0, p1], leaf=leaf))
    tree = on_edit(tree, NodeId.sibling(2), "0x" + "ab" * 32)
    layout = project(tree)

    # Interactive state with validation
    from merkleviz import ProofSession
    session = ProofSession()
    session.load_zero()
"""

# Hash combiner
from .digest import (
    DIGEST_SIZE,
    ZERO_DIGEST,
    combine,
    combine_labels,
    to_label,
    parse_digest,
    normalize_label,
    is_digest_label,
    label_bytes,
)

# Errors
from .errors import MalformedDigestError, TreeStructureError, CalldataError

# Tree model
from .nodes import NodeKind, NodeId, Node, Edge
from .pattern import (
    Pattern,
    default_pattern,
    uniform_pattern,
    normalize_pattern,
    parse_pattern,
    format_pattern,
)
from .tree import ProofTree, build_tree

# Recomputation
from .engine import on_edit, recompute, root_label

# Layout
from .layout import LayoutParams, ViewBounds, PositionedNode, Layout, project

# Adapters
from .config import ViewerConfig
from .calldata import (
    JOIN_TOURNAMENT_SIGNATURE,
    ProofPayload,
    decode_join_tournament,
    encode_join_tournament,
)
from .session import ProofSession, View

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Hash combiner
    "DIGEST_SIZE",
    "ZERO_DIGEST",
    "combine",
    "combine_labels",
    "to_label",
    "parse_digest",
    "normalize_label",
    "is_digest_label",
    "label_bytes",
    # Errors
    "MalformedDigestError",
    "TreeStructureError",
    "CalldataError",
    # Tree model
    "NodeKind",
    "NodeId",
    "Node",
    "Edge",
    "Pattern",
    "default_pattern",
    "uniform_pattern",
    "normalize_pattern",
    "parse_pattern",
    "format_pattern",
    "ProofTree",
    "build_tree",
    # Recomputation
    "on_edit",
    "recompute",
    "root_label",
    # Layout
    "LayoutParams",
    "ViewBounds",
    "PositionedNode",
    "Layout",
    "project",
    # Adapters
    "ViewerConfig",
    "JOIN_TOURNAMENT_SIGNATURE",
    "ProofPayload",
    "decode_join_tournament",
    "encode_join_tournament",
    "ProofSession",
    "View",
]
