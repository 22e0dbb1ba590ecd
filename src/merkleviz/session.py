"""
Proof Session

Thin adapter between input events and the pure core. Owns the current
height, pattern, zoom and payload; every change rebuilds the tree and,
when a leaf is known, recomputes the spine. Edits are validated here and
applied one at a time.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union

from .calldata import ProofPayload
from .config import ViewerConfig
from .digest import ZERO_DIGEST, normalize_label, to_label
from .engine import on_edit, recompute
from .errors import MalformedDigestError
from .layout import Layout, LayoutParams, project
from .nodes import NodeId
from .pattern import Pattern, normalize_pattern, toggle, uniform_pattern
from .tree import ProofTree, build_tree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class View:
    """Everything a renderer needs for one frame."""

    tree: ProofTree
    layout: Layout
    zoom: float


class ProofSession:
    """
    Interactive state for one proof diagram.

    Usage:
        session = ProofSession()
        session.load_payload(payload)
        session.edit("sib-2", "0x" + "ab" * 32)
        view = session.view()
    """

    def __init__(
        self,
        config: ViewerConfig = ViewerConfig(),
        layout_params: LayoutParams = LayoutParams(),
    ):
        self.config = config
        self.layout_params = layout_params
        self.height = config.default_height
        self.pattern: Pattern = uniform_pattern(self.height)
        self.zoom = config.default_zoom
        self.payload: Optional[ProofPayload] = None
        self.tree = self._build()

    # ------------------------------------------------------------------
    # Rebuild
    # ------------------------------------------------------------------

    def _build(self) -> ProofTree:
        proof: Tuple[str, ...] = ()
        leaf = None
        if self.payload is not None:
            proof = self.payload.proof
            leaf = self.payload.final_state or None

        tree = build_tree(self.height, self.pattern, proof, leaf)
        if leaf and proof:
            tree = recompute(tree)
        logger.debug(f"Rebuilt tree: height={self.height} nodes={len(tree)}")
        return tree

    def _rebuild(self) -> None:
        self.tree = self._build()

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def set_height(self, height: int) -> int:
        """Clamp, resize the pattern to the new height, rebuild."""
        self.height = self.config.clamp_height(height)
        self.pattern = normalize_pattern(self.pattern, self.height)
        self._rebuild()
        return self.height

    def set_pattern(self, pattern: Iterable[bool]) -> Pattern:
        self.pattern = normalize_pattern(pattern, self.height)
        self._rebuild()
        return self.pattern

    def toggle_orientation(self, level: int) -> Pattern:
        self.pattern = toggle(self.pattern, level)
        self._rebuild()
        return self.pattern

    def set_zoom(self, zoom: float) -> float:
        self.zoom = self.config.clamp_zoom(zoom)
        return self.zoom

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def load_payload(self, payload: ProofPayload) -> bool:
        """
        Take leaf and proof from a decoded payload.

        Height follows the proof length and the pattern resets to all-left.
        An empty proof is rejected and the session is left unchanged.
        """
        if not payload.proof:
            logger.warning("Proof data is empty; payload ignored")
            return False

        self.payload = payload
        self.height = self.config.clamp_height(len(payload.proof))
        if self.height != len(payload.proof):
            logger.warning(f"Proof length {len(payload.proof)} clamped to height {self.height}")
        self.pattern = uniform_pattern(self.height)
        self._rebuild()
        return True

    def load_zero(self) -> None:
        """Blank input: all-zero leaf and proof at the zero height."""
        zero = to_label(ZERO_DIGEST)
        height = self.config.zero_height
        self.load_payload(ProofPayload(
            final_state=zero,
            proof=(zero,) * height,
            left_node=zero,
            right_node=zero,
        ))

    def edit(self, node_id: Union[NodeId, str], text: str) -> bool:
        """
        Apply a user edit.

        Returns False (tree unchanged) for a malformed digest, an unknown
        id, or a node that is not editable.
        """
        try:
            target = NodeId.parse(node_id) if isinstance(node_id, str) else node_id
        except ValueError as e:
            logger.warning(f"Edit rejected: {e}")
            return False

        if not self.tree.is_editable(target):
            logger.warning(f"Edit rejected: {target} is not editable")
            return False

        try:
            label = normalize_label(text)
        except MalformedDigestError as e:
            logger.warning(f"Edit rejected for {target}: {e}")
            return False

        self.tree = on_edit(self.tree, target, label)
        return True

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    @property
    def layout(self) -> Layout:
        return project(self.tree, self.layout_params)

    def view(self) -> View:
        return View(tree=self.tree, layout=self.layout, zoom=self.zoom)

    def join_tournament_args(self) -> ProofPayload:
        """Call arguments read off the current labels."""
        return ProofPayload.from_tree(self.tree)
