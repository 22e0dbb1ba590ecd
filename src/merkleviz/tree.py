"""
Tree Model Builder

Builds the binary proof tree for a given height and orientation pattern:

            root                level 0
           /    \\
       sib-1   path-1           level 1
              /    \\
          path-2   sib-2        level 2
            ...
         path-H   sib-H         level H (path-H is the leaf)

Sibling labels come from the proof, indexed bottom-up:
    sib-L  <-  proof[H - L]
so sib-H consumes proof[0] and sib-1 consumes proof[H-1].
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Mapping, Sequence, Tuple, Union

from .digest import to_label
from .errors import TreeStructureError
from .nodes import Edge, Node, NodeId, NodeKind, ROOT_NAME
from .pattern import Pattern

LabelLike = Union[str, bytes, None]


def _as_label(value: LabelLike) -> str:
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        return to_label(bytes(value))
    return value


def proof_placeholder(index: int) -> str:
    """Label shown for a proof entry that has not been supplied."""
    return f"proof[{index}]"


@dataclass(frozen=True)
class ProofTree:
    """
    Nodes and edges of one proof tree.

    Node order is path-0..path-H followed by sib-1..sib-H.
    Instances are never mutated; updates return a new tree.
    """

    height: int
    pattern: Pattern
    nodes: Mapping[NodeId, Node] = field(default_factory=dict)
    edges: Tuple[Edge, ...] = ()

    @property
    def root_id(self) -> NodeId:
        return NodeId.root()

    @property
    def leaf_id(self) -> NodeId:
        return NodeId.path(self.height)

    def node(self, node_id: NodeId) -> Node:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise TreeStructureError(f"No node {node_id} in tree of height {self.height}") from None

    def label(self, node_id: NodeId) -> str:
        return self.node(node_id).label

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes.values())

    def __len__(self) -> int:
        return len(self.nodes)

    def path_nodes(self) -> List[Node]:
        return [self.node(NodeId.path(level)) for level in range(self.height + 1)]

    def sibling_nodes(self) -> List[Node]:
        return [self.node(NodeId.sibling(level)) for level in range(1, self.height + 1)]

    def sibling_is_left(self, level: int) -> bool:
        """Orientation of the sibling at level (1-based)."""
        return self.pattern[level - 1]

    def is_editable(self, node_id: NodeId) -> bool:
        """Only the leaf and the siblings carry independent labels."""
        if node_id not in self.nodes:
            return False
        return node_id.kind == NodeKind.SIBLING or node_id == self.leaf_id

    def with_labels(self, updates: Mapping[NodeId, str]) -> 'ProofTree':
        """Return a copy with the given labels replaced."""
        nodes: Dict[NodeId, Node] = dict(self.nodes)
        for node_id, label in updates.items():
            nodes[node_id] = replace(self.node(node_id), label=label)
        return replace(self, nodes=nodes)

    def labels(self) -> Dict[str, str]:
        """Map of string id -> label, in node order."""
        return {str(n.id): n.label for n in self.nodes.values()}


def build_tree(
    height: int,
    pattern: Sequence[bool],
    proof: Sequence[LabelLike] = (),
    leaf: LabelLike = None,
) -> ProofTree:
    """
    Build the proof tree with initial labels.

    Args:
        height: Number of proof levels (>= 0)
        pattern: One orientation per level 1..height
        proof: Sibling digests, bottom-up (proof[0] pairs with the leaf)
        leaf: Leaf digest, or None when not yet known

    Returns:
        ProofTree whose intermediate path labels are empty; see
        engine.recompute() to derive them.

    Raises:
        TreeStructureError: if height is negative or the pattern length
            differs from height
    """
    if height < 0:
        raise TreeStructureError(f"Height must be non-negative, got {height}")
    pattern = tuple(bool(b) for b in pattern)
    if len(pattern) != height:
        raise TreeStructureError(f"Pattern length {len(pattern)} != height {height}")

    leaf_label = _as_label(leaf)
    nodes: Dict[NodeId, Node] = {}
    edges: List[Edge] = []

    # Spine: root (level 0) down to the leaf (level H)
    for level in range(height + 1):
        node_id = NodeId.path(level)
        if level == height and leaf_label:
            label = leaf_label
        elif level == 0:
            label = ROOT_NAME
        else:
            label = ""
        nodes[node_id] = Node(node_id, label)

    # Siblings, one per level 1..H
    for level in range(1, height + 1):
        index = height - level
        sib_id = NodeId.sibling(level)
        supplied = _as_label(proof[index]) if index < len(proof) else ""
        nodes[sib_id] = Node(sib_id, supplied or proof_placeholder(index))

        parent = NodeId.path(level - 1)
        edges.append(Edge(parent, sib_id))
        edges.append(Edge(parent, NodeId.path(level)))

    return ProofTree(height=height, pattern=pattern, nodes=nodes, edges=tuple(edges))
