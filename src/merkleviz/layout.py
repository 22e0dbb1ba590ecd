"""
Layout Projector

Places the spine on a diagonal (one x_step and one y_step per level) and
each sibling beside its path node, on the side the hash order uses:
a left sibling sits x_sibling to the left, a right one to the right.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .nodes import Node, NodeId, NodeKind
from .tree import ProofTree


@dataclass(frozen=True)
class LayoutParams:
    """Spacing and node size constants, in view units."""

    x_step: float = 90
    """Horizontal distance between levels along the spine."""

    y_step: float = 120
    """Vertical distance between levels."""

    x_sibling: float = 180
    """Lateral offset of a sibling from its path node."""

    node_width: float = 116
    node_height: float = 54
    radius: float = 12

    margin: float = 40
    """Padding around the outermost node boxes."""

    @property
    def pad_x(self) -> float:
        return self.node_width + self.margin

    @property
    def pad_y(self) -> float:
        return self.node_height + self.margin


@dataclass(frozen=True)
class ViewBounds:
    """SVG-style view box: origin and size."""

    min_x: float
    min_y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.min_x + self.width

    @property
    def max_y(self) -> float:
        return self.min_y + self.height

    def view_box(self) -> str:
        return f"{self.min_x:g} {self.min_y:g} {self.width:g} {self.height:g}"

    def scaled(self, zoom: float) -> Tuple[float, float]:
        """Pixel size of the viewport at the given zoom."""
        return (self.width * zoom, self.height * zoom)


@dataclass(frozen=True)
class PositionedNode:
    node: Node
    x: float
    y: float

    @property
    def id(self) -> NodeId:
        return self.node.id

    @property
    def label(self) -> str:
        return self.node.label


@dataclass(frozen=True)
class Layout:
    """Positioned nodes (in tree node order), edges and bounds."""

    nodes: Tuple[PositionedNode, ...]
    edges: Tuple[Tuple[NodeId, NodeId], ...]
    bounds: ViewBounds
    params: LayoutParams
    height: int = 0

    def position(self, node_id: NodeId) -> Tuple[float, float]:
        for p in self.nodes:
            if p.id == node_id:
                return (p.x, p.y)
        raise KeyError(str(node_id))

    def positions(self) -> Dict[NodeId, Tuple[float, float]]:
        return {p.id: (p.x, p.y) for p in self.nodes}


def node_position(node_id: NodeId, tree: ProofTree, params: LayoutParams) -> Tuple[float, float]:
    x = node_id.level * params.x_step
    y = node_id.level * params.y_step
    if node_id.kind == NodeKind.SIBLING:
        x += -params.x_sibling if tree.sibling_is_left(node_id.level) else params.x_sibling
    return (x, y)


def compute_bounds(points: List[Tuple[float, float]], params: LayoutParams) -> ViewBounds:
    xs = [x for x, _ in points]
    ys = [y for _, y in points]
    min_x = min(xs) - params.pad_x
    max_x = max(xs) + params.pad_x
    min_y = min(ys) - params.pad_y
    max_y = max(ys) + params.pad_y
    return ViewBounds(min_x, min_y, max_x - min_x, max_y - min_y)


def project(tree: ProofTree, params: LayoutParams = LayoutParams()) -> Layout:
    """Place every node of the tree and compute the padded view bounds."""
    placed = []
    for node in tree:
        x, y = node_position(node.id, tree, params)
        placed.append(PositionedNode(node, x, y))

    bounds = compute_bounds([(p.x, p.y) for p in placed], params)
    edges = tuple((e.parent, e.child) for e in tree.edges)
    return Layout(nodes=tuple(placed), edges=edges, bounds=bounds, params=params,
                  height=tree.height)
