"""
Node Identity for the Proof Tree

Two kinds of node exist:
- PATH: on the root-to-leaf spine, one per level 0..height
- SIBLING: supplied by the proof, one per level 1..height

String forms: "root" (path level 0), "path-<L>", "sib-<L>".
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple


class NodeKind(IntEnum):
    """Node kinds in the proof tree."""

    PATH = 0x01        # Spine node (root, intermediates, leaf)
    SIBLING = 0x02     # Proof-supplied node off the spine


ROOT_NAME = "root"

_PREFIXES = {
    NodeKind.PATH: "path",
    NodeKind.SIBLING: "sib",
}


@dataclass(frozen=True, order=True)
class NodeId:
    """Identifier carrying both kind and level, no string parsing needed."""

    kind: NodeKind
    level: int

    def __post_init__(self):
        if self.level < 0:
            raise ValueError(f"Level must be non-negative, got {self.level}")
        if self.kind == NodeKind.SIBLING and self.level == 0:
            raise ValueError("Sibling nodes start at level 1")

    @classmethod
    def path(cls, level: int) -> 'NodeId':
        return cls(NodeKind.PATH, level)

    @classmethod
    def sibling(cls, level: int) -> 'NodeId':
        return cls(NodeKind.SIBLING, level)

    @classmethod
    def root(cls) -> 'NodeId':
        return cls(NodeKind.PATH, 0)

    @property
    def is_root(self) -> bool:
        return self.kind == NodeKind.PATH and self.level == 0

    @classmethod
    def parse(cls, text: str) -> 'NodeId':
        """
        Parse "root", "path-<L>" or "sib-<L>".

        "path-0" is accepted as an alias of "root".
        """
        value = text.strip()
        if value == ROOT_NAME:
            return cls.root()

        prefix, sep, level = value.partition("-")
        if not sep or not level.isdigit():
            raise ValueError(f"Invalid node id: {text!r}")

        for kind, name in _PREFIXES.items():
            if prefix == name:
                return cls(kind, int(level))
        raise ValueError(f"Unknown node kind in id: {text!r}")

    def __str__(self) -> str:
        if self.is_root:
            return ROOT_NAME
        return f"{_PREFIXES[self.kind]}-{self.level}"


@dataclass(frozen=True)
class Node:
    """One vertex of the proof tree. Positions live in the layout, not here."""

    id: NodeId
    label: str = ""

    @property
    def level(self) -> int:
        return self.id.level

    @property
    def kind(self) -> NodeKind:
        return self.id.kind


@dataclass(frozen=True)
class Edge:
    """Directed parent -> child relation; the parent is one level higher."""

    parent: NodeId
    child: NodeId

    def as_tuple(self) -> Tuple[str, str]:
        return (str(self.parent), str(self.child))
