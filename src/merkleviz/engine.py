"""
Recomputation Engine

Propagates labels up the spine. At each level L (from the starting level
up to 1):

    cur = label(path-L)
    sib = label(sib-L)
    label(path-(L-1)) = H(sib ‖ cur)   if sibling at L is left
                        H(cur ‖ sib)   otherwise

The root (path-0) receives the last value. Placeholder labels take part
in hashing as their lenient byte decoding (see digest.label_bytes).
"""

from typing import Dict

from .digest import combine_labels
from .nodes import NodeId
from .tree import ProofTree


def _propagate(tree: ProofTree, labels: Dict[NodeId, str], start_level: int) -> Dict[NodeId, str]:
    """Recompute path labels above start_level into labels (mutated)."""
    current = labels.get(NodeId.path(start_level), tree.label(NodeId.path(start_level)))

    for level in range(start_level, 0, -1):
        sib_id = NodeId.sibling(level)
        sibling = labels.get(sib_id, tree.label(sib_id))
        if tree.sibling_is_left(level):
            current = combine_labels(sibling, current)
        else:
            current = combine_labels(current, sibling)
        labels[NodeId.path(level - 1)] = current

    return labels


def recompute(tree: ProofTree) -> ProofTree:
    """
    Derive every path label from the leaf and the siblings.

    With height 0 no combine happens and the tree is returned as built.
    """
    if tree.height == 0:
        return tree
    return tree.with_labels(_propagate(tree, {}, tree.height))


def on_edit(tree: ProofTree, node_id: NodeId, new_label: str) -> ProofTree:
    """
    Apply a single-node edit and recompute its ancestors.

    Only the leaf and the sibling nodes are editable; any other id, or a
    label equal to the current one, returns the tree unchanged.

    Propagation always restarts from the leaf, whose label is the current
    value at the bottom of the spine. On a consistent tree, editing sib-L
    therefore changes only the path nodes at levels L-1 down to 0.
    """
    if not tree.is_editable(node_id):
        return tree
    if tree.label(node_id) == new_label:
        return tree

    labels = {node_id: new_label}
    return tree.with_labels(_propagate(tree, labels, tree.height))


def root_label(tree: ProofTree) -> str:
    return tree.label(tree.root_id)
