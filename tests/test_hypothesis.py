"""
Property-Based Testing with Hypothesis

Random heights, patterns, proofs and leaves; the properties below must hold
for all of them:

1. Determinism: building twice gives identical trees
2. Idempotence: an edit that does not change a label changes nothing
3. Ancestor-only propagation: editing sib-L only touches path levels 0..L-1
4. Height zero: the root always equals the leaf
5. Layout: siblings sit on the side their hash operand uses
"""

from hypothesis import given, strategies as st, settings
from hypothesis.strategies import composite

from merkleviz import (
    NodeId,
    NodeKind,
    build_tree,
    combine,
    on_edit,
    parse_digest,
    project,
    recompute,
    root_label,
    to_label,
)


# =============================================================================
# STRATEGIES
# =============================================================================

digests = st.binary(min_size=32, max_size=32)
labels = digests.map(to_label)


@composite
def tree_inputs(draw, min_height=0, max_height=12):
    """(height, pattern, proof, leaf) with a full proof."""
    height = draw(st.integers(min_value=min_height, max_value=max_height))
    pattern = tuple(draw(st.lists(st.booleans(), min_size=height, max_size=height)))
    proof = draw(st.lists(labels, min_size=height, max_size=height))
    leaf = draw(labels)
    return height, pattern, proof, leaf


@composite
def partial_tree_inputs(draw, max_height=12):
    """Like tree_inputs, but the proof may be short and the leaf missing."""
    height = draw(st.integers(min_value=0, max_value=max_height))
    pattern = tuple(draw(st.lists(st.booleans(), min_size=height, max_size=height)))
    proof = draw(st.lists(labels, max_size=height))
    leaf = draw(st.one_of(st.none(), labels))
    return height, pattern, proof, leaf


# =============================================================================
# PROPERTY: DETERMINISM
# =============================================================================

class TestDeterminism:
    """Building and recomputing are pure functions of their inputs."""

    @given(args=partial_tree_inputs())
    @settings(max_examples=200)
    def test_build_deterministic(self, args):
        assert build_tree(*args) == build_tree(*args)

    @given(args=partial_tree_inputs())
    @settings(max_examples=200)
    def test_recompute_deterministic(self, args):
        assert recompute(build_tree(*args)) == recompute(build_tree(*args))

    @given(args=tree_inputs(min_height=1))
    @settings(max_examples=100)
    def test_root_matches_fold(self, args):
        """The root equals folding combine() over the proof in pattern order."""
        height, pattern, proof, leaf = args
        current = parse_digest(leaf)
        for level in range(height, 0, -1):
            sibling = parse_digest(proof[height - level])
            if pattern[level - 1]:
                current = combine(sibling, current)
            else:
                current = combine(current, sibling)

        tree = recompute(build_tree(height, pattern, proof, leaf))
        assert root_label(tree) == to_label(current)


# =============================================================================
# PROPERTY: IDEMPOTENCE
# =============================================================================

class TestIdempotence:
    """Re-entering a node's current label leaves every label unchanged."""

    @given(args=partial_tree_inputs(), data=st.data())
    @settings(max_examples=200)
    def test_same_label_edit(self, args, data):
        tree = build_tree(*args)
        node = data.draw(st.sampled_from(list(tree)))
        assert on_edit(tree, node.id, node.label).labels() == tree.labels()

    @given(args=tree_inputs())
    @settings(max_examples=100)
    def test_recompute_twice(self, args):
        once = recompute(build_tree(*args))
        assert recompute(once) == once


# =============================================================================
# PROPERTY: ANCESTOR-ONLY PROPAGATION
# =============================================================================

class TestPropagation:
    """An edit at sib-L only reaches the path nodes above it."""

    @given(args=tree_inputs(min_height=1), data=st.data(), new=labels)
    @settings(max_examples=200)
    def test_sibling_edit(self, args, data, new):
        tree = recompute(build_tree(*args))
        height = args[0]
        level = data.draw(st.integers(min_value=1, max_value=height))
        edited = on_edit(tree, NodeId.sibling(level), new)

        for node in tree:
            if node.id == NodeId.sibling(level):
                assert edited.label(node.id) == new
            elif node.kind == NodeKind.SIBLING or node.level >= level:
                assert edited.label(node.id) == node.label

    @given(args=partial_tree_inputs(), data=st.data(), new=labels)
    @settings(max_examples=200)
    def test_sibling_edit_underived_tree(self, args, data, new):
        """An edit on a never-recomputed tree equals edit-then-recompute."""
        tree = build_tree(*args)
        height = args[0]
        if height == 0:
            return
        level = data.draw(st.integers(min_value=1, max_value=height))
        sib_id = NodeId.sibling(level)
        if tree.label(sib_id) == new:
            return
        edited = on_edit(tree, sib_id, new)

        assert edited == recompute(tree.with_labels({sib_id: new}))

    @given(args=tree_inputs(min_height=1), new=labels)
    @settings(max_examples=100)
    def test_leaf_edit_equals_rebuild(self, args, new):
        height, pattern, proof, _ = args
        tree = recompute(build_tree(*args))
        edited = on_edit(tree, NodeId.path(height), new)
        assert edited == recompute(build_tree(height, pattern, proof, new))

    @given(args=tree_inputs(min_height=1), data=st.data(), new=labels)
    @settings(max_examples=100)
    def test_derived_nodes_reject_edits(self, args, data, new):
        tree = recompute(build_tree(*args))
        height = args[0]
        level = data.draw(st.integers(min_value=0, max_value=height - 1))
        assert on_edit(tree, NodeId.path(level), new) is tree


# =============================================================================
# PROPERTY: HEIGHT ZERO
# =============================================================================

class TestHeightZero:
    """With no proof levels the root is the leaf."""

    @given(leaf=labels, proof=st.lists(labels, max_size=3), new=labels)
    def test_root_equals_leaf(self, leaf, proof, new):
        tree = recompute(build_tree(0, (), proof, leaf))
        assert root_label(tree) == leaf
        assert root_label(on_edit(tree, NodeId.root(), new)) == new


# =============================================================================
# PROPERTY: LAYOUT
# =============================================================================

class TestLayoutProperties:
    """Visual left/right matches hash-order left/right."""

    @given(args=partial_tree_inputs())
    @settings(max_examples=100)
    def test_sibling_side(self, args):
        tree = build_tree(*args)
        layout = project(tree)
        for level in range(1, tree.height + 1):
            sx, _ = layout.position(NodeId.sibling(level))
            px, _ = layout.position(NodeId.path(level))
            assert (sx < px) == tree.sibling_is_left(level)

    @given(args=partial_tree_inputs())
    @settings(max_examples=100)
    def test_bounds_contain_every_node(self, args):
        layout = project(build_tree(*args))
        b = layout.bounds
        for p in layout.nodes:
            assert b.min_x < p.x < b.max_x
            assert b.min_y < p.y < b.max_y
