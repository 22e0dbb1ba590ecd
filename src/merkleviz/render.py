"""
Rendering

SVG and plain-text views of a laid-out proof tree. Pure string output;
interaction is left to whatever hosts the markup.
"""

from typing import List
from xml.sax.saxutils import escape, quoteattr

from .layout import Layout
from .nodes import NodeKind
from .tree import ProofTree

MAX_LABEL = 15

BOX_HEIGHT = 80


def truncate_label(label: str) -> str:
    """Shorten long hashes: 0x1234...abcd."""
    if len(label) > MAX_LABEL:
        return f"{label[:6]}...{label[-4:]}"
    return label


def caption(pnode, layout: Layout) -> str:
    """First text line of a node box: 'final' for the leaf, 'proof[i]' for left siblings."""
    if not pnode.label.startswith("0x"):
        return ""
    height = layout.height
    if pnode.node.kind == NodeKind.PATH and pnode.node.level == height:
        return "final"
    if pnode.node.kind == NodeKind.SIBLING and _is_left_child(pnode, layout):
        return f"proof[{height - pnode.node.level}]"
    return ""


def _is_left_child(pnode, layout: Layout) -> bool:
    positions = layout.positions()
    for parent, child in layout.edges:
        if child == pnode.id:
            return pnode.x < positions[parent][0]
    return False


def render_svg(layout: Layout, zoom: float = 1.0) -> str:
    """Render the layout as a standalone SVG document."""
    bounds = layout.bounds
    width, height = bounds.scaled(zoom)
    positions = layout.positions()
    half_w = layout.params.node_width / 2

    out: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width:g}" height="{height:g}" '
        f'viewBox="{bounds.view_box()}">',
        '<defs><marker id="arrow" markerWidth="10" markerHeight="10" refX="6" refY="3" '
        'orient="auto" markerUnits="strokeWidth"><path d="M0,0 L0,6 L6,3 z" fill="#9ca3af"/>'
        '</marker></defs>',
    ]

    for parent, child in layout.edges:
        x1, y1 = positions[parent]
        x2, y2 = positions[child]
        out.append(
            f'<line x1="{x1:g}" y1="{y1:g}" x2="{x2:g}" y2="{y2:g}" '
            f'stroke="#9ca3af" marker-end="url(#arrow)"/>'
        )

    for pnode in layout.nodes:
        is_final = pnode.node.kind == NodeKind.PATH and pnode.node.level == layout.height
        fill = "white" if is_final or _is_left_child(pnode, layout) else "whitesmoke"
        top = caption(pnode, layout)
        out.append(f'<g id={quoteattr(str(pnode.id))} transform="translate({pnode.x:g}, {pnode.y:g})">')
        out.append(
            f'<rect x="{-half_w:g}" y="{-BOX_HEIGHT / 2:g}" width="{layout.params.node_width:g}" '
            f'height="{BOX_HEIGHT}" rx="{layout.params.radius:g}" fill="{fill}" stroke="#d1d5db"/>'
        )
        if top:
            out.append(f'<text text-anchor="middle" y="-10">{escape(top)}</text>')
        if pnode.label:
            out.append(
                f'<text text-anchor="middle" y="15"><title>{escape(pnode.label)}</title>'
                f'{escape(truncate_label(pnode.label))}</text>'
            )
        out.append('</g>')

    out.append('</svg>')
    return "\n".join(out)


def render_text(tree: ProofTree) -> str:
    """One line per level, root first: path label and sibling label with its side."""
    lines = []
    paths = tree.path_nodes()
    siblings = tree.sibling_nodes()
    for level in range(tree.height + 1):
        path = paths[level]
        line = f"{level:>3}  {str(path.id):<8} {path.label or '-'}"
        if level > 0:
            sib = siblings[level - 1]
            side = "L" if tree.sibling_is_left(level) else "R"
            line += f"   [{side}] {str(sib.id):<7} {sib.label}"
        lines.append(line)
    return "\n".join(lines)
