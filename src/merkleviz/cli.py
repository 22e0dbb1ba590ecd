"""
merkleviz: Merkle Proof Visualizer (command line)

Usage:
    merkleviz show   --leaf HEX --proof HEX [HEX ...] [--pattern LRLR] [--format text|json|svg]
    merkleviz decode CALLDATA [--format text|json|svg]
    merkleviz zero   [--format text|json|svg]
    merkleviz edit   --leaf HEX --proof HEX [HEX ...] --set ID=HEX [--set ...]

Proof elements are ordered bottom-up: proof[0] pairs with the leaf,
proof[H-1] is near the root.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .calldata import ProofPayload, decode_join_tournament, encode_join_tournament
from .config import ViewerConfig
from .digest import ZERO_DIGEST, normalize_label, to_label
from .errors import MalformedDigestError
from .pattern import format_pattern, parse_pattern
from .render import render_svg, render_text
from .session import ProofSession

logger = logging.getLogger(__name__)


def view_to_dict(session: ProofSession) -> Dict[str, Any]:
    """JSON-ready description of the current view."""
    view = session.view()
    bounds = view.layout.bounds
    result: Dict[str, Any] = {
        'height': view.tree.height,
        'pattern': format_pattern(view.tree.pattern),
        'zoom': view.zoom,
        'nodes': [
            {'id': str(p.id), 'label': p.label, 'x': p.x, 'y': p.y}
            for p in view.layout.nodes
        ],
        'links': [{'from': str(a), 'to': str(b)} for a, b in view.layout.edges],
        'dims': {
            'minX': bounds.min_x,
            'minY': bounds.min_y,
            'width': bounds.width,
            'height': bounds.height,
        },
    }
    if view.tree.height > 0:
        args = session.join_tournament_args()
        result['joinTournament'] = args.to_dict()
        try:
            result['calldata'] = '0x' + encode_join_tournament(args).hex()
        except MalformedDigestError:
            result['calldata'] = None
    return result


def emit(session: ProofSession, fmt: str, output: Optional[Path]) -> None:
    if fmt == 'json':
        text = json.dumps(view_to_dict(session), indent=2)
    elif fmt == 'svg':
        text = render_svg(session.layout, session.zoom)
    else:
        text = render_text(session.tree)

    if output is not None:
        output.write_text(text + "\n")
        print(f"Written to: {output}")
    else:
        print(text)


def session_from_args(args) -> ProofSession:
    session = ProofSession(ViewerConfig())
    if args.zoom is not None:
        session.set_zoom(args.zoom)

    leaf = normalize_label(args.leaf) if getattr(args, 'leaf', None) else None

    if getattr(args, 'proof', None):
        proof = tuple(normalize_label(p) for p in args.proof)
        session.load_payload(ProofPayload(
            final_state=leaf or to_label(ZERO_DIGEST), proof=proof, left_node="", right_node="",
        ))
        leaf = None
    elif getattr(args, 'height', None) is not None:
        session.set_height(args.height)

    if getattr(args, 'pattern', None):
        session.set_pattern(parse_pattern(args.pattern))

    # Without a proof the leaf is applied as an edit over placeholder siblings
    if leaf is not None:
        session.edit(session.tree.leaf_id, leaf)
    return session


def cmd_show(args) -> int:
    emit(session_from_args(args), args.format, args.output)
    return 0


def cmd_edit(args) -> int:
    session = session_from_args(args)
    for item in args.set:
        node_id, sep, value = item.partition('=')
        if not sep:
            print(f"Invalid edit {item!r}: expected ID=HEX", file=sys.stderr)
            return 2
        if not session.edit(node_id, value):
            print(f"Edit rejected: {item}", file=sys.stderr)
            return 2
    emit(session, args.format, args.output)
    return 0


def cmd_decode(args) -> int:
    payload = decode_join_tournament(args.calldata)
    session = ProofSession(ViewerConfig())
    if args.zoom is not None:
        session.set_zoom(args.zoom)
    if not session.load_payload(payload):
        print("Proof data is empty", file=sys.stderr)
        return 2
    emit(session, args.format, args.output)
    return 0


def cmd_zero(args) -> int:
    session = ProofSession(ViewerConfig())
    if args.zoom is not None:
        session.set_zoom(args.zoom)
    session.load_zero()
    emit(session, args.format, args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='merkleviz',
        description='Recompute and visualize a Merkle inclusion proof',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    merkleviz zero --format json
    merkleviz show --leaf 0x00..00 --proof 0xaa..aa 0xbb..bb --pattern LR
    merkleviz decode 0x<calldata> --format svg -o proof.svg
        """
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--format', '-f', choices=['text', 'json', 'svg'], default='text')
    common.add_argument('--output', '-o', type=Path, default=None, help='Write output to file')
    common.add_argument('--zoom', type=float, default=None, help='Zoom factor (0.5 - 2.0)')

    tree_args = argparse.ArgumentParser(add_help=False)
    tree_args.add_argument('--leaf', default=None, help='Leaf digest (final state), zero when omitted with --proof')
    tree_args.add_argument('--proof', nargs='*', default=[], help='Proof digests, bottom-up')
    tree_args.add_argument('--pattern', default=None, help='Orientation, top level first: L/R per level')
    tree_args.add_argument('--height', type=int, default=None, help='Tree height when no proof is given')

    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('show', parents=[common, tree_args], help='Build and print a proof tree')
    p.set_defaults(func=cmd_show)

    p = sub.add_parser('edit', parents=[common, tree_args], help='Apply edits, then print')
    p.add_argument('--set', action='append', default=[], metavar='ID=HEX',
                   help='Edit a leaf or sibling label (repeatable, applied in order)')
    p.set_defaults(func=cmd_edit)

    p = sub.add_parser('decode', parents=[common], help='Decode joinTournament call data')
    p.add_argument('calldata', help='0x-prefixed transaction input')
    p.set_defaults(func=cmd_decode)

    p = sub.add_parser('zero', parents=[common], help='Blank input: all-zero proof')
    p.set_defaults(func=cmd_zero)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        return args.func(args)
    except ValueError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == '__main__':
    sys.exit(main())
