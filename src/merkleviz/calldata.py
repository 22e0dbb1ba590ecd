"""
joinTournament Call Data

The proof payload travels as the input of a contract call:

    joinTournament(bytes32 finalState, bytes32[] proof,
                   bytes32 leftNode, bytes32 rightNode)

Decoding turns transaction input into a ProofPayload; encoding turns the
current tree labels back into call data for submission.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import decode_hex, function_signature_to_4byte_selector

from .digest import parse_digest, to_label
from .errors import CalldataError, MalformedDigestError
from .nodes import NodeId
from .tree import ProofTree

JOIN_TOURNAMENT_SIGNATURE = "joinTournament(bytes32,bytes32[],bytes32,bytes32)"

ARG_TYPES = ['bytes32', 'bytes32[]', 'bytes32', 'bytes32']


def selector() -> bytes:
    """4-byte function selector of joinTournament."""
    return function_signature_to_4byte_selector(JOIN_TOURNAMENT_SIGNATURE)


@dataclass(frozen=True)
class ProofPayload:
    """Arguments of a joinTournament call, as 0x-prefixed labels."""

    final_state: str
    proof: Tuple[str, ...]
    left_node: str
    right_node: str

    @property
    def height(self) -> int:
        return len(self.proof)

    @classmethod
    def from_tree(cls, tree: ProofTree) -> 'ProofPayload':
        """
        Read the call arguments off the tree's current labels.

        proof is bottom-up (sib-H first), the final state is the leaf,
        and the outermost step is (sib-1, path-1).
        """
        if tree.height == 0:
            raise CalldataError("A tree of height 0 has no outermost proof step")
        siblings = tuple(
            tree.label(NodeId.sibling(level)) for level in range(tree.height, 0, -1)
        )
        return cls(
            final_state=tree.label(tree.leaf_id),
            proof=siblings,
            left_node=tree.label(NodeId.sibling(1)),
            right_node=tree.label(NodeId.path(1)),
        )

    def to_args(self) -> Tuple[bytes, Tuple[bytes, ...], bytes, bytes]:
        """
        Strictly parsed call arguments.

        Raises:
            MalformedDigestError: if any label is a placeholder or malformed
        """
        return (
            parse_digest(self.final_state),
            tuple(parse_digest(p) for p in self.proof),
            parse_digest(self.left_node),
            parse_digest(self.right_node),
        )

    def to_dict(self) -> dict:
        return {
            'finalState': self.final_state,
            'proof': list(self.proof),
            'leftNode': self.left_node,
            'rightNode': self.right_node,
        }


def decode_join_tournament(data: Union[bytes, str]) -> ProofPayload:
    """
    Decode joinTournament call data (selector included).

    Raises:
        CalldataError: on a different selector or an undecodable body
    """
    if isinstance(data, str):
        try:
            raw = decode_hex(data.strip())
        except ValueError as e:
            raise CalldataError(f"Call data is not hex: {e}") from e
    else:
        raw = bytes(data)
    if raw[:4] != selector():
        raise CalldataError(f"Not a joinTournament call: selector 0x{raw[:4].hex()}")

    try:
        final_state, proof, left, right = decode(ARG_TYPES, raw[4:])
    except DecodingError as e:
        raise CalldataError(f"Cannot decode joinTournament arguments: {e}") from e

    return ProofPayload(
        final_state=to_label(final_state),
        proof=tuple(to_label(p) for p in proof),
        left_node=to_label(left),
        right_node=to_label(right),
    )


def encode_join_tournament(payload: ProofPayload) -> bytes:
    """
    Encode a payload as joinTournament call data.

    Raises:
        MalformedDigestError: if a label is not a 32-byte digest
    """
    final_state, proof, left, right = payload.to_args()
    try:
        body = encode(ARG_TYPES, [final_state, list(proof), left, right])
    except EncodingError as e:
        raise MalformedDigestError(f"Cannot encode joinTournament arguments: {e}") from e
    return selector() + body
