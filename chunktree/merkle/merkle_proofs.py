"""
Merkle Inclusion Proofs
Proof value type, standalone verification, and convenience wrappers.

This module provides:
- ProofStep: One (sibling hash, orientation flag) pair
- InclusionProof: Immutable leaf-to-root sequence of ProofSteps
- verify_proof: Recompute a root from an item and a proof
- MerkleProver: Proof generation bound to a built tree
- MerkleVerifier: Verification helpers, including a raising variant

Verification Rules:
1. candidate = hash_leaf(item)
2. For each step, leaf to root:
   - sibling_on_right: candidate = hash_pair(candidate, sibling)
   - otherwise:        candidate = hash_pair(sibling, candidate)
3. Proof is valid iff candidate == root

verify_proof never needs the tree. It is the side of the protocol held
by a party that only knows the root.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator, NamedTuple, Optional, Sequence, Union

from chunktree.crypto.hashing import HASH_SIZE, Hash256, from_hex_digest, hash_leaf, hash_pair
from chunktree.schemas.errors import ErrorCodes, MerkleVerificationException

if TYPE_CHECKING:
    from chunktree.merkle.merkle_tree import MerkleTree
    from chunktree.schemas.proof import ProofDocument


class ProofStep(NamedTuple):
    """
    One level of an inclusion proof.

    Attributes:
        sibling: Hash of the node paired with the current node
        sibling_on_right: True when the current node is the left hash
            operand, so the sibling goes on the right when re-hashing
    """
    sibling: Hash256
    sibling_on_right: bool


@dataclass(frozen=True)
class InclusionProof:
    """
    Ordered proof path from a leaf up to, not including, the root.

    Carries no reference to the tree it came from. Behaves as a read-only
    sequence of ProofStep so it can be passed anywhere a list of
    ``(bytes, bool)`` pairs is expected.
    """
    steps: tuple[ProofStep, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "steps",
            tuple(ProofStep(sibling, on_right) for sibling, on_right in self.steps),
        )

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[bytes, bool]]) -> "InclusionProof":
        """Build a proof from any iterable of (sibling, sibling_on_right) pairs."""
        return cls(steps=tuple(pairs))

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[ProofStep]:
        return iter(self.steps)

    def __getitem__(self, i: int) -> ProofStep:
        return self.steps[i]

    @property
    def siblings(self) -> list[Hash256]:
        return [step.sibling for step in self.steps]

    @property
    def flags(self) -> list[bool]:
        return [step.sibling_on_right for step in self.steps]

    def to_bytes(self) -> bytes:
        """Encode with the length-prefixed 33-byte record wire format."""
        from chunktree.merkle.proof_codec import encode_proof
        return encode_proof(self)

    @classmethod
    def from_bytes(cls, data: bytes) -> "InclusionProof":
        """Decode the wire format produced by to_bytes()."""
        from chunktree.merkle.proof_codec import decode_proof
        return decode_proof(data)

    def to_document(self, root: Hash256, leaf_index: int, leaves: int) -> "ProofDocument":
        """Wrap this proof in a JSON-serializable ProofDocument."""
        from chunktree.schemas.proof import ProofDocument
        return ProofDocument.from_proof(self, root=root, leaf_index=leaf_index, leaves=leaves)


ProofLike = Union[InclusionProof, Sequence[tuple[bytes, bool]]]

_BYTES_LIKE = (bytes, bytearray, memoryview)


def _is_valid_step(step: object) -> bool:
    if not isinstance(step, (tuple, list)) or len(step) != 2:
        return False
    sibling, on_right = step
    return (
        isinstance(sibling, (bytes, bytearray))
        and len(sibling) == HASH_SIZE
        and isinstance(on_right, bool)
    )


def verify_proof(item: bytes, root: Hash256, proof: Optional[ProofLike]) -> bool:
    """
    Verify that ``item`` is committed to by ``root``.

    Args:
        item: Claimed leaf data (the raw chunk, not its hash)
        root: Expected 32-byte root
        proof: InclusionProof or sequence of (sibling, sibling_on_right)

    Returns:
        True if the recomputed root equals ``root``, False otherwise.
        Malformed or missing proofs return False rather than raising.
    """
    if not isinstance(proof, InclusionProof) and (
        not isinstance(proof, Sequence) or isinstance(proof, (str, bytes, bytearray))
    ):
        return False
    if not isinstance(item, _BYTES_LIKE) or not isinstance(root, _BYTES_LIKE):
        return False

    candidate = hash_leaf(bytes(item))
    for step in proof:
        if not _is_valid_step(step):
            return False
        sibling, on_right = step
        if on_right:
            candidate = hash_pair(candidate, bytes(sibling))
        else:
            candidate = hash_pair(bytes(sibling), candidate)

    return candidate == bytes(root)


class MerkleProver:
    """
    Generates proofs from a built tree.

    Example:
        >>> tree = build(b"asdfjkln12345678", 4)
        >>> prover = MerkleProver(tree)
        >>> proof = prover.prove_chunk(2)
        >>> len(proof)
        2
    """

    def __init__(self, tree: "MerkleTree") -> None:
        self.tree = tree

    def prove(self, item: bytes, index: int) -> Optional[InclusionProof]:
        """Same as MerkleTree.proof(): None when item/index do not match."""
        return self.tree.proof(item, index)

    def prove_chunk(self, index: int) -> InclusionProof:
        """
        Prove the chunk stored at leaf ``index``, without supplying its data.

        Raises:
            IndexError: If index is not a leaf position
        """
        if not self.tree.index.is_leaf(index):
            raise IndexError(
                f"Leaf index {index} out of range for {self.tree.leaves} leaves"
            )
        return InclusionProof.from_pairs(self.tree.path(index))

    def require(self, item: bytes, index: int) -> InclusionProof:
        """
        Like prove(), but raise when the item is not at ``index``.

        Raises:
            MerkleVerificationException: LEAF_HASH_MISMATCH
        """
        proof = self.prove(item, index)
        if proof is None:
            raise MerkleVerificationException(
                f"Item does not match tree node {index}",
                code=ErrorCodes.LEAF_HASH_MISMATCH,
                leaf_index=index,
            )
        return proof


class MerkleVerifier:
    """
    Convenience class for verifying proofs against a known root.

    Example:
        >>> MerkleVerifier.verify(item, tree.root, proof)
        True
    """

    @staticmethod
    def verify(item: bytes, root: Hash256, proof: Optional[ProofLike]) -> bool:
        return verify_proof(item, root, proof)

    @staticmethod
    def verify_hex(item: bytes, root_hex: str, proof: Optional[ProofLike]) -> bool:
        """Verify against a 0x-prefixed hex root. A malformed root returns False."""
        try:
            root = from_hex_digest(root_hex)
        except ValueError:
            return False
        return verify_proof(item, root, proof)

    @staticmethod
    def require_valid(
        item: bytes,
        root: Hash256,
        proof: Optional[ProofLike],
        leaf_index: int | None = None,
    ) -> None:
        """
        Verify a proof and raise if it does not reproduce ``root``.

        Raises:
            MerkleVerificationException: ROOT_MISMATCH
        """
        if not verify_proof(item, root, proof):
            raise MerkleVerificationException(
                "Proof does not reproduce the expected root",
                code=ErrorCodes.ROOT_MISMATCH,
                leaf_index=leaf_index,
                details={"steps": len(proof) if proof is not None else 0},
            )


__all__ = [
    "ProofStep",
    "InclusionProof",
    "ProofLike",
    "verify_proof",
    "MerkleProver",
    "MerkleVerifier",
]
