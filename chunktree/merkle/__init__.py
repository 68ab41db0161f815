"""
Merkle Tree and Inclusion Proofs
Array-backed tree construction over a chunked buffer, proof extraction
and tree-independent verification.

This module provides:
- TreeIndex: Parent/sibling/child arithmetic over the flat node array
- MerkleTree / build: Immutable tree built from a buffer and a leaf count
- InclusionProof / ProofStep: Proof value type
- verify_proof: Recompute and compare a root from an item and a proof
- encode_proof / decode_proof: 33-byte record wire format

Commitment Rules:
1. Leaf hashing: leaf = sha256(chunk)
2. Parent hashing: node[leaves + i] = sha256(node[2i + 1] + node[2i])
3. Leaf count must be a power of two
4. Single leaf: root = leaf

Usage:
    from chunktree.merkle import build, verify_proof

    tree = build(data, leaves=4)
    proof = tree.proof(chunk, 2)
    assert verify_proof(chunk, tree.root, proof)
"""
from .tree_index import (
    TreeIndex,
    is_power_of_two,
)

from .merkle_proofs import (
    ProofStep,
    InclusionProof,
    verify_proof,
    MerkleProver,
    MerkleVerifier,
)

from .merkle_tree import (
    MerkleTree,
    build,
    chunk_data,
)

from .proof_codec import (
    encode_proof,
    decode_proof,
)


__all__ = [
    # Core types
    "TreeIndex",
    "MerkleTree",
    "ProofStep",
    "InclusionProof",
    # Core functions
    "is_power_of_two",
    "build",
    "chunk_data",
    "verify_proof",
    "encode_proof",
    "decode_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
