"""
chunktree - binary Merkle trees over chunked byte buffers.

Build a tree once from an in-memory buffer, hand out inclusion proofs
for individual chunks, and verify them anywhere the root is known.
"""

from chunktree.crypto.hashing import hash_leaf, hash_pair
from chunktree.merkle import (
    InclusionProof,
    MerkleTree,
    ProofStep,
    build,
    verify_proof,
)

__version__ = "0.1.0"

__all__ = [
    "hash_leaf",
    "hash_pair",
    "InclusionProof",
    "MerkleTree",
    "ProofStep",
    "build",
    "verify_proof",
]
