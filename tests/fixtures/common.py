"""
Common test fixtures shared by all modules.

Provides factory functions for trees and their inputs:
- Sample buffers with known chunking
- Built trees
- Chunk extraction mirroring the builder's slicing
"""

from chunktree.merkle import MerkleTree, build


# 4 chunks of 4 bytes: b"asdf", b"jkln", b"1234", b"5678"
SAMPLE_DATA_4 = b"asdfjkln12345678"

# 8 identical chunks of b"asdf"
SAMPLE_DATA_8 = b"asdfasdfasdfasdfasdfasdfasdfasdf"


def make_data(leaves: int, chunk_size: int = 4) -> bytes:
    """Buffer of ``leaves`` distinct chunks, each ``chunk_size`` bytes."""
    return b"".join(
        (f"{i:0{chunk_size}d}"[-chunk_size:]).encode() for i in range(leaves)
    )


def chunk_of(data: bytes, leaves: int, idx: int) -> bytes:
    """The idx-th equal slice of ``data``."""
    size = len(data) // leaves
    return data[idx * size:(idx + 1) * size]


def make_tree(leaves: int = 4, chunk_size: int = 4) -> MerkleTree:
    """Tree over make_data(leaves, chunk_size)."""
    return build(make_data(leaves, chunk_size), leaves)
