"""
Crypto primitives for chunktree.

Usage:
    from chunktree.crypto import hash_leaf, hash_pair

    leaf = hash_leaf(b"asdf")
    parent = hash_pair(left, right)
"""
from .hashing import (
    HASH_SIZE,
    Hash256,
    sha256,
    hash_leaf,
    hash_pair,
    to_hex,
    from_hex,
    from_hex_digest,
)


__all__ = [
    "HASH_SIZE",
    "Hash256",
    "sha256",
    "hash_leaf",
    "hash_pair",
    "to_hex",
    "from_hex",
    "from_hex_digest",
]
