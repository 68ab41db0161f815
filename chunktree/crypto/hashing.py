"""
Hashing Utilities
Hash primitives for leaf and parent node commitments.

This module provides:
- SHA-256 hashing for raw bytes
- Leaf hashing (digest of a single data chunk)
- Pair hashing (digest of two concatenated child digests)
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Leaves are hashed exactly as sliced, with no domain separation prefix
- Pair hashing is order sensitive: hash_pair(a, b) != hash_pair(b, a)
- All operations are deterministic
"""
from __future__ import annotations

import hashlib


# Size in bytes of every node digest
HASH_SIZE: int = 32

# 32-byte digest
Hash256 = bytes


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_leaf(chunk: bytes) -> Hash256:
    """
    Hash a single data chunk into a leaf value.

    Rule: leaf = sha256(chunk)

    Args:
        chunk: Raw chunk bytes

    Returns:
        32-byte leaf digest
    """
    return sha256(chunk)


def hash_pair(left: Hash256, right: Hash256) -> Hash256:
    """
    Hash two child digests into a parent value.

    Rule: parent = sha256(left + right)

    The left operand's bytes come first. Construction and verification
    must agree on operand order or every proof fails.

    Args:
        left: Left operand digest
        right: Right operand digest

    Returns:
        32-byte parent digest
    """
    return sha256(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def from_hex_digest(hex_string: str) -> Hash256:
    """
    Decode a 0x-prefixed hex string that must hold exactly one digest.

    Raises:
        ValueError: If the string is malformed or not HASH_SIZE bytes long
    """
    value = from_hex(hex_string)
    if len(value) != HASH_SIZE:
        raise ValueError(
            f"Expected a {HASH_SIZE}-byte digest, got {len(value)} bytes"
        )
    return value


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
