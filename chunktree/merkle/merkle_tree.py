"""
Merkle Tree Implementation
Array-backed tree construction over a chunked byte buffer, and proof
extraction.

This module provides:
- chunk_data: Split a buffer into equal leaf chunks
- MerkleTree: Immutable flat-array tree with root and proof access
- build: Construct a MerkleTree from a buffer and a leaf count

Construction Rules (Hard Contracts):
1. chunk_size = len(data) // leaves
2. leaf i = hash_leaf(data[i * chunk_size:(i + 1) * chunk_size])
3. For i in range(leaves - 1), append hash_pair(nodes[2i + 1], nodes[2i])
4. The last appended node is the root; a single-leaf tree's root is its leaf
5. leaves must be a power of two and len(data) >= leaves
6. Bytes beyond leaves * chunk_size follow the TrailingBytesPolicy

The tree is built once and never mutated. Instances can be shared
between threads without locking.
"""
from __future__ import annotations

import logging
from typing import Iterator, Optional, Sequence

from chunktree.config.runtime import TrailingBytesPolicy, get_default_config
from chunktree.crypto.hashing import HASH_SIZE, Hash256, hash_leaf, hash_pair
from chunktree.merkle.merkle_proofs import InclusionProof, ProofStep
from chunktree.merkle.tree_index import TreeIndex
from chunktree.schemas.errors import ErrorCodes, TreePreconditionException


logger = logging.getLogger(__name__)


def _as_bytes(data: object) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TreePreconditionException(
        f"Tree data must be bytes-like, got {type(data).__name__}",
        code=ErrorCodes.INVALID_INPUT_TYPE,
    )


def chunk_data(
    data: bytes,
    leaves: int,
    trailing_bytes: TrailingBytesPolicy | str | None = None,
) -> list[bytes]:
    """
    Split ``data`` into ``leaves`` contiguous chunks of equal size.

    Args:
        data: Complete input buffer
        leaves: Number of chunks (power of two, >= 1)
        trailing_bytes: Policy for bytes beyond ``leaves * chunk_size``.
            None uses the runtime configuration.

    Returns:
        List of ``leaves`` chunks in input order

    Raises:
        TreePreconditionException: On invalid leaf count, input shorter
            than ``leaves`` bytes, or trailing bytes under the ERROR policy
    """
    data = _as_bytes(data)
    TreeIndex(leaves)

    if trailing_bytes is None:
        policy = get_default_config().tree.trailing_bytes
    else:
        policy = TrailingBytesPolicy.parse(trailing_bytes)

    if len(data) < leaves:
        raise TreePreconditionException(
            f"Data of {len(data)} bytes is too short for {leaves} leaves",
            code=ErrorCodes.DATA_TOO_SHORT,
            leaves=leaves,
            data_length=len(data),
        )

    chunk_size = len(data) // leaves
    remainder = len(data) - chunk_size * leaves

    if remainder:
        if policy is TrailingBytesPolicy.ERROR:
            raise TreePreconditionException(
                f"Data length {len(data)} is not a multiple of {leaves} leaves "
                f"({remainder} trailing bytes)",
                code=ErrorCodes.TRAILING_BYTES,
                leaves=leaves,
                data_length=len(data),
                details={"trailing_bytes": remainder},
            )
        if policy is TrailingBytesPolicy.DROP:
            logger.warning(
                f"Dropping {remainder} trailing bytes not covered by {leaves} chunks of {chunk_size}"
            )

    chunks = [data[i * chunk_size:(i + 1) * chunk_size] for i in range(leaves)]
    if remainder and policy is TrailingBytesPolicy.EXTEND:
        chunks[-1] = data[(leaves - 1) * chunk_size:]
    return chunks


class MerkleTree:
    """
    Immutable binary Merkle tree stored as one flat sequence of hashes.

    Positions ``[0, leaves)`` hold leaf hashes, ``[leaves, size - 1)`` the
    internal nodes in construction order and ``size - 1`` the root.
    Navigation goes through ``self.index`` (a TreeIndex).
    """

    __slots__ = ("_nodes", "_index")

    def __init__(self, nodes: Sequence[bytes], leaves: int) -> None:
        index = TreeIndex(leaves)
        if len(nodes) != index.size:
            raise TreePreconditionException(
                f"Expected {index.size} nodes for {leaves} leaves, got {len(nodes)}",
                code=ErrorCodes.INVALID_LEAF_COUNT,
                leaves=leaves,
            )
        nodes = tuple(bytes(n) for n in nodes)
        for i in range(leaves - 1):
            if nodes[leaves + i] != hash_pair(nodes[2 * i + 1], nodes[2 * i]):
                raise TreePreconditionException(
                    f"Node {leaves + i} does not hash its children",
                    code=ErrorCodes.INVALID_TREE_LAYOUT,
                    leaves=leaves,
                    details={"node": leaves + i},
                )
        self._nodes: tuple[bytes, ...] = nodes
        self._index = index

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, "_index"):
            raise AttributeError(f"{type(self).__name__} is immutable")
        object.__setattr__(self, name, value)

    @classmethod
    def from_leaf_hashes(cls, leaf_hashes: Sequence[Hash256]) -> "MerkleTree":
        """
        Build a tree from already-hashed leaves.

        Raises:
            TreePreconditionException: If the leaf count is not a power of
                two or a leaf is not a 32-byte digest
        """
        leaves = len(leaf_hashes)
        index = TreeIndex(leaves)
        for i, leaf in enumerate(leaf_hashes):
            if not isinstance(leaf, (bytes, bytearray)) or len(leaf) != HASH_SIZE:
                raise TreePreconditionException(
                    f"Leaf hash {i} must be {HASH_SIZE} bytes",
                    code=ErrorCodes.INVALID_INPUT_TYPE,
                    leaves=leaves,
                )

        nodes: list[bytes] = [bytes(leaf) for leaf in leaf_hashes]
        for i in range(leaves - 1):
            nodes.append(hash_pair(nodes[2 * i + 1], nodes[2 * i]))

        return cls._from_built_nodes(nodes, index)

    @classmethod
    def _from_built_nodes(cls, nodes: list[bytes], index: TreeIndex) -> "MerkleTree":
        tree = object.__new__(cls)
        object.__setattr__(tree, "_nodes", tuple(nodes))
        object.__setattr__(tree, "_index", index)
        return tree

    @classmethod
    def build(
        cls,
        data: bytes,
        leaves: int,
        trailing_bytes: TrailingBytesPolicy | str | None = None,
    ) -> "MerkleTree":
        """Chunk ``data`` into ``leaves`` pieces, hash them and build the tree."""
        chunks = chunk_data(data, leaves, trailing_bytes)
        tree = cls.from_leaf_hashes([hash_leaf(chunk) for chunk in chunks])
        logger.debug(
            f"Built tree: {leaves} leaves of {len(chunks[0])} bytes, {tree.size} nodes"
        )
        return tree

    @property
    def leaves(self) -> int:
        return self._index.leaves

    @property
    def size(self) -> int:
        return len(self._nodes)

    @property
    def root(self) -> Hash256:
        return self._nodes[self.size - 1]

    @property
    def nodes(self) -> tuple[bytes, ...]:
        return self._nodes

    @property
    def index(self) -> TreeIndex:
        return self._index

    @property
    def depth(self) -> int:
        return self._index.depth

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MerkleTree):
            return NotImplemented
        return self._nodes == other._nodes

    def __hash__(self) -> int:
        return hash(self._nodes)

    def __repr__(self) -> str:
        return f"MerkleTree(leaves={self.leaves}, size={self.size}, root=0x{self.root.hex()})"

    def node(self, idx: int) -> Hash256:
        """Hash stored at position ``idx``."""
        if not 0 <= idx < self.size:
            raise IndexError(f"Node index {idx} out of range for tree of size {self.size}")
        return self._nodes[idx]

    def leaf_hashes(self) -> tuple[bytes, ...]:
        return self._nodes[:self.leaves]

    def path(self, idx: int) -> list[ProofStep]:
        """
        Sibling hashes and orientation flags from ``idx`` up to the root.

        The flag is True when the current position is odd, which makes it
        the left hash operand and puts its sibling on the right.
        """
        return [
            ProofStep(self._nodes[self._index.sibling(current)], current % 2 != 0)
            for current in self._index.path_to_root(idx)
        ]

    def proof(self, item: bytes, idx: int) -> Optional[InclusionProof]:
        """
        Build an inclusion proof for ``item`` stored at position ``idx``.

        Returns:
            InclusionProof, or None if ``idx`` is out of range or
            hash_leaf(item) differs from the stored hash
        """
        if not isinstance(item, (bytes, bytearray, memoryview)):
            return None
        if idx < 0 or idx >= self.size:
            logger.debug(f"No proof: index {idx} outside tree of size {self.size}")
            return None
        if hash_leaf(bytes(item)) != self._nodes[idx]:
            logger.debug(f"No proof: item does not match node {idx}")
            return None
        return InclusionProof.from_pairs(self.path(idx))


def build(
    data: bytes,
    leaves: int,
    trailing_bytes: TrailingBytesPolicy | str | None = None,
) -> MerkleTree:
    """
    Build a Merkle tree over ``data`` split into ``leaves`` chunks.

    Example:
        >>> tree = build(b"asdfjkln12345678", 4)
        >>> tree.leaves, tree.size
        (4, 7)
    """
    return MerkleTree.build(data, leaves, trailing_bytes)


__all__ = [
    "chunk_data",
    "MerkleTree",
    "build",
]
