"""
Flat-Array Tree Index
Position arithmetic for a complete binary tree stored in one list.

Layout for ``leaves = L`` (a power of two):
- ``[0, L)`` hold leaf hashes in input order
- ``[L, 2L - 1)`` hold internal nodes in the order they were computed
- ``2L - 2`` is the root

Internal node ``L + i`` is built from positions ``2i + 1`` (left operand)
and ``2i`` (right operand). The odd position is the left operand; every
formula here follows that pairing.
"""
from __future__ import annotations

from dataclasses import dataclass

from chunktree.schemas.errors import ErrorCodes, TreePreconditionException


def is_power_of_two(n: int) -> bool:
    """Return True when n is a positive power of two (1, 2, 4, ...)."""
    return n > 0 and (n & (n - 1)) == 0


@dataclass(frozen=True)
class TreeIndex:
    """
    Index calculator for a tree with a fixed leaf count.

    Example:
        >>> ix = TreeIndex(4)
        >>> ix.size, ix.root
        (7, 6)
        >>> ix.parent(2), ix.sibling(2)
        (5, 3)
        >>> ix.left_child(5), ix.right_child(5)
        (3, 2)
    """
    leaves: int

    def __post_init__(self) -> None:
        if isinstance(self.leaves, bool) or not isinstance(self.leaves, int):
            raise TreePreconditionException(
                f"Leaf count must be an int, got {type(self.leaves).__name__}",
                code=ErrorCodes.INVALID_INPUT_TYPE,
            )
        if self.leaves < 1:
            raise TreePreconditionException(
                f"Leaf count must be at least 1, got {self.leaves}",
                code=ErrorCodes.INVALID_LEAF_COUNT,
                leaves=self.leaves,
            )
        if not is_power_of_two(self.leaves):
            raise TreePreconditionException(
                f"Leaf count must be a power of two, got {self.leaves}",
                code=ErrorCodes.LEAF_COUNT_NOT_POWER_OF_TWO,
                leaves=self.leaves,
            )

    @property
    def size(self) -> int:
        """Total number of nodes (leaves plus internal nodes)."""
        return 2 * self.leaves - 1

    @property
    def root(self) -> int:
        """Position of the root node."""
        return self.size - 1

    @property
    def depth(self) -> int:
        """Number of levels between a leaf and the root (proof length)."""
        return self.leaves.bit_length() - 1

    def is_leaf(self, idx: int) -> bool:
        return 0 <= idx < self.leaves

    def is_root(self, idx: int) -> bool:
        return idx == self.root

    def _check(self, idx: int) -> None:
        if not 0 <= idx < self.size:
            raise IndexError(
                f"Node index {idx} out of range for tree of size {self.size}"
            )

    def parent(self, idx: int) -> int:
        """Position of the parent of ``idx``. The root has no parent."""
        self._check(idx)
        if self.is_root(idx):
            raise IndexError("Root node has no parent")
        return idx // 2 + self.leaves

    def sibling(self, idx: int) -> int:
        """Position of the node paired with ``idx`` at its level."""
        self._check(idx)
        if self.is_root(idx):
            raise IndexError("Root node has no sibling")
        return idx + 1 if idx % 2 == 0 else idx - 1

    def left_child(self, idx: int) -> int:
        """Position of the left hash operand of internal node ``idx``."""
        self._check(idx)
        if self.is_leaf(idx):
            raise IndexError(f"Leaf node {idx} has no children")
        return 2 * (idx - self.leaves) + 1

    def right_child(self, idx: int) -> int:
        """Position of the right hash operand of internal node ``idx``."""
        self._check(idx)
        if self.is_leaf(idx):
            raise IndexError(f"Leaf node {idx} has no children")
        return 2 * (idx - self.leaves)

    def path_to_root(self, idx: int) -> list[int]:
        """Positions visited from ``idx`` up to, not including, the root."""
        self._check(idx)
        positions: list[int] = []
        current = idx
        while not self.is_root(current):
            positions.append(current)
            current = self.parent(current)
        return positions


__all__ = [
    "is_power_of_two",
    "TreeIndex",
]
