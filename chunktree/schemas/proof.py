"""
Schemas
File: proof.py

Purpose: JSON document for exchanging an inclusion proof with a verifier
that holds only the root.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from chunktree.crypto.hashing import Hash256, from_hex_digest, to_hex

if TYPE_CHECKING:
    from chunktree.merkle.merkle_proofs import InclusionProof


# Current proof document schema version
SCHEMA_VERSION: str = "v1"


def _validate_digest_hex(v: str) -> str:
    from_hex_digest(v)
    return v.lower()


class ProofStepModel(BaseModel):
    """One (sibling, orientation) pair of a proof."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sibling: str = Field(..., description="0x-prefixed hex of the 32-byte sibling hash")
    sibling_on_right: bool = Field(
        ...,
        description="True when the sibling is the right operand at this level",
    )

    @field_validator("sibling")
    @classmethod
    def validate_sibling(cls, v: str) -> str:
        return _validate_digest_hex(v)


class ProofDocument(BaseModel):
    """
    Self-describing inclusion proof.

    ``leaf_index`` and ``leaves`` are informational; verification only
    uses the item, ``root`` and ``steps``.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default=SCHEMA_VERSION)
    leaf_index: int = Field(..., ge=0, description="Position of the proven node")
    leaves: int = Field(..., ge=1, description="Leaf count of the source tree")
    root: str = Field(..., description="0x-prefixed hex of the 32-byte root")
    steps: list[ProofStepModel] = Field(default_factory=list)

    @field_validator("root")
    @classmethod
    def validate_root(cls, v: str) -> str:
        return _validate_digest_hex(v)

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, v: str) -> str:
        if v != SCHEMA_VERSION:
            raise ValueError(f"Unsupported proof schema version: {v}")
        return v

    @model_validator(mode="after")
    def validate_index_in_tree(self) -> "ProofDocument":
        if self.leaf_index >= 2 * self.leaves - 1:
            raise ValueError(
                f"leaf_index {self.leaf_index} outside tree of {self.leaves} leaves"
            )
        return self

    @classmethod
    def from_proof(
        cls,
        proof: "InclusionProof",
        root: Hash256,
        leaf_index: int,
        leaves: int,
    ) -> "ProofDocument":
        return cls(
            leaf_index=leaf_index,
            leaves=leaves,
            root=to_hex(root),
            steps=[
                ProofStepModel(sibling=to_hex(step.sibling), sibling_on_right=step.sibling_on_right)
                for step in proof
            ],
        )

    def root_bytes(self) -> Hash256:
        return from_hex_digest(self.root)

    def to_proof(self) -> "InclusionProof":
        from chunktree.merkle.merkle_proofs import InclusionProof
        return InclusionProof.from_pairs(
            (from_hex_digest(step.sibling), step.sibling_on_right)
            for step in self.steps
        )


__all__ = [
    "SCHEMA_VERSION",
    "ProofStepModel",
    "ProofDocument",
]
