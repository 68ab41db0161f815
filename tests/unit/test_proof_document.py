"""
Proof Document Tests
Tests for chunktree/schemas/proof.py

Covers JSON export/import of proofs and field validation.
"""
import pytest
from pydantic import ValidationError

from chunktree.crypto.hashing import sha256, to_hex
from chunktree.merkle import verify_proof
from chunktree.schemas.proof import SCHEMA_VERSION, ProofDocument, ProofStepModel


class TestFromProof:

    def test_fields(self, tree4):
        proof = tree4.proof(b"1234", 2)

        doc = proof.to_document(root=tree4.root, leaf_index=2, leaves=4)

        assert doc.schema_version == SCHEMA_VERSION
        assert doc.leaf_index == 2
        assert doc.leaves == 4
        assert doc.root == to_hex(tree4.root)
        assert [s.sibling_on_right for s in doc.steps] == [False, True]
        assert doc.steps[0].sibling == to_hex(proof[0].sibling)

    def test_json_round_trip_still_verifies(self, tree4):
        proof = tree4.proof(b"1234", 2)
        text = proof.to_document(root=tree4.root, leaf_index=2, leaves=4).model_dump_json()

        loaded = ProofDocument.model_validate_json(text)

        assert loaded.to_proof() == proof
        assert loaded.root_bytes() == tree4.root
        assert verify_proof(b"1234", loaded.root_bytes(), loaded.to_proof())


class TestValidation:

    def _doc(self, **overrides):
        data = {
            "leaf_index": 0,
            "leaves": 4,
            "root": to_hex(sha256(b"root")),
            "steps": [],
        }
        data.update(overrides)
        return ProofDocument(**data)

    def test_minimal_document(self):
        assert self._doc().steps == []

    def test_rejects_root_without_prefix(self):
        with pytest.raises(ValidationError):
            self._doc(root=sha256(b"root").hex())

    def test_rejects_short_root(self):
        with pytest.raises(ValidationError):
            self._doc(root="0xdeadbeef")

    def test_rejects_bad_sibling(self):
        with pytest.raises(ValidationError):
            ProofStepModel(sibling="0x00", sibling_on_right=True)

    def test_normalizes_hex_case(self):
        upper = "0x" + sha256(b"root").hex().upper()

        assert self._doc(root=upper).root == upper.lower()

    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            self._doc(extra_field=1)

    def test_rejects_unknown_schema_version(self):
        with pytest.raises(ValidationError):
            self._doc(schema_version="v2")

    def test_rejects_index_outside_tree(self):
        with pytest.raises(ValidationError):
            self._doc(leaf_index=7, leaves=4)

    def test_rejects_zero_leaves(self):
        with pytest.raises(ValidationError):
            self._doc(leaves=0)
