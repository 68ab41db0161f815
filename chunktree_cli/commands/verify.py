"""
CLI Verify Command

Check that a chunk is committed to by a root, using only the chunk,
the root and a proof file. The rest of the data set is not needed.

Usage:
    chunktree verify chunk.bin --proof proof.json [--root 0x...] [--json]
    chunktree verify chunk.bin --proof proof.bin --format binary --root 0x...
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path

from pydantic import ValidationError

from chunktree.crypto.hashing import from_hex_digest, to_hex
from chunktree.merkle import InclusionProof, MerkleVerifier
from chunktree.schemas.errors import ProofEncodingException
from chunktree.schemas.proof import ProofDocument


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    item_path: str = ""
    proof_path: str = ""
    root: str = ""
    steps: int = 0
    ok: bool = False


def load_proof(path: Path, fmt: str) -> tuple[InclusionProof, bytes | None]:
    """
    Load a proof file.

    Returns:
        The proof and, for JSON documents, the root recorded in it
    """
    if fmt == "binary":
        return InclusionProof.from_bytes(path.read_bytes()), None
    document = ProofDocument.model_validate_json(path.read_bytes())
    return document.to_proof(), document.root_bytes()


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    item_path = Path(args.item)
    proof_path = Path(args.proof)
    for p in (item_path, proof_path):
        if not p.exists():
            print(f"Error: File not found: {p}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

    try:
        proof, document_root = load_proof(proof_path, args.format)
    except (ProofEncodingException, ValidationError) as e:
        print(f"Error loading proof: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.root:
        try:
            root = from_hex_digest(args.root)
        except ValueError as e:
            print(f"Error: invalid --root: {e}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        if document_root is not None and document_root != root:
            logger.warning("Root in proof document differs from --root; using --root")
    elif document_root is not None:
        root = document_root
    else:
        print("Error: --root is required for binary proofs", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    item = item_path.read_bytes()
    ok = MerkleVerifier.verify(item, root, proof)
    logger.info(f"Verification of {item_path} against {to_hex(root)}: {ok}")

    summary = VerifySummary(
        item_path=str(item_path),
        proof_path=str(proof_path),
        root=to_hex(root),
        steps=len(proof),
        ok=ok,
    )

    if args.json:
        print(json.dumps(asdict(summary), indent=2))
    else:
        print(f"item: {summary.item_path}")
        print(f"root: {summary.root}")
        print(f"steps: {summary.steps}")
        print(f"ok: {str(summary.ok).lower()}")

    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
