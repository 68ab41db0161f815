"""
CLI Prove Command

Produce an inclusion proof for one chunk of a file.

Usage:
    chunktree prove data.bin --leaves 8 --index 3 [--out proof.json]
    chunktree prove data.bin --leaves 8 --index 3 --format binary --out proof.bin
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from chunktree.merkle import MerkleProver, chunk_data
from chunktree.schemas.errors import MerkleVerificationException, TreePreconditionException
from chunktree_cli.commands.build import load_tree, resolve_trailing_bytes


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_NO_PROOF = 2


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    path = Path(args.file)
    if not path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    trailing_bytes = resolve_trailing_bytes(args)
    try:
        data, tree = load_tree(path, args.leaves, trailing_bytes)
    except TreePreconditionException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if not tree.index.is_leaf(args.index):
        print(
            f"No proof: index {args.index} is not a leaf of a {tree.leaves}-leaf tree",
            file=sys.stderr,
        )
        return EXIT_NO_PROOF

    chunk = chunk_data(data, args.leaves, trailing_bytes)[args.index]
    try:
        proof = MerkleProver(tree).require(chunk, args.index)
    except MerkleVerificationException as e:
        print(f"No proof: {e.message}", file=sys.stderr)
        return EXIT_NO_PROOF

    logger.info(f"Proof for chunk {args.index} has {len(proof)} steps")

    if args.chunk_out:
        Path(args.chunk_out).write_bytes(chunk)

    if args.format == "binary":
        payload = proof.to_bytes()
        if args.out:
            Path(args.out).write_bytes(payload)
            print(f"Wrote {len(payload)}-byte proof to {args.out}")
        else:
            print(payload.hex())
        return EXIT_SUCCESS

    document = proof.to_document(root=tree.root, leaf_index=args.index, leaves=tree.leaves)
    text = document.model_dump_json(indent=2)
    if args.out:
        Path(args.out).write_text(text + "\n")
        print(f"Wrote proof to {args.out}")
    else:
        print(text)
    return EXIT_SUCCESS
