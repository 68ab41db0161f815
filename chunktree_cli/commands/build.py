"""
CLI Build Command

Build a tree over a file and report its shape and root.

Usage:
    chunktree build data.bin --leaves 8 [--trailing-bytes drop] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path

from chunktree.crypto.hashing import to_hex
from chunktree.merkle import MerkleTree
from chunktree.schemas.errors import TreePreconditionException


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class BuildSummary:
    """Summary of a built tree for CLI output."""
    path: str = ""
    data_length: int = 0
    leaves: int = 0
    size: int = 0
    depth: int = 0
    root: str = ""


def resolve_trailing_bytes(args: Namespace):
    """Trailing bytes policy from the command line, else the loaded config."""
    if getattr(args, "trailing_bytes", None):
        return args.trailing_bytes
    return args.cli_config.tree.trailing_bytes


def load_tree(path: Path, leaves: int, trailing_bytes) -> tuple[bytes, MerkleTree]:
    """Read ``path`` and build a tree over its contents."""
    data = path.read_bytes()
    logger.info(f"Building tree over {path} ({len(data)} bytes, {leaves} leaves)")
    return data, MerkleTree.build(data, leaves, trailing_bytes)


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    path = Path(args.file)
    if not path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        data, tree = load_tree(path, args.leaves, resolve_trailing_bytes(args))
    except TreePreconditionException as e:
        if args.json:
            print(json.dumps(e.to_error_model().model_dump(), indent=2))
        else:
            print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = BuildSummary(
        path=str(path),
        data_length=len(data),
        leaves=tree.leaves,
        size=tree.size,
        depth=tree.depth,
        root=to_hex(tree.root),
    )

    if args.json:
        print(json.dumps(asdict(summary), indent=2))
    else:
        print(f"file: {summary.path}")
        print(f"bytes: {summary.data_length}")
        print(f"leaves: {summary.leaves}")
        print(f"size: {summary.size}")
        print(f"depth: {summary.depth}")
        print(f"root: {summary.root}")

    return EXIT_SUCCESS
