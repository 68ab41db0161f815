"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m chunktree_cli build <file> --leaves N [--trailing-bytes P] [--json]
    python -m chunktree_cli prove <file> --leaves N --index I [--out PATH] [--format json|binary]
    python -m chunktree_cli verify <item> --proof PATH [--root HEX] [--format json|binary] [--json]
    python -m chunktree_cli config --init|--show

Environment Variables:
    CHUNKTREE_TRAILING_BYTES    Trailing bytes policy: error, drop, extend (default: error)
    CHUNKTREE_LOG_LEVEL         Log level (default: INFO)
    CHUNKTREE_LOG_FILE          Additional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from chunktree.config import TrailingBytesPolicy, get_default_config_template
from chunktree.schemas.errors import ChunkTreeException
from chunktree_cli.commands import build, prove, verify
from chunktree_cli.config import load_config


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="chunktree",
        description="Build Merkle trees over chunked files, produce and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: ./chunktree.yaml or ~/.config/chunktree/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    policies = [p.value for p in TrailingBytesPolicy]

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a tree over a file and print its root",
    )
    build_parser.add_argument("file", type=str, help="Input data file")
    build_parser.add_argument(
        "--leaves", "-n",
        type=_positive_int,
        required=True,
        help="Number of leaf chunks (power of two)",
    )
    build_parser.add_argument(
        "--trailing-bytes",
        choices=policies,
        default=None,
        help="Handling of bytes beyond leaves * chunk_size (overrides config)",
    )
    build_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    build_parser.set_defaults(func=build.build_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Produce an inclusion proof for one chunk",
    )
    prove_parser.add_argument("file", type=str, help="Input data file")
    prove_parser.add_argument("--leaves", "-n", type=_positive_int, required=True, help="Number of leaf chunks")
    prove_parser.add_argument("--index", "-i", type=int, required=True, help="Leaf index to prove")
    prove_parser.add_argument("--trailing-bytes", choices=policies, default=None)
    prove_parser.add_argument("--out", "-o", type=str, default=None, help="Write proof to this path")
    prove_parser.add_argument("--chunk-out", type=str, default=None, help="Also write the chunk bytes here")
    prove_parser.add_argument(
        "--format",
        choices=["json", "binary"],
        default="json",
        help="Proof encoding (default: json)",
    )
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a chunk against a root and proof",
    )
    verify_parser.add_argument("item", type=str, help="File holding the chunk bytes")
    verify_parser.add_argument("--proof", "-p", type=str, required=True, help="Proof file")
    verify_parser.add_argument(
        "--root", "-r",
        type=str,
        default=None,
        help="Expected 0x-prefixed root (required for binary proofs)",
    )
    verify_parser.add_argument("--format", choices=["json", "binary"], default="json")
    verify_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show effective configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="chunktree.yaml",
        help="Path for config file (default: chunktree.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: chunktree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed / no proof)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.logging.level
    setup_logging(level=log_level, log_file=config.logging.file)

    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ChunkTreeException as e:
        if log_level == "DEBUG":
            traceback.print_exc()
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
