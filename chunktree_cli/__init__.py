"""
chunktree CLI

Command-line interface for building trees and handling inclusion proofs.

Usage:
    python -m chunktree_cli build data.bin --leaves 8
    python -m chunktree_cli prove data.bin --leaves 8 --index 3 --out proof.json
    python -m chunktree_cli verify chunk.bin --proof proof.json
    python -m chunktree_cli config --show
"""

__version__ = "0.1.0"
