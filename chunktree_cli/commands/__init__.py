"""
CLI command modules.
"""

from chunktree_cli.commands import build, prove, verify

__all__ = ["build", "prove", "verify"]
