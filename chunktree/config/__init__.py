"""
Runtime Configuration Module

Provides configuration loading and management for chunktree.
"""

from .runtime import (
    RuntimeConfig,
    TreeConfig,
    LoggingConfig,
    TrailingBytesPolicy,
    get_default_config,
    set_default_config,
    get_default_config_template,
)

__all__ = [
    "RuntimeConfig",
    "TreeConfig",
    "LoggingConfig",
    "TrailingBytesPolicy",
    "get_default_config",
    "set_default_config",
    "get_default_config_template",
]
