"""
CLI Configuration

Locates and loads the YAML configuration file for the CLI.
Environment variables (CHUNKTREE_* prefix) override file settings.
"""

from __future__ import annotations

from pathlib import Path

from chunktree.config import RuntimeConfig


DEFAULT_CONFIG_NAMES = ("chunktree.yaml", ".chunktree.yaml")


def default_config_paths() -> list[Path]:
    """Locations searched when no --config is given, in priority order."""
    paths = [Path.cwd() / name for name in DEFAULT_CONFIG_NAMES]
    paths.append(Path.home() / ".config" / "chunktree" / "config.yaml")
    return paths


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Args:
        config_path: Optional explicit path; must exist if given

    Returns:
        Merged configuration
    """
    if config_path is not None:
        config = RuntimeConfig.from_yaml(config_path)
    else:
        config = RuntimeConfig()
        for default_path in default_config_paths():
            if default_path.exists():
                config = RuntimeConfig.from_yaml(default_path)
                break

    return config.with_env_overrides()
