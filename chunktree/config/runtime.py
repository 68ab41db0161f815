"""
Runtime Configuration

Central configuration for tree construction and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from chunktree.schemas.errors import ConfigurationException

load_dotenv()


ENV_PREFIX = "CHUNKTREE_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class TrailingBytesPolicy(str, Enum):
    """What to do with bytes beyond ``leaves * chunk_size``."""
    ERROR = "error"
    DROP = "drop"
    EXTEND = "extend"

    @classmethod
    def parse(cls, value: "TrailingBytesPolicy | str") -> "TrailingBytesPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ConfigurationException(
                f"Unknown trailing bytes policy {value!r} (expected one of: {allowed})",
                key="trailing_bytes",
            ) from None


@dataclass
class TreeConfig:
    """Configuration for tree construction."""
    trailing_bytes: TrailingBytesPolicy = TrailingBytesPolicy.ERROR

    def __post_init__(self):
        self.trailing_bytes = TrailingBytesPolicy.parse(self.trailing_bytes)


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None

    def __post_init__(self):
        self.level = str(self.level).upper()
        if self.level not in _LOG_LEVELS:
            raise ConfigurationException(
                f"Unknown log level {self.level!r}",
                key="logging.level",
            )


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - CHUNKTREE_TRAILING_BYTES: error, drop or extend
        - CHUNKTREE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR
        - CHUNKTREE_LOG_FILE: Path of an additional log file
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}TRAILING_BYTES"):
            overrides.setdefault("tree", {})["trailing_bytes"] = os.getenv(
                f"{ENV_PREFIX}TRAILING_BYTES"
            )
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationException(
                f"Config file must contain a mapping, got {type(data).__name__}"
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Create configuration from a dictionary."""
        tree_data = data.get("tree", {}) or {}
        logging_data = data.get("logging", {}) or {}

        try:
            tree = TreeConfig(**tree_data)
            log = LoggingConfig(**logging_data)
        except TypeError as e:
            raise ConfigurationException(f"Invalid configuration: {e}") from e

        return cls(
            tree=tree,
            logging=log,
            extra=data.get("extra", {}) or {},
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "tree" in overrides:
            new_config.tree = TreeConfig(
                **{**self.tree.__dict__, **overrides["tree"]}
            )
        if "logging" in overrides:
            new_config.logging = LoggingConfig(
                **{**self.logging.__dict__, **overrides["logging"]}
            )

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "trailing_bytes": self.tree.trailing_bytes.value,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to env defaults)."""
    global _default_config
    _default_config = config


def get_default_config_template() -> str:
    """Get a template YAML configuration file."""
    return """# chunktree configuration
tree:
  # error | drop | extend
  trailing_bytes: error
logging:
  level: INFO
  file: null
"""
