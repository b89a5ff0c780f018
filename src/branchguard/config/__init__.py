"""Configuration loading, schema, and defaults."""

from branchguard.config.loader import ConfigError, load_config
from branchguard.config.schema import BranchGuardConfig, status_blocks

__all__ = [
    "BranchGuardConfig",
    "ConfigError",
    "load_config",
    "status_blocks",
]
