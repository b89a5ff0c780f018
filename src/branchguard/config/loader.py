"""Load and merge configuration from .branchguard.toml and env vars."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from branchguard.config.schema import (
    FAIL_ON_LEVELS,
    OUTPUT_FORMATS,
    BranchGuardConfig,
    CheckConfig,
    OutputConfig,
    RulesConfig,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".branchguard.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: BranchGuardConfig) -> None:
    """Apply CI_BRANCHGUARD_* environment variable overrides."""
    if val := os.environ.get("CI_BRANCHGUARD_FAIL_ON"):
        if val in FAIL_ON_LEVELS:
            cfg.check.fail_on = val  # type: ignore[assignment]
        else:
            logger.warning("Ignoring invalid CI_BRANCHGUARD_FAIL_ON=%r", val)
    if val := os.environ.get("CI_BRANCHGUARD_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
        else:
            logger.warning("Ignoring invalid CI_BRANCHGUARD_FORMAT=%r", val)
    if val := os.environ.get("CI_BRANCHGUARD_RULES_FILE"):
        cfg.rules.file = val
    if val := os.environ.get("CI_BRANCHGUARD_DEFAULT_BRANCH"):
        cfg.rules.default_branch = val


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    section_data = data.get(section, {})
    if not isinstance(section_data, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in section_data.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: BranchGuardConfig) -> None:
    if cfg.check.fail_on not in FAIL_ON_LEVELS:
        raise ConfigError(
            f"Invalid check.fail_on {cfg.check.fail_on!r}; expected one of {FAIL_ON_LEVELS}"
        )
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Invalid output.format {cfg.output.format!r}; expected one of {OUTPUT_FORMATS}"
        )


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> BranchGuardConfig:
    """Load, validate, and return a BranchGuardConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = BranchGuardConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = BranchGuardConfig(
            version=str(raw.get("version", "1.0")),
            rules=_build_section(raw, RulesConfig, "rules"),
            check=_build_section(raw, CheckConfig, "check"),
            output=_build_section(raw, OutputConfig, "output"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
