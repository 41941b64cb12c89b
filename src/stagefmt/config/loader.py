"""Load and merge configuration from .stagefmt.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from stagefmt.config.schema import (
    OUTPUT_FORMATS,
    FormatConfig,
    OutputConfig,
    StagefmtConfig,
)

CONFIG_FILENAME = ".stagefmt.toml"


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


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: StagefmtConfig) -> None:
    fmt = cfg.format
    if not isinstance(fmt.formatter, str):
        raise ConfigError("format.formatter must be a string")
    if not isinstance(fmt.patterns, list) or not all(isinstance(p, str) for p in fmt.patterns):
        raise ConfigError("format.patterns must be a list of strings")
    if not isinstance(fmt.jobs, int) or fmt.jobs < 0:
        raise ConfigError("format.jobs must be a non-negative integer")
    if fmt.timeout is not None:
        if not isinstance(fmt.timeout, (int, float)) or fmt.timeout < 0:
            raise ConfigError("format.timeout must be a non-negative number")
        if fmt.timeout == 0:
            fmt.timeout = None
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"output.format must be one of: {', '.join(OUTPUT_FORMATS)}")


def _merge_env_overrides(cfg: StagefmtConfig) -> None:
    """Apply STAGEFMT_* environment variable overrides."""
    if val := os.environ.get("STAGEFMT_FORMATTER"):
        cfg.format.formatter = val
    if val := os.environ.get("STAGEFMT_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("STAGEFMT_JOBS"):
        try:
            jobs = int(val)
        except ValueError:
            pass
        else:
            if jobs >= 0:
                cfg.format.jobs = jobs
    if val := os.environ.get("STAGEFMT_TIMEOUT"):
        try:
            timeout = float(val)
        except ValueError:
            pass
        else:
            if timeout >= 0:
                cfg.format.timeout = timeout or None


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> StagefmtConfig:
    """Load, validate, and return a StagefmtConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = StagefmtConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = StagefmtConfig(
                version=str(raw.get("version", "1.0")),
                format=_build_section(raw, FormatConfig, "format"),
                output=_build_section(raw, OutputConfig, "output"),
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc

    _validate(cfg)
    _merge_env_overrides(cfg)
    return cfg
