"""Configuration loading, schema, and defaults."""

from stagefmt.config.loader import ConfigError, load_config
from stagefmt.config.schema import FormatConfig, OutputConfig, StagefmtConfig

__all__ = [
    "ConfigError",
    "FormatConfig",
    "OutputConfig",
    "StagefmtConfig",
    "load_config",
]
