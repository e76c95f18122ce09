"""Configuration models and loaders."""

from .config import Config, MonitoringConfig, ResolverConfig, ScoringConfig, find_config_file, load_config

__all__ = [
    "Config",
    "MonitoringConfig",
    "ResolverConfig",
    "ScoringConfig",
    "find_config_file",
    "load_config",
]
