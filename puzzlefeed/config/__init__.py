"""Configuration management for puzzle feeds."""

from .loader import (
    Config,
    load_catalog,
    load_completed_ids,
    load_config,
    load_profile,
    save_config,
    save_profile,
)
from .models import ConfigModel, FeedConfig, RankingConfig

__all__ = [
    "Config",
    "ConfigModel",
    "FeedConfig",
    "RankingConfig",
    "load_catalog",
    "load_completed_ids",
    "load_config",
    "load_profile",
    "save_config",
    "save_profile",
]
