"""
polystrand configuration module.

Contains feature flags and YAML build configuration.
"""

from .feature_flags import FeatureFlags
from .settings import (
    BuildConfig,
    HelixConfig,
    ExportConfig,
    LoggingConfig,
    config_from_dict,
    load_config,
    apply_logging_config,
)

__all__ = [
    "FeatureFlags",
    "BuildConfig",
    "HelixConfig",
    "ExportConfig",
    "LoggingConfig",
    "config_from_dict",
    "load_config",
    "apply_logging_config",
]
