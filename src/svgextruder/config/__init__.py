"""Configuration management for svgextruder.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- FlattenConfig: Curve flattening settings
- DetailConfig: Tunable detail level planning constants
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- ExtruderSettings: Main application settings
"""

from svgextruder.config.settings import (
    DetailConfig,
    ExtruderSettings,
    FlattenConfig,
    LoggingConfig,
    ProcessingConfig,
    get_default_settings,
)

__all__ = [
    "DetailConfig",
    "ExtruderSettings",
    "FlattenConfig",
    "LoggingConfig",
    "ProcessingConfig",
    "get_default_settings",
]
