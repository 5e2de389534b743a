"""Utility functions for svgextruder.

This module provides utility functions including:

- Logging setup and configuration
- Processing statistics tracking
"""

from svgextruder.utils.logging import (
    ProcessingLogger,
    ProcessingStats,
    configure_logging,
)

__all__ = [
    "ProcessingLogger",
    "ProcessingStats",
    "configure_logging",
]
