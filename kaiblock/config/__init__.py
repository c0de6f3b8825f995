"""
Runtime Configuration Module

Provides configuration loading and management for kaiblock.
"""

from .runtime import (
    RuntimeConfig,
    PowConfig,
    AddressConfig,
    LoggingConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "RuntimeConfig",
    "PowConfig",
    "AddressConfig",
    "LoggingConfig",
    "get_default_config",
    "set_default_config",
]
