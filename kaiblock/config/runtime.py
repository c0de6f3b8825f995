"""
Runtime Configuration

Central configuration for proof-of-work defaults, address formatting and
logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "KAIBLOCK_"


@dataclass
class PowConfig:
    """Configuration for proof-of-work mining."""
    difficulty_bits: int = 16
    max_nonce: int = 2_000_000


@dataclass
class AddressConfig:
    """Configuration for address formatting."""
    default_type: str = "base58"  # "base58", "hex-checksum" or "hex"


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for kaiblock.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML file
    - Programmatic construction
    """
    pow: PowConfig = field(default_factory=PowConfig)
    address: AddressConfig = field(default_factory=AddressConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def _get_env_overrides(cls) -> dict[str, Any]:
        """
        Collect overrides from environment variables.

        Environment variables:
        - KAIBLOCK_POW_DIFFICULTY_BITS: Default PoW difficulty in bits
        - KAIBLOCK_POW_MAX_NONCE: Nonce search limit
        - KAIBLOCK_ADDRESS_TYPE: Default address format
        - KAIBLOCK_LOG_LEVEL: Log level
        - KAIBLOCK_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}POW_DIFFICULTY_BITS"):
            overrides.setdefault("pow", {})["difficulty_bits"] = int(
                os.getenv(f"{ENV_PREFIX}POW_DIFFICULTY_BITS", "16")
            )
        if os.getenv(f"{ENV_PREFIX}POW_MAX_NONCE"):
            overrides.setdefault("pow", {})["max_nonce"] = int(
                os.getenv(f"{ENV_PREFIX}POW_MAX_NONCE", "2000000")
            )

        if os.getenv(f"{ENV_PREFIX}ADDRESS_TYPE"):
            overrides.setdefault("address", {})["default_type"] = os.getenv(
                f"{ENV_PREFIX}ADDRESS_TYPE"
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        pow_data = data.get("pow", {})
        address_data = data.get("address", {})
        logging_data = data.get("logging", {})

        return cls(
            pow=PowConfig(**pow_data) if pow_data else PowConfig(),
            address=AddressConfig(**address_data) if address_data else AddressConfig(),
            logging=LoggingConfig(**logging_data) if logging_data else LoggingConfig(),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for section in ("pow", "address", "logging"):
            for key, value in overrides.get(section, {}).items():
                setattr(getattr(new_config, section), key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "pow": {
                "difficulty_bits": self.pow.difficulty_bits,
                "max_nonce": self.pow.max_nonce,
            },
            "address": {
                "default_type": self.address.default_type,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
