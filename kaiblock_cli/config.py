"""
CLI Configuration

Configuration management for the kaiblock CLI.
Supports environment variables and JSON configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from kaiblock.config import AddressConfig, LoggingConfig, PowConfig, RuntimeConfig


# Environment variable prefix
ENV_PREFIX = "KAIBLOCK_"


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Proof-of-work defaults
    difficulty_bits: int = 16
    max_nonce: int = 2_000_000

    # Addresses
    address_type: str = "base58"

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    def to_runtime_config(self) -> RuntimeConfig:
        """Build the library-level RuntimeConfig from CLI settings."""
        return RuntimeConfig(
            pow=PowConfig(difficulty_bits=self.difficulty_bits, max_nonce=self.max_nonce),
            address=AddressConfig(default_type=self.address_type),
            logging=LoggingConfig(level=self.log_level, file=self.log_file),
        )

    def to_dict(self) -> dict:
        return {
            "difficulty_bits": self.difficulty_bits,
            "max_nonce": self.max_nonce,
            "address_type": self.address_type,
            "log_level": self.log_level,
            "log_file": self.log_file,
            "default_output_format": self.default_output_format,
        }


def load_config_from_env() -> CLIConfig:
    """Load configuration from environment variables."""
    config = CLIConfig()

    if os.getenv(f"{ENV_PREFIX}POW_DIFFICULTY_BITS"):
        config.difficulty_bits = int(os.getenv(f"{ENV_PREFIX}POW_DIFFICULTY_BITS", "16"))
    if os.getenv(f"{ENV_PREFIX}POW_MAX_NONCE"):
        config.max_nonce = int(os.getenv(f"{ENV_PREFIX}POW_MAX_NONCE", "2000000"))

    config.address_type = os.getenv(f"{ENV_PREFIX}ADDRESS_TYPE", "base58")

    # Logging
    config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO")
    config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")

    return config


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    config = CLIConfig()

    pow_data = data.get("pow", {})
    config.difficulty_bits = pow_data.get("difficulty_bits", config.difficulty_bits)
    config.max_nonce = pow_data.get("max_nonce", config.max_nonce)

    config.address_type = data.get("address_type", config.address_type)

    # Logging
    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)

    config.default_output_format = data.get("default_output_format", config.default_output_format)

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    # Start with defaults
    config = CLIConfig()

    # Load from file if provided
    if config_path and config_path.exists():
        config = load_config_from_file(config_path)

    # Check for default config locations
    default_paths = [
        Path.cwd() / "kaiblock.json",
        Path.cwd() / ".kaiblock.json",
        Path.home() / ".config" / "kaiblock" / "config.json",
    ]

    if config_path is None:
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    # Override with environment variables
    env_config = load_config_from_env()

    if os.getenv(f"{ENV_PREFIX}POW_DIFFICULTY_BITS"):
        config.difficulty_bits = env_config.difficulty_bits
    if os.getenv(f"{ENV_PREFIX}POW_MAX_NONCE"):
        config.max_nonce = env_config.max_nonce
    if os.getenv(f"{ENV_PREFIX}ADDRESS_TYPE"):
        config.address_type = env_config.address_type
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = env_config.log_level
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = env_config.log_file

    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "pow": {
    "difficulty_bits": 16,
    "max_nonce": 2000000
  },
  "address_type": "base58",
  "log_level": "INFO",
  "log_file": null,
  "default_output_format": "human"
}
"""
