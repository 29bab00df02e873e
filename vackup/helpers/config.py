################################################################################
# VACKUP
#
# @file:        config.py
# @module:      vackup.helpers.config
# @description: Pydantic configuration model and JSON storage helpers.
# @author:      Vackup Contributors
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# Copyright (c) 2026 Vackup Contributors
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""
Configuration management for Vackup.

Settings are stored as JSON under the XDG config directory. A missing file
means defaults; a broken file raises ConfigError.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    CONTAINER_STOP_TIMEOUT,
    DEFAULT_ENGINE_BINARY,
    DEFAULT_HELPER_IMAGE,
)
from ..errors import ConfigError
from .logging import get_logger

logger = get_logger(__name__)

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class PanelConfig(BaseModel):
    """Vackup configuration"""

    engine_binary: str = Field(
        default=DEFAULT_ENGINE_BINARY,
        description="Engine CLI executable (name on PATH or absolute path)"
    )
    helper_image: str = Field(
        default=DEFAULT_HELPER_IMAGE,
        description="Image providing tar for the throwaway export container"
    )
    stop_attached_containers: bool = Field(
        default=False,
        description="Stop running containers using a volume while it is exported"
    )
    stop_timeout: int = Field(
        default=CONTAINER_STOP_TIMEOUT,
        ge=0,
        description="Container stop timeout in seconds"
    )
    command_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Timeout for a single engine command in seconds (None = wait forever)"
    )
    log_level: str = Field(default="INFO", description="Log level")
    log_file: Optional[Path] = Field(default=None, description="Optional log file")

    @field_validator("engine_binary", "helper_image")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("value cannot be empty")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name"""
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {sorted(VALID_LOG_LEVELS)}")
        return level

    @field_validator("log_file", mode="before")
    @classmethod
    def validate_log_file(cls, v: Any) -> Optional[Path]:
        """Convert string to Path"""
        if v is None or v == "":
            return None
        if isinstance(v, str):
            return Path(v).expanduser()
        return v


def get_config_dir() -> Path:
    """Get configuration directory path"""
    config_home = os.getenv("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / CONFIG_DIR_NAME
    return Path.home() / ".config" / CONFIG_DIR_NAME


def get_config_path() -> Path:
    """Get main configuration file path"""
    return get_config_dir() / CONFIG_FILE_NAME


def load_config(path: Optional[Path] = None) -> PanelConfig:
    """
    Load configuration from JSON file

    Args:
        path: Config file, defaults to get_config_path()

    Returns:
        Validated configuration (defaults when the file does not exist)

    Raises:
        ConfigError: If the file exists but cannot be read or validated
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug(f"No configuration at {config_path}, using defaults")
        return PanelConfig()

    try:
        raw = config_path.read_text(encoding="utf-8")
        return PanelConfig.model_validate(json.loads(raw))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in config file {config_path}: {e}")
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to load configuration: {e}")


def save_config(config: PanelConfig, path: Optional[Path] = None) -> Path:
    """
    Save configuration to JSON file

    Returns:
        Path to saved config file

    Raises:
        ConfigError: If save fails
    """
    config_path = path or get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
        config_path.write_text(
            config.model_dump_json(indent=2, exclude_none=True), encoding="utf-8"
        )
        config_path.chmod(0o600)
    except OSError as e:
        raise ConfigError(f"Failed to save configuration: {e}")

    logger.info(f"Configuration saved to {config_path}")
    return config_path
