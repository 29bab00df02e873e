"""Helper modules and utilities for Vackup."""

from .config import PanelConfig, load_config, save_config, get_config_path
from .logging import get_logger, setup_logging

__all__ = [
    'PanelConfig',
    'load_config',
    'save_config',
    'get_config_path',
    'get_logger',
    'setup_logging',
]
