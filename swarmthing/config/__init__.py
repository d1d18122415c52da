"""Configuration module for Swarm Thing."""

from .defaults import get_default_config
from .logging_config import LOGGING_CONFIG, get_logging_config
from .manager import ConfigManager, create_config_manager
from .providers import ConfigProvider, LocalFileConfigProvider
from .schema import ConfigValidationError
from .settings import Settings, settings

__all__ = [
    "settings",
    "Settings",
    "LOGGING_CONFIG",
    "get_logging_config",
    "ConfigManager",
    "ConfigValidationError",
    "create_config_manager",
    "ConfigProvider",
    "LocalFileConfigProvider",
    "get_default_config",
]
