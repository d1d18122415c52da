"""Configuration manager."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from swarmthing.config.providers import ConfigProvider, LocalFileConfigProvider
from swarmthing.utils.logger import get_logger

logger = get_logger("config.manager")


class ConfigManager:
    """Holds the configuration loaded through a provider."""

    def __init__(self, provider: ConfigProvider):
        self.provider = provider
        self._config: dict[str, Any] = {}

    async def initialize(self) -> None:
        """Load the initial configuration."""
        self._config = await self.provider.load()
        logger.info("Configuration initialized", config_keys=list(self._config.keys()))

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by key."""
        return self._config.get(key, default)

    def get_all(self) -> dict[str, Any]:
        """Get the entire configuration dictionary."""
        return self._config.copy()

    def is_user_set(self, key: str) -> bool:
        """True when key comes from the config file rather than the defaults."""
        return key in self.provider.user_config


def create_config_manager(
    config_dir: Path,
    *,
    defaults: dict[str, Any] | None = None,
) -> ConfigManager:
    """Create a config manager backed by <config_dir>/config.json."""
    config_path = config_dir / "config.json"
    provider = LocalFileConfigProvider(config_path, defaults=defaults)
    manager = ConfigManager(provider)

    logger.info("Config manager created", config_path=str(config_path))
    return manager
