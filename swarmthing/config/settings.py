"""Configuration settings for Swarm Thing.

This module provides a Settings class that wraps the ConfigManager,
providing property-based access to configuration values. Precedence per
key: a value set in the config file, then its environment variable, then
the built-in default.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from swarmthing.config.defaults import get_default_config
from swarmthing.config.manager import ConfigManager
from swarmthing.config.schema import ConfigValidationError, validate_config

_DEFAULTS = get_default_config()


class Settings:
    """Application settings."""

    def __init__(self, config_manager: ConfigManager | None = None):
        self._config_manager = config_manager

    def bind(self, config_manager: ConfigManager | None) -> None:
        self._config_manager = config_manager

    def validate_or_raise(self) -> None:
        validate_config(
            {
                "tools_dir": str(self.tools_dir),
                "server_host": self.server_host,
                "server_port": self.server_port,
                "network_timeout": self.network_timeout,
                "scrape_word_limit": self.scrape_word_limit,
                "log_format": self.log_format,
            }
        )

    def validation_status(self) -> tuple[bool, list[str]]:
        """Return (is_valid, errors) without raising."""
        try:
            self.validate_or_raise()
            return True, []
        except ConfigValidationError as exc:
            return False, list(exc.errors)

    def _get(
        self,
        key: str,
        default: Any,
        env_key: str | None = None,
    ) -> Any:
        """Get config value set by the user, fallback to env, then defaults."""
        manager = self._config_manager
        if manager and "." in key:
            cfg_obj: object = manager.get_all()
            for part in key.split("."):
                if isinstance(cfg_obj, dict) and part in cfg_obj:
                    cfg_obj = cfg_obj[part]
                else:
                    return default
            return cfg_obj
        if manager and manager.is_user_set(key):
            return manager.get(key, default)
        if env_key and (env_val := os.getenv(env_key)):
            if isinstance(default, bool):
                return env_val.lower() in ("true", "1", "yes")
            elif isinstance(default, int):
                return int(env_val)
            elif isinstance(default, float):
                return float(env_val)
            return env_val
        if manager:
            return manager.get(key, default)
        return default

    # Tool runtime
    @property
    def tools_dir(self) -> Path:
        return Path(self._get("tools_dir", _DEFAULTS["tools_dir"], "TOOLS_DIR"))

    @property
    def secrets_file(self) -> Path | None:
        value = self._get("secrets_file", _DEFAULTS["secrets_file"], "SECRETS_FILE")
        return Path(value) if value else None

    # IPC listener
    @property
    def server_host(self) -> str:
        return self._get("server_host", _DEFAULTS["server_host"], "SERVER_HOST")

    @property
    def server_port(self) -> int:
        return int(self._get("server_port", _DEFAULTS["server_port"], "SERVER_PORT"))

    # Web/HTTP Configuration
    @property
    def network_timeout(self) -> float:
        return float(
            self._get("network_timeout", _DEFAULTS["network_timeout"], "NETWORK_TIMEOUT")
        )

    @property
    def scrape_word_limit(self) -> int:
        return int(
            self._get(
                "scrape_word_limit", _DEFAULTS["scrape_word_limit"], "SCRAPE_WORD_LIMIT"
            )
        )

    @property
    def web_user_agent(self) -> str:
        return self._get("web_user_agent", _DEFAULTS["web_user_agent"], "WEB_USER_AGENT")

    # Chat backend
    def get_provider_config(self, provider: str) -> dict:
        prov = self._get(f"providers.{provider}", None)
        return prov if isinstance(prov, dict) else {}

    @property
    def openai_api_key(self) -> str | None:
        prov = self.get_provider_config("openai")
        if prov.get("api_key"):
            return prov["api_key"]
        return os.getenv("OPENAI_API_KEY")

    @property
    def openai_base_url(self) -> str | None:
        prov = self.get_provider_config("openai")
        if prov.get("base_url"):
            return prov["base_url"]
        return os.getenv("OPENAI_BASE_URL")

    @property
    def model(self) -> str:
        if env_model := os.getenv("MODEL"):
            return env_model
        prov = self.get_provider_config("openai")
        return prov.get("model") or _DEFAULTS["providers"]["openai"]["model"]

    # Logging Configuration
    @property
    def log_level(self) -> str:
        return self._get("log_level", "INFO", "LOG_LEVEL")

    @property
    def log_format(self) -> str:
        return self._get("log_format", "pretty", "LOG_FORMAT")

    @property
    def log_colors(self) -> bool:
        return self._get("log_colors", True, "LOG_COLORS")


# Global settings instance (bound to a config manager at startup)
settings = Settings()
