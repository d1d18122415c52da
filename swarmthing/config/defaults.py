"""Default configuration values for Swarm Thing."""

from typing import Any

from swarmthing.config.constants import DEFAULT_TOOLS_DIRNAME


def get_default_config() -> dict[str, Any]:
    """Return the default configuration dictionary."""
    return {
        # Tool runtime
        "tools_dir": DEFAULT_TOOLS_DIRNAME,
        "secrets_file": ".env",
        # IPC listener started by start_server()
        "server_host": "127.0.0.1",
        "server_port": 8080,
        # Outbound HTTP (scrape_url, send_message, share_tool)
        "network_timeout": 30.0,
        "scrape_word_limit": 200,
        "web_user_agent": (
            "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
        ),
        # Chat backend used by the interactive loop
        "providers": {
            "openai": {
                "api_key": None,
                "base_url": None,
                "model": "gpt-4o-mini",
            },
        },
        # Logging Configuration
        "log_level": "INFO",
        "log_format": "pretty",
        "log_colors": True,
    }
