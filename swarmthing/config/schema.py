from __future__ import annotations

from copy import deepcopy
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ConfigValidationError(ValueError):
    """Raised when configuration fails schema validation."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def deep_merge(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge updates into base without mutating inputs.

    - Keys present in updates with non-None values are merged/overwritten
    - Keys present in updates with None values are skipped (preserve base value)
    - Keys not present in updates are preserved from base
    """
    result = deepcopy(base)
    for key, value in updates.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        elif key in result and value is None:
            continue
        else:
            result[key] = value
    return result


class ProviderConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    api_key: str | None = None
    base_url: str | None = None
    model: str | None = None


class AppConfig(BaseModel):
    """Shape of config.json. Unknown top-level keys are kept as-is."""

    model_config = ConfigDict(extra="allow")

    tools_dir: str = "tools"
    secrets_file: str | None = ".env"
    server_host: str = "127.0.0.1"
    server_port: int = Field(8080, ge=1, le=65535)
    network_timeout: float = Field(30.0, gt=0)
    scrape_word_limit: int = Field(200, ge=1)
    web_user_agent: str | None = None
    providers: dict[str, ProviderConfig] = Field(default_factory=dict)
    log_level: str = "INFO"
    log_format: Literal["pretty", "json"] = "pretty"
    log_colors: bool = True


def _extract_validation_errors(exc: ValidationError) -> list[str]:
    errors: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        errors.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return errors


def validate_config(config: dict[str, Any]) -> dict[str, Any]:
    """Validate config against AppConfig and return it unchanged.

    Raises:
        ConfigValidationError: with one message per offending field.
    """
    try:
        AppConfig.model_validate(config)
    except ValidationError as exc:
        raise ConfigValidationError(_extract_validation_errors(exc)) from exc
    return config
