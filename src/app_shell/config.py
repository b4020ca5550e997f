"""
Application configuration.

Layered YAML files plus environment overrides, validated with pydantic.

Resolution order (later wins):
1. configuration/base.yaml
2. configuration/{APP_ENVIRONMENT}.yaml  (local | production, default local)
3. APP_<SECTION>__<KEY> environment variables, e.g. APP_APPLICATION__PORT=8080
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, SecretStr, field_validator
from pydantic import ValidationError as PydanticValidationError

from src.components.identity import validate_email
from src.core.errors import ValidationError

ENVIRONMENTS = ("local", "production")
ENV_PREFIX = "APP_"
CONFIG_DIR_NAME = "configuration"


class ApplicationSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000
    base_url: str = "http://127.0.0.1:8000"


class DatabaseSettings(BaseModel):
    path: str = "./data/newsletter.db"


class EmailClientSettings(BaseModel):
    provider: Literal["postmark", "dev"] = "dev"
    base_url: str = "https://api.postmarkapp.com"
    sender_email: str
    authorization_token: SecretStr = SecretStr("")
    timeout_milliseconds: int = 10_000

    @field_validator("sender_email")
    @classmethod
    def validate_sender(cls, v: str) -> str:
        try:
            return validate_email(v).value
        except ValidationError as e:
            raise ValueError(e.message) from e


class LoggingSettings(BaseModel):
    level: str = "INFO"


class Settings(BaseModel):
    application: ApplicationSettings = ApplicationSettings()
    database: DatabaseSettings = DatabaseSettings()
    email_client: EmailClientSettings
    logging: LoggingSettings = LoggingSettings()


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML syntax in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect APP_<SECTION>__<KEY> variables into a nested mapping."""
    overrides: dict[str, Any] = {}
    for name, value in env.items():
        if not name.startswith(ENV_PREFIX) or "__" not in name:
            continue
        section, _, key = name[len(ENV_PREFIX) :].lower().partition("__")
        if section and key:
            overrides.setdefault(section, {})[key] = value
    return overrides


def get_environment(env: Mapping[str, str]) -> str:
    environment = env.get("APP_ENVIRONMENT", "local").lower()
    if environment not in ENVIRONMENTS:
        raise ValueError(
            f"{environment} is not a supported environment. Use one of: {', '.join(ENVIRONMENTS)}"
        )
    return environment


def load_settings(
    config_dir: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """
    Load and validate settings.

    Raises FileNotFoundError if a configuration file is missing.
    Raises ValueError if YAML or schema is invalid.
    """
    config_dir = config_dir or Path.cwd() / CONFIG_DIR_NAME
    env = os.environ if env is None else env

    environment = get_environment(env)
    data = _read_yaml(config_dir / "base.yaml")
    data = _deep_merge(data, _read_yaml(config_dir / f"{environment}.yaml"))
    data = _deep_merge(data, env_overrides(env))

    try:
        return Settings.model_validate(data)
    except PydanticValidationError as e:
        raise ValueError(f"Configuration validation failed:\n{e}") from e
