"""Configuration management for vizmote.

Loads settings from a YAML configuration file with environment variable
overrides for the device credential. Supports .env files.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/vizmote.yaml")
DEFAULT_CREDENTIALS_PATH = Path.home() / ".config" / "vizmote" / "credentials.json"


class DeviceConfig(BaseModel):
    address: str | None = Field(default=None, description="Display host or host:port")
    token: SecretStr = Field(default=SecretStr(""))
    port: int = Field(default=7345, ge=1, le=65535)
    timeout: float = Field(default=10.0, gt=0)
    verify_tls: bool = Field(default=False)


class CredentialsConfig(BaseModel):
    path: Path = Field(default=DEFAULT_CREDENTIALS_PATH)


class WebConfig(BaseModel):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for vizmote.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "VIZMOTE_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    device: DeviceConfig = Field(default_factory=DeviceConfig)
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # YAML values arrive as init kwargs and rank below the environment
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    _load_dotenv()

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.debug("Config file %s not found, using defaults + env vars", path)

    _apply_env_overrides(yaml_data)

    return Settings(**yaml_data)


def _load_dotenv() -> None:
    """Load .env file into os.environ if it exists."""
    env_path = Path(".env")
    if not env_path.exists():
        return
    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                if not os.environ.get(key):
                    os.environ[key] = value


def _apply_env_overrides(yaml_data: dict) -> None:
    """Apply environment variable overrides for non-prefixed vars.

    VIZIO_IP and VIZIO_TOKEN only take effect as a pair; a lone value
    is ignored so a half-set environment never clobbers the YAML file.
    """
    address = os.environ.get("VIZIO_IP", "").strip()
    token = os.environ.get("VIZIO_TOKEN", "").strip()
    port = os.environ.get("PORT", "").strip()

    if address and token:
        device = yaml_data.setdefault("device", {})
        device["address"] = address
        device["token"] = token

    if port:
        web = yaml_data.setdefault("web", {})
        web["port"] = int(port)
