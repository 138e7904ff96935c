"""Configuration management for flutterly.

Loads settings from an optional YAML configuration file with environment
variable overrides. With neither present, the defaults describe the stock
server: 127.0.0.1:7600, serving files that sit next to the package.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/flutterly.yaml")

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class ServerConfig(BaseModel):
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=7600, ge=1, le=65535)
    html_path: Path = Field(default=PACKAGE_DIR / "split-view.html")
    scripts_dir: Path = Field(default=PACKAGE_DIR / "scripts")
    check_script: str = Field(default="check-bedrock.sh")
    configure_script: str = Field(default="configure-bedrock.sh")

    @property
    def check_script_path(self) -> Path:
        return self.scripts_dir / self.check_script

    @property
    def configure_script_path(self) -> Path:
        return self.scripts_dir / self.configure_script


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for flutterly.

    Environment variables use the ``FLUTTERLY_`` prefix and ``__`` for
    nesting, e.g. ``FLUTTERLY_SERVER__PORT=7601``.
    """

    model_config = {
        "env_prefix": "FLUTTERLY_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # YAML values arrive as init kwargs; the environment wins over them.
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    return Settings(**yaml_data)
