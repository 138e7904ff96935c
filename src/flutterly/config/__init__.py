"""Configuration management for flutterly.

Loads and validates YAML-based configuration with Pydantic models,
with environment variable overrides.
"""

from flutterly.config.settings import LoggingConfig, ServerConfig, Settings, load_settings

__all__ = ["LoggingConfig", "ServerConfig", "Settings", "load_settings"]
