"""Configuration management for vizmote.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides for the device address and
token so an operator can inject a known credential.
"""

from vizmote.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
