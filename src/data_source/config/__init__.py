"""Configuration schema, YAML loading and resolver construction."""

from __future__ import annotations

from data_source.config.builder import build_resolver, build_single_source
from data_source.config.loader import YamlConfigLoader
from data_source.config.models import AppConfig, ConfigLoadRequest, LoggingSettings

__all__ = [
    "AppConfig",
    "ConfigLoadRequest",
    "LoggingSettings",
    "YamlConfigLoader",
    "build_resolver",
    "build_single_source",
]
