"""Configuration module for VerStamp.

Submodules:
    - paths: default configuration file discovery
    - settings: pydantic models for identity, version, VCS, template, logging
    - loader: YAML loading with environment overrides
"""

from .paths import DEFAULT_CONFIG_NAMES, find_default_config
from .settings import (
    IdentitySettings,
    LoggingSettings,
    TemplateSettings,
    VcsSettings,
    VerStampConfig,
    VersionSettings,
)
from .loader import config_from_dict, load_config

__all__ = [
    "DEFAULT_CONFIG_NAMES",
    "find_default_config",
    "IdentitySettings",
    "LoggingSettings",
    "TemplateSettings",
    "VcsSettings",
    "VerStampConfig",
    "VersionSettings",
    "config_from_dict",
    "load_config",
]
