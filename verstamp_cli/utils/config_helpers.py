"""
Configuration helper utilities for the VerStamp CLI

Functions to find the configuration and apply command line overrides.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from verstamp_generator.config import (
    TemplateSettings,
    VerStampConfig,
    find_default_config,
    load_config,
)
from verstamp_generator.exceptions import InvalidConfigurationError
from verstamp_generator.generator import VersionGenerator
from verstamp_generator.logger import get_logger


def resolve_config_path(config: Optional[str]) -> Path:
    """Explicit --config, else the first default location that exists."""
    return Path(config) if config else find_default_config()


def apply_template_overrides(
    cfg: VerStampConfig,
    template: Optional[str] = None,
    builtin: Optional[str] = None,
) -> VerStampConfig:
    """A --template file wins over --builtin, which wins over the config file."""
    if template:
        return cfg.model_copy(
            update={"template": cfg.template.model_copy(update={"path": Path(template)})}
        )
    if builtin:
        try:
            settings = TemplateSettings(builtin=builtin)
        except ValidationError as e:
            raise InvalidConfigurationError(
                f"Unknown built-in template: {builtin}", original_exception=e
            ) from e
        return cfg.model_copy(update={"template": settings})
    return cfg


def build_generator(
    config: Optional[str],
    *,
    template: Optional[str] = None,
    builtin: Optional[str] = None,
    verbose: bool = False,
) -> VersionGenerator:
    """Load configuration and construct a generator for one CLI invocation."""
    config_path = resolve_config_path(config)
    cfg = apply_template_overrides(load_config(config_path), template, builtin)

    logger = get_logger(
        log_level="DEBUG" if verbose else cfg.logging.level,
        json_file=cfg.logging.json_file,
        console=verbose,
    )
    return VersionGenerator(cfg, logger=logger, config_path=config_path)
