"""Configuration loading for VerStamp."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from ..exceptions import GenerationContext, InvalidConfigurationError, MissingConfigurationError
from .settings import VerStampConfig, expand_version_string, unquoted_version_message


def _lower_keys(d: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize dictionary keys to lowercase."""
    return {k.lower(): v for k, v in d.items()}


def _apply_env_overrides(cfg: Dict[str, Any], env: Dict[str, str], prefix: str) -> None:
    """Apply simple env overrides using DOUBLE-UNDERSCORE path syntax.

    Example: VERSTAMP_VERSION__BUILD=7 overrides version.build
    """
    plen = len(prefix)
    for key, value in env.items():
        if not key.startswith(prefix):
            continue
        path = key[plen:].lower().split("__")
        cur: Any = cfg
        for part in path[:-1]:
            if part not in cur or not isinstance(cur[part], dict):
                cur[part] = {}
            cur = cur[part]
        # Numbers stay strings: pydantic coerces them per field, and hashes or
        # "1.10" versions must keep their digits
        leaf = path[-1]
        if value.lower() in {"true", "false"}:
            cur[leaf] = value.lower() == "true"
        else:
            cur[leaf] = value


def config_from_dict(
    raw: Dict[str, Any],
    *,
    base_dir: Optional[Path] = None,
    env_overrides: bool = True,
    env: Optional[Dict[str, str]] = None,
    env_prefix: str = "VERSTAMP_",
    source: Optional[str] = None,
) -> VerStampConfig:
    """Validate a raw mapping into a `VerStampConfig`."""
    data = _lower_keys(raw)

    if isinstance(data.get("version"), float):
        raise InvalidConfigurationError(unquoted_version_message(data["version"]), config_path=source)

    # Expand the "1.2.3.4" shorthand so VERSTAMP_VERSION__* can override a single field
    if isinstance(data.get("version"), (str, int)) and not isinstance(data.get("version"), bool):
        try:
            data["version"] = expand_version_string(str(data["version"]))
        except ValueError as e:
            raise InvalidConfigurationError(str(e), config_path=source) from e

    if env_overrides:
        _apply_env_overrides(data, env if env is not None else dict(os.environ), env_prefix)

    try:
        config = VerStampConfig(**data)
    except ValidationError as e:
        raise InvalidConfigurationError(
            f"Invalid verstamp configuration: {e}",
            config_path=source,
            context=GenerationContext(config_path=source),
            original_exception=e,
        ) from e

    if base_dir is not None:
        config = config.resolve_paths(base_dir)
    return config


def load_config(
    path: Path | str = Path("verstamp.yaml"),
    *,
    env_overrides: bool = True,
    env: Optional[Dict[str, str]] = None,
    env_prefix: str = "VERSTAMP_",
) -> VerStampConfig:
    """Load YAML config and return a typed `VerStampConfig`.

    - Relative paths inside the file resolve against the file's directory
    - Optionally applies environment variable overrides
    """
    p = Path(path)
    if not p.exists():
        raise MissingConfigurationError(f"config file {p}")

    try:
        with open(p, "r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
    except yaml.YAMLError as e:
        raise InvalidConfigurationError(
            f"Config file is not valid YAML: {e}", config_path=str(p), original_exception=e
        ) from e

    if not isinstance(raw, dict):
        raise InvalidConfigurationError("Config file must contain a mapping", config_path=str(p))

    return config_from_dict(
        raw,
        base_dir=p.resolve().parent,
        env_overrides=env_overrides,
        env=env,
        env_prefix=env_prefix,
        source=str(p),
    )
