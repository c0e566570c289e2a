"""Identity, version, VCS, template and logging settings models."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..encoder import VersionNumber
from ..exceptions import VersionParseError


# =============================================================================
# Identity
# =============================================================================

class IdentitySettings(BaseModel):
    """Display labels and legal text stamped into the artifact."""
    project_name: str = Field(..., min_length=1)
    client_name: str = ""
    server_name: str = ""
    gui_name: str = ""
    url: str = ""
    copyright: str = ""
    description: str = ""
    license: str = ""


# =============================================================================
# Version
# =============================================================================

class VersionSettings(BaseModel):
    """Version of record; each component must fit one byte of the packed version."""
    major: int = Field(default=0, ge=0, le=255)
    minor: int = Field(default=0, ge=0, le=255)
    patch: int = Field(default=0, ge=0, le=255)
    build: int = Field(default=0, ge=0, le=255)
    suffix: str = Field(default="", max_length=32, description="Pre-release suffix, e.g. '-beta1'")

    @model_validator(mode="before")
    @classmethod
    def expand_version_string(cls, data: Any) -> Any:
        """Accept `version: "1.1.2.0-beta1"` as shorthand."""
        if isinstance(data, float):
            raise ValueError(unquoted_version_message(data))
        if isinstance(data, int) and not isinstance(data, bool):
            data = str(data)
        if isinstance(data, str):
            return expand_version_string(data)
        return data

    def to_version_number(self, **kwargs) -> VersionNumber:
        return VersionNumber(
            self.major, self.minor, self.patch, self.build, suffix=self.suffix, **kwargs
        )


def expand_version_string(text: str) -> Dict[str, Any]:
    try:
        v = VersionNumber.parse(text)
    except VersionParseError as e:
        # pydantic only collects ValueError
        raise ValueError(str(e)) from e
    return {"major": v.major, "minor": v.minor, "patch": v.patch, "build": v.build, "suffix": v.suffix}


def unquoted_version_message(value: float) -> str:
    # YAML reads `1.10` as the float 1.1; the original digits are gone
    return f"version {value!r} was read as a number; quote it, e.g. version: \"1.10\""


# =============================================================================
# VCS / template / logging
# =============================================================================

class VcsSettings(BaseModel):
    """Where the revision identifier comes from."""
    enabled: bool = True
    hash: Optional[str] = Field(default=None, description="Explicit commit id; overrides git")
    repo: Path = Path(".")

    @field_validator("hash", mode="before")
    @classmethod
    def reject_numeric_hash(cls, value: Any) -> Any:
        # YAML turns 01234567 into octal and 1e100000 into a float
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            raise ValueError("vcs.hash was read as a number; quote it, e.g. hash: \"01234567\"")
        return value


class TemplateSettings(BaseModel):
    """Template source: a file path, or one of the built-in templates."""
    path: Optional[Path] = None
    builtin: Literal["c_header", "python", "json"] = "c_header"
    syntax: Optional[Literal["at_sign", "mustache"]] = None
    escape: Optional[Literal["none", "c", "json", "python"]] = None


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_file: Optional[Path] = None

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class VerStampConfig(BaseModel):
    """Top-level generator configuration."""

    model_config = ConfigDict(extra="forbid")

    prefix: str = Field(default="", pattern=r"^[A-Za-z0-9_]*$", description="Macro name prefix, bound as MACRO_PREFIX")
    identity: IdentitySettings
    version: VersionSettings = Field(default_factory=VersionSettings)
    vcs: VcsSettings = Field(default_factory=VcsSettings)
    build_date: Optional[datetime] = Field(default=None, description="Fixed build timestamp (UTC)")
    template: TemplateSettings = Field(default_factory=TemplateSettings)
    output: Optional[Path] = None
    extra_bindings: Dict[str, Union[str, int]] = Field(default_factory=dict)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("extra_bindings")
    @classmethod
    def check_binding_names(cls, value: Dict[str, Union[str, int]]) -> Dict[str, Union[str, int]]:
        for name in value:
            if not name or not (name[0].isalpha() or name[0] == "_") or not name.replace("_", "").isalnum():
                raise ValueError(f"Invalid binding name: {name!r}")
        return value

    def resolve_paths(self, base_dir: Path) -> "VerStampConfig":
        """Make relative file paths relative to ``base_dir`` (the config file's directory)."""

        def _abs(p: Optional[Path]) -> Optional[Path]:
            if p is None or p.is_absolute():
                return p
            return (base_dir / p).resolve()

        return self.model_copy(
            update={
                "output": _abs(self.output),
                "template": self.template.model_copy(update={"path": _abs(self.template.path)}),
                "vcs": self.vcs.model_copy(update={"repo": _abs(self.vcs.repo)}),
                "logging": self.logging.model_copy(update={"json_file": _abs(self.logging.json_file)}),
            }
        )
