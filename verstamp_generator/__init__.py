"""
VerStamp Generator

Renders a build's version-of-record into a constants artifact (C header,
Python module or JSON): packed 32-bit version, dotted strings, commit hash
and build date, plus the project's identity strings.
"""

from .encoder import (
    VersionNumber,
    decode_bcd,
    encode_bcd,
    format_bcd,
    format_dotted,
    format_hash,
    format_info,
    format_timestamp,
    parse_hash,
    parse_packed,
)
from .exceptions import (
    ArtifactWriteError,
    ConfigurationError,
    InvalidConfigurationError,
    MissingConfigurationError,
    RangeError,
    TemplateError,
    TemplateNotFoundError,
    UnboundPlaceholderError,
    UnusedBindingWarning,
    VerStampError,
    VersionParseError,
)
from .template import AT_SIGN, MUSTACHE, TokenSyntax, find_tokens, render, render_file, write_artifact
from .bindings import build_bindings
from .config import VerStampConfig, load_config
from .generator import GenerationResult, VersionGenerator

__all__ = [
    "VersionNumber",
    "decode_bcd",
    "encode_bcd",
    "format_bcd",
    "format_dotted",
    "format_hash",
    "format_info",
    "format_timestamp",
    "parse_hash",
    "parse_packed",
    "ArtifactWriteError",
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "RangeError",
    "TemplateError",
    "TemplateNotFoundError",
    "UnboundPlaceholderError",
    "UnusedBindingWarning",
    "VerStampError",
    "VersionParseError",
    "AT_SIGN",
    "MUSTACHE",
    "TokenSyntax",
    "find_tokens",
    "render",
    "render_file",
    "write_artifact",
    "build_bindings",
    "VerStampConfig",
    "load_config",
    "GenerationResult",
    "VersionGenerator",
]
