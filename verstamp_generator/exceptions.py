"""
Exceptions raised while producing a version artifact.

Every fatal error derives from :class:`VerStampError` and carries a
:class:`GenerationContext` (template, output, version, correlation id), a
category used to pick resolution hints, and optional hints the CLI prints
under the error message.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional
import uuid


class ErrorSeverity(str, Enum):
    ERROR = "error"            # Run aborted, nothing written
    RECOVERABLE = "recoverable"  # Retry may succeed (locked file, flaky git)
    WARNING = "warning"


class ErrorCategory(str, Enum):
    """Which stage of a run failed"""
    VERSION = "version"                # Components or hash could not be encoded
    TEMPLATE = "template"              # Tokens without bindings
    CONFIGURATION = "configuration"    # verstamp.yaml, env overrides, CLI options
    IO = "io"                          # Template read or artifact write
    VCS = "vcs"                        # git lookups


@dataclass
class GenerationContext:
    """Where in a run an error happened"""

    template_path: Optional[str] = None
    output_path: Optional[str] = None
    version: Optional[str] = None
    config_path: Optional[str] = None

    correlation_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def format_summary(self) -> str:
        """One line: ``template=... | output=... | version=... | correlation_id=...``"""
        labels = (
            ("template", self.template_path),
            ("output", self.output_path),
            ("version", self.version),
            ("correlation_id", self.correlation_id),
        )
        return " | ".join(f"{label}={value}" for label, value in labels if value)


@dataclass
class ResolutionHint:
    """A suggested fix, printed beneath the error"""

    title: str
    description: str
    steps: List[str]
    documentation_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def format_lines(self, number: int) -> List[str]:
        lines = [f"{number}. {self.title}", f"   {self.description}"]
        lines.extend(f"     - {step}" for step in self.steps)
        if self.documentation_url:
            lines.append(f"   Docs: {self.documentation_url}")
        return lines


class VerStampError(Exception):
    """
    Base class for every fatal generation error.

    Build scripts can catch this one type; ``format_diagnostic_message``
    and ``to_dict`` give the detail for humans and for JSON logs.
    """

    def __init__(
        self,
        message: str,
        *,
        context: Optional[GenerationContext] = None,
        category: ErrorCategory = ErrorCategory.TEMPLATE,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        resolution_hints: Optional[List[ResolutionHint]] = None,
        original_exception: Optional[Exception] = None,
        **kwargs
    ):
        super().__init__(message)
        self.message = message
        self.context = context or GenerationContext()
        self.category = category
        self.severity = severity
        self.resolution_hints = list(resolution_hints or [])
        self.original_exception = original_exception
        self.additional_data = kwargs

    def _context_lines(self) -> List[str]:
        lines = []
        for key, value in self.context.to_dict().items():
            if key == "metadata":
                lines.extend(f"  {k}: {v}" for k, v in value.items())
            else:
                lines.append(f"  {key}: {value}")
        return lines

    def format_diagnostic_message(self) -> str:
        """Multi-line report: message, context, hints and the underlying exception."""
        rule = "=" * 72
        lines = [
            rule,
            f"ERROR: {self.message}",
            f"Severity: {self.severity.value.upper()} | Category: {self.category.value}",
            rule,
            "",
            "GENERATION CONTEXT:",
            *self._context_lines(),
        ]

        if self.resolution_hints:
            lines += ["", "RESOLUTION HINTS:"]
            for number, hint in enumerate(self.resolution_hints, 1):
                lines += hint.format_lines(number)

        cause = self.original_exception
        if cause is not None:
            lines += ["", "CAUSED BY:", f"  {type(cause).__name__}: {cause}"]

        lines += ["", rule]
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serialisable form for structured logs"""
        data = {
            "error_type": type(self).__name__,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "context": self.context.to_dict(),
            "resolution_hints": [hint.to_dict() for hint in self.resolution_hints],
            "original_exception": None if self.original_exception is None else str(self.original_exception),
        }
        data.update(self.additional_data)
        return data


# Version Errors
class VersionError(VerStampError):
    """Version number input errors"""
    def __init__(self, message: str, **kwargs):
        super().__init__(message, category=ErrorCategory.VERSION, **kwargs)


class RangeError(VersionError):
    """A version component does not fit in one byte of the packed version"""
    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        if component:
            message = f"{message} (component: {component})"
        if value is not None:
            message = f"{message} (value: {value})"
        if "resolution_hints" not in kwargs:
            kwargs["resolution_hints"] = [
                ResolutionHint(
                    title="Keep Version Components Within 0-255",
                    description="Each of major, minor, patch and build is packed into a single byte",
                    steps=[
                        "Check the version block of verstamp.yaml",
                        "Check VERSTAMP_VERSION__* environment overrides",
                        "Reset the build counter when bumping the patch number",
                    ],
                )
            ]
        self.component = component
        self.value = value
        super().__init__(message, **kwargs)


class VersionParseError(VersionError):
    """Version string or VCS hash could not be parsed"""
    def __init__(self, message: str, text: Optional[str] = None, **kwargs):
        if text is not None:
            message = f"{message}: {text!r}"
        self.text = text
        super().__init__(message, **kwargs)


# Template Errors
class TemplateError(VerStampError):
    """Template resolution errors"""
    def __init__(self, message: str, **kwargs):
        super().__init__(message, category=ErrorCategory.TEMPLATE, **kwargs)


class UnboundPlaceholderError(TemplateError):
    """Template references names with no binding"""
    def __init__(self, names: Iterable[str], **kwargs):
        self.names = list(names)
        message = f"Template placeholder(s) without binding: {', '.join(self.names)}"
        if "resolution_hints" not in kwargs:
            kwargs["resolution_hints"] = [
                ResolutionHint(
                    title="Bind Every Template Token",
                    description="A partially rendered artifact is never written",
                    steps=[
                        "Fix the token spelling in the template",
                        "Or add the name under extra_bindings in verstamp.yaml",
                        "Run: verstamp show  to list available bindings",
                    ],
                )
            ]
        super().__init__(message, **kwargs)


class UnusedBindingWarning(UserWarning):
    """Bindings were supplied that no template token references (advisory)"""

    def __init__(self, names: Iterable[str]):
        self.names = list(names)
        super().__init__(f"Binding(s) not referenced by template: {', '.join(self.names)}")


# IO Errors
class TemplateNotFoundError(VerStampError):
    """Template file missing or unreadable"""
    def __init__(self, path: str, **kwargs):
        self.path = path
        super().__init__(f"Template not found: {path}", category=ErrorCategory.IO, **kwargs)


class ArtifactWriteError(VerStampError):
    """Rendered artifact could not be written"""
    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        if path:
            message = f"{message} (path: {path})"
        self.path = path
        super().__init__(message, category=ErrorCategory.IO, **kwargs)


# Configuration Errors
class ConfigurationError(VerStampError):
    """Configuration-related errors"""
    def __init__(self, message: str, **kwargs):
        super().__init__(message, category=ErrorCategory.CONFIGURATION, **kwargs)


class InvalidConfigurationError(ConfigurationError):
    """Invalid configuration parameter or structure"""
    def __init__(
        self,
        message: str,
        config_path: Optional[str] = None,
        invalid_value: Optional[Any] = None,
        **kwargs
    ):
        if config_path:
            message = f"{message} (config_path: {config_path})"
        if invalid_value is not None:
            message = f"{message} (value: {invalid_value})"
        super().__init__(message, **kwargs)


class MissingConfigurationError(ConfigurationError):
    """Required configuration file or parameter not found"""
    def __init__(self, parameter_name: str, **kwargs):
        message = f"Required configuration missing: {parameter_name}"
        if "resolution_hints" not in kwargs:
            kwargs["resolution_hints"] = [
                ResolutionHint(
                    title="Create a Configuration",
                    description=f"'{parameter_name}' must be provided",
                    steps=[
                        "Run: verstamp init",
                        "Edit verstamp.yaml with your project identity and version",
                        "Retry: verstamp generate",
                    ],
                )
            ]
        super().__init__(message, **kwargs)
