"""
Unit tests for the structured exception hierarchy and error catalog.
"""

from __future__ import annotations

import re

from verstamp_generator.error_catalog import ErrorCatalog, ErrorPattern, get_error_catalog
from verstamp_generator.exceptions import (
    ArtifactWriteError,
    ErrorCategory,
    ErrorSeverity,
    GenerationContext,
    InvalidConfigurationError,
    MissingConfigurationError,
    RangeError,
    ResolutionHint,
    TemplateNotFoundError,
    UnboundPlaceholderError,
    VerStampError,
    VersionParseError,
)


class TestGenerationContext:
    """Test GenerationContext"""

    def test_correlation_id_generated(self):
        a, b = GenerationContext(), GenerationContext()
        assert len(a.correlation_id) == 8
        assert a.correlation_id != b.correlation_id

    def test_to_dict_drops_none(self):
        ctx = GenerationContext(output_path="include/version.h", version="1.1.2.0")
        d = ctx.to_dict()
        assert d["output_path"] == "include/version.h"
        assert "template_path" not in d

    def test_format_summary(self):
        ctx = GenerationContext(template_path="builtin:c_header", version="1.1.2.0", correlation_id="abcd1234")
        assert ctx.format_summary() == "template=builtin:c_header | version=1.1.2.0 | correlation_id=abcd1234"


class TestHierarchy:
    """Test categories and message decoration"""

    def test_everything_is_a_verstamp_error(self):
        for error in (
            RangeError("x"),
            VersionParseError("x"),
            UnboundPlaceholderError(["A"]),
            TemplateNotFoundError("t.in"),
            ArtifactWriteError("x"),
            InvalidConfigurationError("x"),
            MissingConfigurationError("output"),
        ):
            assert isinstance(error, VerStampError)

    def test_categories(self):
        assert RangeError("x").category == ErrorCategory.VERSION
        assert UnboundPlaceholderError(["A"]).category == ErrorCategory.TEMPLATE
        assert TemplateNotFoundError("t.in").category == ErrorCategory.IO
        assert ArtifactWriteError("x").category == ErrorCategory.IO
        assert MissingConfigurationError("output").category == ErrorCategory.CONFIGURATION

    def test_parse_error_quotes_input(self):
        assert str(VersionParseError("Malformed version", text="1.x")) == "Malformed version: '1.x'"

    def test_artifact_write_error_path(self):
        error = ArtifactWriteError("Failed to write artifact", path="include/version.h")
        assert error.path == "include/version.h"
        assert "include/version.h" in str(error)

    def test_default_hints(self):
        assert RangeError("x").resolution_hints
        assert MissingConfigurationError("output").resolution_hints
        assert not InvalidConfigurationError("x").resolution_hints

    def test_explicit_hints_replace_defaults(self):
        hint = ResolutionHint(title="Custom", description="d", steps=[])
        assert RangeError("x", resolution_hints=[hint]).resolution_hints == [hint]


class TestDiagnostics:
    """Test diagnostic formatting and serialization"""

    def test_format_diagnostic_message(self):
        error = UnboundPlaceholderError(
            ["VERSON"],
            context=GenerationContext(template_path="version.h.in", output_path="version.h"),
            original_exception=KeyError("VERSON"),
        )
        text = error.format_diagnostic_message()
        assert "ERROR: Template placeholder(s) without binding: VERSON" in text
        assert "Severity: ERROR | Category: template" in text
        assert "template_path: version.h.in" in text
        assert "RESOLUTION HINTS:" in text
        assert "KeyError" in text

    def test_metadata_flattened(self):
        error = VerStampError("x", context=GenerationContext(metadata={"attempt": 2}))
        assert "  attempt: 2" in error.format_diagnostic_message()

    def test_to_dict(self):
        error = RangeError("Version component out of range 0-255", component="patch", value=300)
        d = error.to_dict()
        assert d["error_type"] == "RangeError"
        assert d["category"] == "version"
        assert d["severity"] == ErrorSeverity.ERROR.value
        assert d["resolution_hints"][0]["title"] == "Keep Version Components Within 0-255"
        assert d["original_exception"] is None


class TestErrorCatalog:
    """Test ErrorCatalog"""

    def test_permission_denied(self):
        catalog = ErrorCatalog()
        hints = catalog.find_resolution_hints("[Errno 13] Permission denied: 'include/version.h'")
        assert hints[0].title == "Fix Output Permissions"

    def test_not_a_git_repository(self):
        catalog = ErrorCatalog()
        hints = catalog.find_resolution_hints("fatal: not a git repository (or any of the parent directories): .git")
        assert any("--hash" in step for hint in hints for step in hint.steps)

    def test_pydantic_range_message(self):
        catalog = ErrorCatalog()
        assert catalog.find_resolution_hints("Input should be less than or equal to 255")

    def test_no_match(self):
        assert ErrorCatalog().find_resolution_hints("something entirely different") == []

    def test_frequency_statistics(self):
        catalog = ErrorCatalog()
        catalog.find_resolution_hints("Permission denied")
        catalog.find_resolution_hints("Permission denied")
        stats = catalog.get_pattern_statistics()
        assert stats["Output Not Writable"] == 2
        assert list(stats)[0] == "Output Not Writable"

    def test_add_pattern(self):
        catalog = ErrorCatalog()
        hint = ResolutionHint(title="Unlock", description="d", steps=["close the IDE"])
        catalog.add_pattern(ErrorPattern(
            pattern=re.compile(r"sharing violation", re.IGNORECASE),
            category=ErrorCategory.IO,
            title="Locked",
            description="d",
            resolution_hints=[hint],
        ))
        assert catalog.find_resolution_hints("Sharing violation on version.h") == [hint]

    def test_global_catalog_is_shared(self):
        assert get_error_catalog() is get_error_catalog()
