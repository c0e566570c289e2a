"""
Resolution hints for failures that arrive without any.

``VerStampError`` subclasses usually bring their own hints. Anything else the
CLI catches (an ``OSError`` from the artifact directory, pydantic's range
messages, git's stderr) is matched here by message text.
"""

from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Pattern
import re

from .exceptions import ErrorCategory, ResolutionHint


@dataclass
class ErrorPattern:
    """A known error signature and what to do about it"""

    pattern: Pattern[str]
    category: ErrorCategory
    title: str
    description: str
    resolution_hints: List[ResolutionHint]
    frequency: int = 0

    def matches(self, error_message: str) -> bool:
        return bool(self.pattern.search(error_message))


def _known(regex: str, category: ErrorCategory, title: str, description: str, *hints: ResolutionHint) -> ErrorPattern:
    return ErrorPattern(re.compile(regex, re.IGNORECASE), category, title, description, list(hints))


def builtin_patterns() -> List[ErrorPattern]:
    return [
        _known(
            r"permission denied|read-only file system|access is denied",
            ErrorCategory.IO,
            "Output Not Writable",
            "The artifact directory cannot be written by the build user",
            ResolutionHint(
                "Fix Output Permissions",
                "The artifact is replaced atomically, so its directory must be writable",
                [
                    "Check ownership of the output directory",
                    "Make sure no other build step holds the file open (Windows)",
                    "Or point output at a build directory: verstamp generate --output build/version.h",
                ],
            ),
        ),
        _known(
            r"not a git repository|not in a git directory",
            ErrorCategory.VCS,
            "No Git Repository",
            "The source tree is not a git checkout, so no revision hash is available",
            ResolutionHint(
                "Supply the Revision Explicitly",
                "Builds from source archives have no .git directory",
                [
                    "Pass the commit id: verstamp generate --hash <sha>",
                    "Or set vcs.hash in verstamp.yaml (VERSTAMP_VCS__HASH in CI)",
                    "Or set vcs.enabled: false to stamp the zero sentinel",
                ],
            ),
        ),
        _known(
            r"no such file or directory: '?git'?|git.*not found|\[winerror 2\]",
            ErrorCategory.VCS,
            "Git Not Installed",
            "The git executable is not on PATH",
            ResolutionHint(
                "Install Git or Pass the Hash",
                "VerStamp only needs git to read HEAD",
                [
                    "Install git in the build image",
                    "Or pass --hash from the CI environment (e.g. $GITHUB_SHA)",
                ],
            ),
        ),
        _known(
            r"out of range|must be a 32-bit|less than or equal to 255|greater than or equal to 0",
            ErrorCategory.VERSION,
            "Version Component Out Of Range",
            "Every component of the packed version must fit one byte",
            ResolutionHint(
                "Keep Components Within 0-255",
                "major, minor, patch and build each occupy 8 bits",
                [
                    "Check the version block of verstamp.yaml",
                    "Check VERSTAMP_VERSION__* overrides set by CI",
                ],
            ),
        ),
        _known(
            r"placeholder.*without binding|unbound",
            ErrorCategory.TEMPLATE,
            "Unbound Template Token",
            "The template references a name nothing provides",
            ResolutionHint(
                "List Available Bindings",
                "Token names are case sensitive",
                ["Run: verstamp show", "Fix the token or add it to extra_bindings"],
            ),
        ),
    ]


class ErrorCatalog:
    """
    Message-pattern lookup with match counting.

    Usage:
        hints = ErrorCatalog().find_resolution_hints("Permission denied: 'include/version.h'")
    """

    def __init__(self, patterns: Optional[Iterable[ErrorPattern]] = None):
        self.patterns: List[ErrorPattern] = list(builtin_patterns() if patterns is None else patterns)

    def match(self, error_message: str) -> List[ErrorPattern]:
        """Patterns matching ``error_message``; each match is counted."""
        found = [p for p in self.patterns if p.matches(error_message)]
        for p in found:
            p.frequency += 1
        return found

    def find_resolution_hints(self, error_message: str) -> List[ResolutionHint]:
        return [hint for p in self.match(error_message) for hint in p.resolution_hints]

    def get_pattern_statistics(self) -> Dict[str, int]:
        """Match counts by pattern title, most frequent first."""
        ranked = sorted(self.patterns, key=lambda p: p.frequency, reverse=True)
        return {p.title: p.frequency for p in ranked}

    def add_pattern(self, pattern: ErrorPattern) -> None:
        self.patterns.append(pattern)


@lru_cache(maxsize=None)
def get_error_catalog() -> ErrorCatalog:
    """Process-wide catalog used by the CLI."""
    return ErrorCatalog()
