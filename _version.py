"""
VerStamp's own version.

MAJOR.MINOR.PATCH per Semantic Versioning:
- MAJOR: a binding name or CLI command changes incompatibly
- MINOR: new built-in templates, bindings or commands
- PATCH: fixes

History:
- 1.1.0: `verstamp check` drift detection, built-in JSON template
- 1.0.0: C header and Python module templates, packed version, git hash literal
"""

from __future__ import annotations

from typing import Optional

__version__ = "1.1.0"
__release_date__ = "2026-10-17"
__release_name__ = "VerStamp"

# Filled in by the release job; stays None in source checkouts
__git_sha__: Optional[str] = None


def get_full_version() -> str:
    """``1.1.0``, or ``1.1.0+0c321f2`` for a release build."""
    if __git_sha__:
        return f"{__version__}+{__git_sha__[:7].lower()}"
    return __version__
