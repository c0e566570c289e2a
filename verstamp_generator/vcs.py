"""Revision and build-time lookups for the generation run.

Failures to reach git are not errors: a build from a source tarball simply
has no revision, and the artifact carries the all-zero hash sentinel.
"""

from __future__ import annotations

import logging
import os
import subprocess
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

from .encoder import HASH_DIGITS
from .exceptions import InvalidConfigurationError

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 10


def git_commit_hash(repo: Path | str = ".", git: str = "git") -> Optional[str]:
    """Top 8 hex digits of HEAD, upper-cased, or None if unavailable."""
    try:
        result = subprocess.run(
            [git, "rev-parse", "HEAD"],
            cwd=str(repo),
            capture_output=True,
            text=True,
            timeout=GIT_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning("git unavailable, building without revision hash: %s", e)
        return None

    if result.returncode != 0:
        logger.warning(
            "git rev-parse failed in %s, building without revision hash: %s",
            repo,
            result.stderr.strip(),
        )
        return None

    commit = result.stdout.strip()
    if len(commit) < HASH_DIGITS:
        logger.warning("Unexpected git rev-parse output: %r", commit)
        return None
    return commit[:HASH_DIGITS].upper()


def build_timestamp(
    env: Optional[Dict[str, str]] = None,
    now: Optional[datetime] = None,
) -> datetime:
    """Build time in UTC, honouring SOURCE_DATE_EPOCH for reproducible builds."""
    env = env if env is not None else dict(os.environ)
    epoch = env.get("SOURCE_DATE_EPOCH")
    if epoch:
        try:
            return datetime.fromtimestamp(int(epoch), tz=timezone.utc)
        except (ValueError, OverflowError, OSError) as e:
            raise InvalidConfigurationError(
                "SOURCE_DATE_EPOCH must be an integer Unix timestamp",
                invalid_value=epoch,
                original_exception=e,
            ) from e
    return now or datetime.now(timezone.utc)
