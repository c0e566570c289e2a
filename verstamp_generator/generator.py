"""One generation run: configuration -> version -> bindings -> artifact.

Standard bindings are offered to every template but need not be used; an
unused standard binding is only logged at debug level. Names declared under
``extra_bindings`` are the user's own and must appear in the template, so
leaving one unused is reported as a warning (an error with ``strict``).
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .bindings import build_bindings
from .config.settings import VerStampConfig
from .encoder import HASH_DIGITS, VersionNumber, parse_hash
from .exceptions import (
    GenerationContext,
    InvalidConfigurationError,
    MissingConfigurationError,
    TemplateError,
    UnusedBindingWarning,
)
from .logger import ProductionLogger, get_logger
from .template import (
    ESCAPERS,
    TokenSyntax,
    artifact_matches,
    get_syntax,
    read_template,
    render,
    write_artifact,
)
from .templates import get_builtin
from .vcs import build_timestamp, git_commit_hash

VOLATILE_BINDINGS = ("BUILD_DATE", "VER_COMIT", "VER_HASH")


@dataclass
class GenerationResult:
    """Outcome of a generation run"""

    version: VersionNumber
    text: str
    bindings: Dict[str, Any]
    output_path: Optional[Path] = None
    changed: bool = False
    unused: List[str] = field(default_factory=list)
    run_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version.info,
            "packed": self.version.bcd_literal,
            "output_path": str(self.output_path) if self.output_path else None,
            "changed": self.changed,
            "unused": self.unused,
            "run_id": self.run_id,
        }


def parse_build_date(value: Union[str, datetime]) -> datetime:
    """Accept a datetime or an ISO-8601 string (``Z`` suffix allowed)."""
    if isinstance(value, datetime):
        return value
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise InvalidConfigurationError(
            "Build date must be an ISO-8601 timestamp", invalid_value=value, original_exception=e
        ) from e


class VersionGenerator:
    """
    Renders the version artifact described by a `VerStampConfig`.

    Usage:
        generator = VersionGenerator(load_config("verstamp.yaml"))
        result = generator.generate()
    """

    def __init__(
        self,
        config: VerStampConfig,
        *,
        env: Optional[Dict[str, str]] = None,
        logger: Optional[ProductionLogger] = None,
        config_path: Optional[Path] = None,
    ):
        self.config = config
        self.env = env
        self.config_path = config_path
        self.logger = logger or get_logger(
            log_level=config.logging.level, json_file=config.logging.json_file
        )

    def _context(self, **kwargs) -> GenerationContext:
        return GenerationContext(
            config_path=str(self.config_path) if self.config_path else None,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def resolve_hash(self, vcs_hash: Optional[str] = None) -> str:
        """Explicit argument, then config, then git; empty when none is available."""
        explicit = vcs_hash if vcs_hash is not None else self.config.vcs.hash
        if explicit is not None:
            value = parse_hash(explicit)
            return "" if value is None else "%0*X" % (HASH_DIGITS, value)
        if not self.config.vcs.enabled:
            return ""
        return git_commit_hash(self.config.vcs.repo) or ""

    def resolve_build_date(self, build_date: Optional[Union[str, datetime]] = None) -> datetime:
        if build_date is not None:
            return parse_build_date(build_date)
        if self.config.build_date is not None:
            return self.config.build_date
        return build_timestamp(self.env)

    def resolve_version(
        self,
        version_text: Optional[str] = None,
        *,
        vcs_hash: Optional[str] = None,
        build_date: Optional[Union[str, datetime]] = None,
    ) -> VersionNumber:
        """Build the immutable version of record for this run."""
        extra = {
            "vcs_hash": self.resolve_hash(vcs_hash),
            "build_timestamp": self.resolve_build_date(build_date),
        }
        if version_text:
            return VersionNumber.parse(version_text, **extra)
        return self.config.version.to_version_number(**extra)

    def template_source(self) -> Tuple[str, TokenSyntax, Optional[Callable[[str], str]], str]:
        """Template text, token syntax, value escaper and a label for messages."""
        settings = self.config.template
        try:
            if settings.path is not None:
                text = read_template(settings.path)
                syntax_name = settings.syntax or "at_sign"
                escape_name = settings.escape or "none"
                label = str(settings.path)
            else:
                builtin = get_builtin(settings.builtin)
                text = builtin.read()
                syntax_name = settings.syntax or builtin.syntax
                escape_name = settings.escape or builtin.escape
                label = f"builtin:{builtin.name}"
            return text, get_syntax(syntax_name), ESCAPERS[escape_name], label
        except ValueError as e:
            raise InvalidConfigurationError(str(e), original_exception=e) from e

    def bindings(self, version: VersionNumber) -> Dict[str, Any]:
        return build_bindings(
            version,
            self.config.identity,
            prefix=self.config.prefix,
            extra=self.config.extra_bindings,
        )

    def output_path(self, output: Optional[Union[str, Path]] = None) -> Path:
        if output is not None:
            return Path(output)
        if self.config.output is not None:
            return self.config.output
        raise MissingConfigurationError("output")

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def render(self, version: VersionNumber, *, strict: bool = False) -> Tuple[str, Dict[str, Any], List[str]]:
        """Render in memory. Returns (text, bindings, unused binding names)."""
        template, syntax, escape, label = self.template_source()
        bindings = self.bindings(version)
        context = self._context(template_path=label, version=version.info)

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", UnusedBindingWarning)
            text = render(template, bindings, syntax, escape=escape, context=context)

        unused: List[str] = []
        for w in caught:
            if issubclass(w.category, UnusedBindingWarning):
                unused.extend(w.message.names)
            else:
                warnings.warn_explicit(w.message, w.category, w.filename, w.lineno)

        unused_extra = [name for name in unused if name in self.config.extra_bindings]
        if unused:
            self.logger.debug("Bindings not referenced by template", template=label, names=unused)
        if unused_extra:
            if strict:
                raise TemplateError(
                    f"extra_bindings not referenced by template: {', '.join(unused_extra)}",
                    context=context,
                )
            self.logger.warning(
                f"extra_bindings not referenced by template {label}: {', '.join(unused_extra)}",
                names=unused_extra,
            )
        return text, bindings, unused

    def generate(
        self,
        output: Optional[Union[str, Path]] = None,
        *,
        version: Optional[VersionNumber] = None,
        dry_run: bool = False,
        strict: bool = False,
    ) -> GenerationResult:
        """Render and atomically write the artifact.

        Nothing is written if rendering fails; an artifact that already has
        identical content is left untouched.
        """
        version = version or self.resolve_version()
        path = None if dry_run else self.output_path(output)
        text, bindings, unused = self.render(version, strict=strict)

        changed = False
        if path is not None:
            changed = write_artifact(path, text)
            self.logger.info(
                f"{'Wrote' if changed else 'Up to date'}: {path} ({version.info}, {version.bcd_literal})",
                output=str(path),
                version=version.info,
                packed=version.bcd_literal,
                vcs_hash=version.vcs_hash,
                build_date=version.build_date,
                changed=changed,
            )

        return GenerationResult(
            version=version,
            text=text,
            bindings=bindings,
            output_path=path,
            changed=changed,
            unused=unused,
            run_id=self.logger.get_run_id(),
        )

    def check(
        self,
        output: Optional[Union[str, Path]] = None,
        *,
        version: Optional[VersionNumber] = None,
        ignore_volatile: bool = True,
    ) -> bool:
        """True if the artifact on disk matches what `generate` would write.

        With ``ignore_volatile`` the build date and commit hash recorded in
        the artifact are accepted whatever their value.
        """
        path = self.output_path(output)
        if not path.is_file():
            self.logger.warning(f"Artifact missing: {path}", output=str(path))
            return False

        version = version or self.resolve_version()
        template, syntax, escape, _ = self.template_source()
        bindings = self.bindings(version)
        existing = path.read_bytes().decode("utf-8", errors="replace")

        in_sync = artifact_matches(
            template,
            bindings,
            existing,
            syntax,
            escape=escape,
            volatile=VOLATILE_BINDINGS if ignore_volatile else (),
        )
        if in_sync:
            self.logger.info(f"Artifact in sync: {path}", output=str(path))
        else:
            self.logger.warning(f"Artifact out of date: {path}", output=str(path))
        return in_sync
