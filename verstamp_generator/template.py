"""Template resolution and artifact writing.

A template is plain text with named tokens. Every token must have a binding,
otherwise nothing is written; bindings without a token only produce an
:class:`UnusedBindingWarning`.
"""

from __future__ import annotations

import json
import logging
import os
import re
import stat
import tempfile
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Pattern

from .exceptions import (
    ArtifactWriteError,
    GenerationContext,
    TemplateNotFoundError,
    UnboundPlaceholderError,
    UnusedBindingWarning,
)

logger = logging.getLogger(__name__)

_NAME = r"[A-Za-z_][A-Za-z0-9_]*"


@dataclass(frozen=True)
class TokenSyntax:
    """A placeholder delimiter convention; ``pattern`` captures the name in group 1."""

    name: str
    pattern: Pattern[str]
    example: str

    def token(self, name: str) -> str:
        return self.example.replace("NAME", name)


AT_SIGN = TokenSyntax("at_sign", re.compile(rf"@({_NAME})@"), "@NAME@")
MUSTACHE = TokenSyntax("mustache", re.compile(rf"\{{\{{\s*({_NAME})\s*\}}\}}"), "{{ NAME }}")

SYNTAXES: Dict[str, TokenSyntax] = {s.name: s for s in (AT_SIGN, MUSTACHE)}


def _escape_c(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def _escape_json(value: str) -> str:
    return json.dumps(value)[1:-1]


def _escape_python(value: str) -> str:
    # \uXXXX surrogate pairs are two characters in a Python literal, so
    # non-ASCII text is written as is
    return json.dumps(value, ensure_ascii=False)[1:-1]


ESCAPERS: Dict[str, Optional[Callable[[str], str]]] = {
    "none": None,
    "c": _escape_c,
    "json": _escape_json,
    "python": _escape_python,
}


def get_syntax(name: str) -> TokenSyntax:
    try:
        return SYNTAXES[name]
    except KeyError:
        raise ValueError(f"Unknown token syntax '{name}' (expected one of: {', '.join(SYNTAXES)})")


def find_tokens(template: str, syntax: TokenSyntax = AT_SIGN) -> List[str]:
    """Token names in order of first appearance."""
    seen: Dict[str, None] = {}
    for match in syntax.pattern.finditer(template):
        seen.setdefault(match.group(1), None)
    return list(seen)


def _format_value(value: Any, escape: Optional[Callable[[str], str]]) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, str):
        return escape(value) if escape else value
    return str(value)


def render(
    template: str,
    bindings: Mapping[str, Any],
    syntax: TokenSyntax = AT_SIGN,
    *,
    escape: Optional[Callable[[str], str]] = None,
    context: Optional[GenerationContext] = None,
) -> str:
    """Substitute every token in ``template`` with its bound value.

    Raises:
        UnboundPlaceholderError: if any token has no binding.

    Warns:
        UnusedBindingWarning: if bindings are supplied that no token uses.
    """
    tokens = find_tokens(template, syntax)

    unbound = [name for name in tokens if name not in bindings]
    if unbound:
        raise UnboundPlaceholderError(unbound, context=context)

    used = set(tokens)
    unused = [name for name in bindings if name not in used]
    if unused:
        warnings.warn(UnusedBindingWarning(unused), stacklevel=2)

    return syntax.pattern.sub(lambda m: _format_value(bindings[m.group(1)], escape), template)


def artifact_matches(
    template: str,
    bindings: Mapping[str, Any],
    existing: str,
    syntax: TokenSyntax = AT_SIGN,
    *,
    escape: Optional[Callable[[str], str]] = None,
    volatile: Iterable[str] = (),
) -> bool:
    """True if ``existing`` is what rendering would produce.

    Values of ``volatile`` bindings (build date, commit hash) may differ from
    the current ones; each may be anything up to the end of its line.
    """
    volatile = [name for name in volatile if name in bindings]
    sentinels = {name: f"VERSTAMPVOLATILE{i}X" for i, name in enumerate(volatile)}
    probe = dict(bindings)
    probe.update(sentinels)

    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UnusedBindingWarning)
        text = render(template, probe, syntax, escape=escape)

    pattern = re.escape(text)
    for sentinel in sentinels.values():
        pattern = pattern.replace(sentinel, r"[^\r\n]*?")
    return re.fullmatch(pattern, existing) is not None


def read_template(path: Path | str) -> str:
    p = Path(path)
    try:
        # Bytes in, bytes out: line endings survive untouched.
        return p.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateNotFoundError(str(p), original_exception=e) from e


def _artifact_mode(path: Path) -> int:
    """Permissions for the replacement file: the current ones, else 0666 less the umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_artifact(path: Path | str, text: str, *, only_if_changed: bool = True) -> bool:
    """Atomically write ``text`` to ``path``.

    The content goes to a temporary file in the destination directory which
    then replaces the target, so readers never observe a partial artifact.
    Returns False when ``only_if_changed`` is set and the file already holds
    exactly this content (its mtime is left alone).
    """
    p = Path(path)
    data = text.encode("utf-8")

    if only_if_changed and p.is_file():
        try:
            if p.read_bytes() == data:
                logger.debug("Artifact unchanged: %s", p)
                return False
        except OSError:
            pass

    tmp_name = None
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=p.parent)
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        # mkstemp creates 0600 files
        os.chmod(tmp_name, _artifact_mode(p))
        os.replace(tmp_name, p)
        tmp_name = None
    except OSError as e:
        raise ArtifactWriteError(
            "Failed to write artifact",
            path=str(p),
            context=GenerationContext(output_path=str(p)),
            original_exception=e,
        ) from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)

    logger.debug("Artifact written: %s (%d bytes)", p, len(data))
    return True


def render_file(
    template_path: Path | str,
    output_path: Path | str,
    bindings: Mapping[str, Any],
    syntax: TokenSyntax = AT_SIGN,
    *,
    escape: Optional[Callable[[str], str]] = None,
    only_if_changed: bool = True,
) -> tuple[str, bool]:
    """Read, render and write in one step. Returns (text, changed)."""
    context = GenerationContext(template_path=str(template_path), output_path=str(output_path))
    text = render(read_template(template_path), bindings, syntax, escape=escape, context=context)
    changed = write_artifact(output_path, text, only_if_changed=only_if_changed)
    return text, changed
