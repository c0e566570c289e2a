"""Built-in templates shipped with VerStamp."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from typing import Dict


@dataclass(frozen=True)
class BuiltinTemplate:
    name: str
    filename: str
    syntax: str
    escape: str

    def read(self) -> str:
        return resources.files(__name__).joinpath(self.filename).read_text(encoding="utf-8")


BUILTIN_TEMPLATES: Dict[str, BuiltinTemplate] = {
    t.name: t
    for t in (
        BuiltinTemplate("c_header", "version.h.in", "at_sign", "c"),
        BuiltinTemplate("python", "version.py.in", "at_sign", "python"),
        BuiltinTemplate("json", "version.json.in", "at_sign", "json"),
    )
}


def get_builtin(name: str) -> BuiltinTemplate:
    try:
        return BUILTIN_TEMPLATES[name]
    except KeyError:
        raise ValueError(
            f"Unknown built-in template '{name}' (expected one of: {', '.join(BUILTIN_TEMPLATES)})"
        )
