"""Stable binding names for the generated artifact.

The names follow the constants downstream code already references
(``<PREFIX>VERSION``, ``<PREFIX>VERSION_STR``...). Values are left unquoted;
templates add whatever quoting their target language needs.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from .config.settings import IdentitySettings
from .encoder import VersionNumber
from .exceptions import InvalidConfigurationError

IDENTITY_BINDINGS = (
    ("PROJECT_NAME", "project_name"),
    ("CLIENT_NAME", "client_name"),
    ("SERVER_NAME", "server_name"),
    ("GUI_NAME", "gui_name"),
)

PROJECT_TEXT_BINDINGS = (
    ("PROJECT_URL", "url"),
    ("PROJECT_COPYRIGHT", "copyright"),
    ("PROJECT_DESCRIPT", "description"),
    ("PROJECT_LICENSE", "license"),
)


def version_bindings(version: VersionNumber) -> Dict[str, Any]:
    """Everything derived from the version of record, unprefixed."""
    packed = version.bcd
    return {
        "VER_MAJOR": version.major,
        "VER_MINOR": version.minor,
        "VER_PATCH": version.patch,
        "VER_BUILD": version.build,
        "VER_COMIT": version.hash_literal,
        "VER_HASH": version.vcs_hash,
        "VERSION": version.bcd_literal,
        "VERSION_HEX": "0x%08X" % packed,
        "VERSION_INT": packed,
        "VER_NAME": version.suffix,
        "VERSION_STR": version.dotted,
        "VERSION_INFO": version.info,
        "BUILD_DATE": version.build_date,
    }


def build_bindings(
    version: VersionNumber,
    identity: IdentitySettings,
    *,
    prefix: str = "",
    extra: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Full binding set for one run, in artifact order.

    Binding names are never prefixed; ``prefix`` is exposed as
    ``MACRO_PREFIX`` so a template writes ``@MACRO_PREFIX@VERSION`` to get
    ``WSMCMND_VERSION``. ``extra`` names may not shadow a standard binding.
    """
    bindings: Dict[str, Any] = {"MACRO_PREFIX": prefix}
    for name, attr in IDENTITY_BINDINGS:
        bindings[name] = getattr(identity, attr)
    bindings.update(version_bindings(version))
    for name, attr in PROJECT_TEXT_BINDINGS:
        bindings[name] = getattr(identity, attr)

    for name, value in (extra or {}).items():
        if name in bindings:
            raise InvalidConfigurationError(f"extra binding '{name}' shadows a standard binding")
        bindings[name] = value
    return bindings
