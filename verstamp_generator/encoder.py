"""Version encoding: packed version integer, dotted strings and literals.

The packed version holds one byte per component, most significant byte first,
so ``1.1.2.0`` becomes ``0x01010200``. Consumers decode it with plain shifts
(``v >> 24``, ``(v >> 16) & 0xFF``...) and compare builds numerically.

All functions here are pure; the VCS hash and the build time are supplied by
the caller (see :mod:`verstamp_generator.vcs`).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple

from .exceptions import RangeError, VersionParseError

COMPONENT_NAMES = ("major", "minor", "patch", "build")
COMPONENT_MAX = 0xFF
PACKED_MAX = 0xFFFFFFFF
HASH_DIGITS = 8

_VERSION_RE = re.compile(
    r"^\s*v?(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:\.(\d+))?([-+]\S*)?\s*$"
)
_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


def _check_component(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise RangeError("Version component must be an integer", component=name, value=value)
    if value < 0 or value > COMPONENT_MAX:
        raise RangeError(
            f"Version component out of range 0-{COMPONENT_MAX}", component=name, value=value
        )
    return value


def encode_bcd(major: int, minor: int, patch: int, build: int) -> int:
    """Pack four byte-sized components into one 32-bit integer."""
    for name, value in zip(COMPONENT_NAMES, (major, minor, patch, build)):
        _check_component(name, value)
    return (major << 24) | (minor << 16) | (patch << 8) | build


def decode_bcd(value: int) -> Tuple[int, int, int, int]:
    """Inverse of :func:`encode_bcd`."""
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= PACKED_MAX:
        raise RangeError("Packed version must be a 32-bit unsigned integer", value=value)
    return (value >> 24) & 0xFF, (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


def format_dotted(major: int, minor: int, patch: int, build: int) -> str:
    return f"{major}.{minor}.{patch}.{build}"


def format_info(dotted: str, suffix: Optional[str]) -> str:
    """Dotted version with the pre-release suffix appended verbatim."""
    return dotted + (suffix or "")


def format_hash(hash32: Optional[int]) -> str:
    """C unsigned long literal for the VCS hash; all zeros when there is none."""
    value = hash32 or 0
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= PACKED_MAX:
        raise RangeError("VCS hash must be a 32-bit unsigned integer", value=hash32)
    return "0x%08XUL" % value


def format_bcd(value: int) -> str:
    decode_bcd(value)
    return "0x%08XUL" % value


def parse_hash(text: Optional[str]) -> Optional[int]:
    """Top 32 bits of a hex commit id, or None when the id is empty."""
    if text is None:
        return None
    text = text.strip()
    if text.lower().startswith("0x"):
        text = text[2:]
    if not text:
        return None
    if not _HEX_RE.match(text):
        raise VersionParseError("VCS hash is not hexadecimal", text=text)
    return int(text[:HASH_DIGITS].ljust(HASH_DIGITS, "0"), 16)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC "Zulu" form, whole seconds. Naive datetimes count as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_packed(text: str) -> int:
    """Parse ``0x01010200``, ``0x01010200UL`` or a decimal integer."""
    raw = text.strip().rstrip("uUlL")
    try:
        value = int(raw, 16) if raw.lower().startswith("0x") else int(raw, 10)
    except ValueError as e:
        raise VersionParseError("Not a packed version value", text=text) from e
    decode_bcd(value)
    return value


@dataclass(frozen=True)
class VersionNumber:
    """The version of record for one generation run.

    Ordering compares the packed value, matching how consumers compare
    builds; the suffix and hash do not take part in ordering. Equality still
    compares every field, so two builds of 1.1.2.0 from different commits
    are neither < nor > each other, yet are not ==.
    """

    major: int = 0
    minor: int = 0
    patch: int = 0
    build: int = 0
    vcs_hash: str = ""
    suffix: str = ""
    build_timestamp: Optional[datetime] = None

    def __post_init__(self):
        for name in COMPONENT_NAMES:
            _check_component(name, getattr(self, name))

        vcs_hash = (self.vcs_hash or "").strip()
        if vcs_hash and (len(vcs_hash) != HASH_DIGITS or not _HEX_RE.match(vcs_hash)):
            raise VersionParseError(f"VCS hash must be {HASH_DIGITS} hex digits", text=vcs_hash)
        object.__setattr__(self, "vcs_hash", vcs_hash.upper())
        object.__setattr__(self, "suffix", self.suffix or "")

    @classmethod
    def parse(cls, text: str, **kwargs) -> "VersionNumber":
        """Build from ``"1.1.2.0-beta1"``; missing components are zero."""
        match = _VERSION_RE.match(text or "")
        if not match:
            raise VersionParseError("Malformed version string", text=text)
        parts = [int(g) if g is not None else 0 for g in match.groups()[:4]]
        suffix = match.group(5) or ""
        return cls(*parts, suffix=kwargs.pop("suffix", suffix), **kwargs)

    @property
    def components(self) -> Tuple[int, int, int, int]:
        return self.major, self.minor, self.patch, self.build

    @property
    def bcd(self) -> int:
        return encode_bcd(*self.components)

    @property
    def bcd_literal(self) -> str:
        return format_bcd(self.bcd)

    @property
    def dotted(self) -> str:
        return format_dotted(*self.components)

    @property
    def info(self) -> str:
        return format_info(self.dotted, self.suffix)

    @property
    def hash32(self) -> Optional[int]:
        return parse_hash(self.vcs_hash)

    @property
    def hash_literal(self) -> str:
        return format_hash(self.hash32)

    @property
    def build_date(self) -> str:
        if self.build_timestamp is None:
            return ""
        return format_timestamp(self.build_timestamp)

    def __lt__(self, other: "VersionNumber") -> bool:
        if not isinstance(other, VersionNumber):
            return NotImplemented
        return self.bcd < other.bcd

    def __le__(self, other: "VersionNumber") -> bool:
        if not isinstance(other, VersionNumber):
            return NotImplemented
        return self.bcd <= other.bcd

    def __gt__(self, other: "VersionNumber") -> bool:
        if not isinstance(other, VersionNumber):
            return NotImplemented
        return self.bcd > other.bcd

    def __ge__(self, other: "VersionNumber") -> bool:
        if not isinstance(other, VersionNumber):
            return NotImplemented
        return self.bcd >= other.bcd

    def __str__(self) -> str:
        return self.info
