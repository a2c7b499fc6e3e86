"""Parse exported object names for import behavior control.

Convention: MeshName_LOD<d>
Parse rule: the literal, case-sensitive suffix '_LOD' followed by exactly
one decimal digit at the very end of the name marks LOD level <d>.
Anything else is an unsuffixed name (implicit level 0).

Example:
    CC_Base_Body_LOD2   -> clean="CC_Base_Body", lod_level=2
    CC_Base_Body        -> clean="CC_Base_Body", lod_level=None
    Body_LOD12          -> clean="Body_LOD12", lod_level=None (two digits)
    Body_lod1           -> clean="Body_lod1", lod_level=None (wrong case)
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

LOD_SUFFIX = "_LOD"

_LOD_SUFFIX_RE = re.compile(r'^(.*)_LOD(\d)$')


@dataclass(frozen=True)
class ParsedName:
    """Result of parsing an object name for an LOD suffix."""
    clean_name: str
    original_name: str
    lod_level: Optional[int] = None  # None = no suffix

    @property
    def has_lod_suffix(self) -> bool:
        return self.lod_level is not None

    @property
    def effective_level(self) -> int:
        return self.lod_level if self.lod_level is not None else 0


def parse_object_name(name: str) -> ParsedName:
    """Parse an object name for a trailing '_LOD<d>' suffix."""
    match = _LOD_SUFFIX_RE.match(name)
    if match is None:
        return ParsedName(clean_name=name, original_name=name)
    return ParsedName(
        clean_name=match.group(1),
        original_name=name,
        lod_level=int(match.group(2)),
    )


def icontains(text: str, pattern: str) -> bool:
    """Case-insensitive substring test."""
    return pattern.lower() in text.lower()


def iequals(text: str, other: str) -> bool:
    """Case-insensitive equality test."""
    return text.lower() == other.lower()


def icontains_any(text: str, patterns: Iterable[str]) -> bool:
    return any(icontains(text, p) for p in patterns)


def is_motion_name(name: str, marker: str = "_Motion") -> bool:
    """True for motion-only assets (animation exports without a character)."""
    return bool(marker) and icontains(name, marker)
