from dataclasses import dataclass
from enum import Enum


class RigGeneration(Enum):
    """Skeleton naming/topology convention of a Character Creator export."""
    NONE = "None"
    UNKNOWN = "Unknown"
    GAME_BASE = "GameBase"
    G1 = "G1"
    G3 = "G3"
    G3_PLUS = "G3Plus"
    ACTOR_CORE = "ActorCore"
    ACTOR_BUILD = "ActorBuild"

    @property
    def is_known(self) -> bool:
        return self not in (RigGeneration.NONE, RigGeneration.UNKNOWN)


class RigOverride(Enum):
    """Rig mode chosen by the user for characters that can't be classified."""
    NONE = "NONE"
    HUMANOID = "HUMANOID"
    GENERIC = "GENERIC"

    @classmethod
    def from_string(cls, value: str) -> "RigOverride":
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown rig override '{value}'") from None


class AnimationType(Enum):
    """How the target runtime should treat the character's rig."""
    NONE = "NONE"
    HUMAN = "HUMAN"
    GENERIC = "GENERIC"


@dataclass
class ImportSettings:
    """All import settings, populated from the scene PropertyGroup."""

    # Rig
    generation_key: str = ""
    rig_override: RigOverride = RigOverride.GENERIC
    motion_marker: str = "_Motion"

    # LOD
    build_lod_group: bool = True
    lod_marker: str = "_lod"

    # Animation
    normalize_clips: bool = True

    # Report
    max_log_messages: int = 500
