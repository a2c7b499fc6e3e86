"""Animation clip import flags: root motion locks and looping by clip name."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..core.logging import ImportLogger
from ..core.name_parser import icontains, icontains_any
from ..data.intermediate import AnimationClipDescriptor

# Forced on for every clip
ROOT_LOCK_FLAGS = (
    "keep_original_orientation",
    "keep_original_position_y",
    "keep_original_position_xz",
    "lock_root_rotation",
    "lock_root_height_y",
)

# (name pattern, flag) pairs, case-insensitive
NAME_FLAG_RULES: Tuple[Tuple[str, str], ...] = (
    ("idle", "lock_root_position_xz"),
    ("_loop", "loop_time"),
)

CONTROLLER_EXCLUDED_CLIPS = ("__preview__", "t-pose")


def normalized_flags(clip: AnimationClipDescriptor) -> Dict[str, bool]:
    """Target flag state of a clip. Never turns a flag off."""
    flags = clip.flags()
    if not all(flags[name] for name in ROOT_LOCK_FLAGS):
        for name in ROOT_LOCK_FLAGS:
            flags[name] = True
    for pattern, flag in NAME_FLAG_RULES:
        if icontains(clip.name, pattern):
            flags[flag] = True
    return flags


def flag_changes(
    clip: AnimationClipDescriptor, target: Dict[str, bool],
) -> Dict[str, bool]:
    return {name: value for name, value in target.items()
            if getattr(clip, name) != value}


def normalize_clip(clip: AnimationClipDescriptor) -> bool:
    """Apply the normalized flags in place; True if anything changed."""
    changes = flag_changes(clip, normalized_flags(clip))
    for name, value in changes.items():
        setattr(clip, name, value)
    return bool(changes)


def normalize_clips(
    clips: Optional[Sequence[AnimationClipDescriptor]],
    log: Optional[ImportLogger] = None,
) -> Tuple[List[AnimationClipDescriptor], bool]:
    """
    Normalize root motion and loop flags of all clips, in place.

    Returns (clips, changed). Running it again on the result reports
    changed=False and leaves every flag as it is.
    """
    log = log if log is not None else ImportLogger()

    if not clips:
        return [], False

    changed = False
    for clip in clips:
        if normalize_clip(clip):
            log.info(f"Clip '{clip.name}': import flags normalized")
            changed = True
    return list(clips), changed


def select_controller_clips(
    clips: Iterable[AnimationClipDescriptor],
) -> List[AnimationClipDescriptor]:
    """Clips that belong in a character's animator controller, in order."""
    return [clip for clip in clips
            if not icontains_any(clip.name, CONTROLLER_EXCLUDED_CLIPS)]
