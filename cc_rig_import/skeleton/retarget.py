"""Humanoid retargeting: map a generation's bones onto canonical humanoid bones."""

from __future__ import annotations

from typing import List, Optional, Set

from ..core.logging import ImportLogger
from ..core.name_parser import is_motion_name
from ..core.types import AnimationType, RigGeneration, RigOverride
from ..data.intermediate import (
    BoneMappingEntry,
    HumanoidTuning,
    RetargetResult,
    SkeletonBoneSnapshot,
    SkeletonNode,
)
from ..data.rig_tables import bone_table_for

HUMANOID_TUNING = HumanoidTuning()

_OVERRIDE_TYPES = {
    RigOverride.NONE: AnimationType.NONE,
    RigOverride.HUMANOID: AnimationType.HUMAN,
    RigOverride.GENERIC: AnimationType.GENERIC,
}


def resolve_animation_type(
    generation: RigGeneration,
    rig_override: RigOverride,
    asset_name: str = "",
    motion_marker: str = "_Motion",
) -> AnimationType:
    """
    Pick the rig mode of the imported model.

    Recognized generations are always humanoid. Unrecognized characters
    use the user's override, except motion-only assets which stay humanoid
    with an automatically generated avatar.
    """
    if generation.is_known:
        return AnimationType.HUMAN
    if is_motion_name(asset_name, motion_marker):
        return AnimationType.HUMAN
    return _OVERRIDE_TYPES.get(rig_override, AnimationType.GENERIC)


def filter_bone_table(
    table, skeleton_root: SkeletonNode, log: Optional[ImportLogger] = None,
) -> List[BoneMappingEntry]:
    """Drop entries whose bone is not in the skeleton (bone LOD exports), keep order."""
    log = log if log is not None else ImportLogger()
    present: Set[str] = {node.name for node in skeleton_root.iter_preorder()}

    result: List[BoneMappingEntry] = []
    for entry in table:
        if entry.bone_name in present:
            result.append(entry)
        else:
            log.info(f"Missing bone '{entry.bone_name}' ({entry.human_name}), not mapped")
    return result


def snapshot_skeleton(skeleton_root: SkeletonNode) -> List[SkeletonBoneSnapshot]:
    """Local rest transform of every node in pre-order, mapped or not."""
    return [
        SkeletonBoneSnapshot(
            name=node.name,
            position=tuple(node.position),
            rotation=tuple(node.rotation),
            scale=tuple(node.scale),
        )
        for node in skeleton_root.iter_preorder()
    ]


def build_mapping(
    generation: RigGeneration,
    skeleton_root: Optional[SkeletonNode],
    asset_name: str = "",
    has_json_data: bool = False,
    motion_marker: str = "_Motion",
    log: Optional[ImportLogger] = None,
) -> Optional[RetargetResult]:
    """
    Build the humanoid avatar description of a classified character.

    Returns None when the generation has no bone table or there is no
    hierarchy to map; the caller then falls back to the rig override mode.
    The skeleton snapshot is left empty only for motion-only assets that
    come without character JSON data.
    """
    log = log if log is not None else ImportLogger()

    table = bone_table_for(generation)
    if table is None:
        log.warning(f"No humanoid bone table for generation {generation.value}")
        return None
    if skeleton_root is None:
        log.warning(f"Generation {generation.value} has no hierarchy to retarget")
        return None

    bones = filter_bone_table(table, skeleton_root, log)
    log.info(f"Mapped {len(bones)}/{len(table)} humanoid bones "
             f"for generation {generation.value}")

    if has_json_data or not is_motion_name(asset_name, motion_marker):
        skeleton = snapshot_skeleton(skeleton_root)
    else:
        skeleton = []

    return RetargetResult(bones=bones, skeleton=skeleton, tuning=HUMANOID_TUNING)
