"""One import/re-import pass over an extracted character scene."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .animation.clips import normalize_clips, select_controller_clips
from .core.logging import ImportLogger
from .core.name_parser import is_motion_name
from .core.types import AnimationType, ImportSettings, RigGeneration
from .data.intermediate import (
    AnimationClipDescriptor,
    LODGroupResult,
    RendererDescriptor,
    RetargetResult,
    SkeletonNode,
)
from .mesh.classify import body_mesh_names, hair_mesh_names
from .mesh.lod import build_lod_group, wants_lod_group
from .skeleton.classifier import classify
from .skeleton.retarget import build_mapping, resolve_animation_type

PREFAB_NONE = "none"
PREFAB_SINGLE = "single"
PREFAB_LOD = "lod"

# Log steps, shown grouped in the import report
STEP_CLASSIFY = "classify"
STEP_RETARGET = "retarget"
STEP_LOD = "lod"
STEP_CLIPS = "clips"


@dataclass
class CharacterScene:
    """Everything the import pass reads from the host scene."""
    name: str = ""
    path: str = ""
    generation_key: str = ""
    root: Optional[SkeletonNode] = None
    renderers: List[RendererDescriptor] = field(default_factory=list)
    clips: List[AnimationClipDescriptor] = field(default_factory=list)
    has_json_data: bool = False


@dataclass
class ImportResult:
    generation: RigGeneration = RigGeneration.UNKNOWN
    animation_type: AnimationType = AnimationType.GENERIC
    retarget: Optional[RetargetResult] = None
    prefab_kind: str = PREFAB_NONE
    lod_group: Optional[LODGroupResult] = None
    clips_changed: bool = False
    controller_clips: List[str] = field(default_factory=list)
    body_meshes: List[str] = field(default_factory=list)
    hair_meshes: List[str] = field(default_factory=list)


def run_import_pass(
    scene: CharacterScene,
    settings: ImportSettings,
    log: ImportLogger,
) -> ImportResult:
    """
    Classify, retarget, group LODs and normalize clips of one character.

    Holds no state between calls; re-running on the same scene gives the
    same result, with clips_changed=False once clips are normalized.
    """
    result = ImportResult()
    log.info(f"Import pass: '{scene.name}'")

    key = settings.generation_key or scene.generation_key
    with log.step(STEP_CLASSIFY):
        result.generation = classify(key, scene.root, scene.renderers, log)
        result.animation_type = resolve_animation_type(
            result.generation, settings.rig_override,
            scene.name, settings.motion_marker)

    with log.step(STEP_RETARGET):
        if result.generation.is_known:
            result.retarget = build_mapping(
                result.generation, scene.root,
                asset_name=scene.name,
                has_json_data=scene.has_json_data,
                motion_marker=settings.motion_marker,
                log=log,
            )
        else:
            log.info(f"Rig override: {result.animation_type.value}")

    with log.step(STEP_LOD):
        if is_motion_name(scene.name, settings.motion_marker):
            result.prefab_kind = PREFAB_NONE
        elif settings.build_lod_group and wants_lod_group(
                scene.name, scene.path, scene.renderers,
                settings.lod_marker, settings.motion_marker):
            result.prefab_kind = PREFAB_LOD
            result.lod_group = build_lod_group(scene.renderers, log)
        else:
            result.prefab_kind = PREFAB_SINGLE

    with log.step(STEP_CLIPS):
        if settings.normalize_clips:
            _, result.clips_changed = normalize_clips(scene.clips, log)
        result.controller_clips = [c.name for c in select_controller_clips(scene.clips)]

    result.body_meshes = body_mesh_names(scene.renderers)
    result.hair_meshes = hair_mesh_names(scene.renderers)

    log.info(f"Import pass done: {result.generation.value}, "
             f"{result.animation_type.value}, prefab={result.prefab_kind}")
    return result
