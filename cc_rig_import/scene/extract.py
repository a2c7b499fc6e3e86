"""Character scene extraction from Blender 4.x objects and actions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

if TYPE_CHECKING:
    import bpy

from ..core.logging import ImportLogger
from ..data.intermediate import (
    CLIP_FLAG_NAMES,
    AnimationClipDescriptor,
    LODGroupResult,
    RendererDescriptor,
    SkeletonNode,
)
from ..pipeline import CharacterScene

# Custom properties written by the character exporter / this add-on
PROP_GENERATION_KEY = "cc_generation_key"
PROP_JSON_DATA = "cc_json_data"
PROP_GENERATION = "cc_generation"
PROP_BONE_MAPPING = "cc_bone_mapping"
PROP_LOD_LEVEL = "cc_lod_level"
PROP_LOD_HEIGHT = "cc_lod_height"
CLIP_PROP_PREFIX = "cc_"


def _decompose(matrix) -> Tuple[tuple, tuple, tuple]:
    loc, quat, scl = matrix.decompose()
    return (
        (loc.x, loc.y, loc.z),
        (quat.w, quat.x, quat.y, quat.z),
        (scl.x, scl.y, scl.z),
    )


def _bone_node(bone) -> SkeletonNode:
    """Rest bone in parent bone space, children in armature order."""
    matrix = bone.matrix_local.copy()
    if bone.parent:
        matrix = bone.parent.matrix_local.inverted() @ matrix
    position, rotation, scale = _decompose(matrix)

    node = SkeletonNode(name=bone.name, position=position,
                        rotation=rotation, scale=scale)
    for child in bone.children:
        node.add_child(_bone_node(child))
    return node


def skeleton_from_object(obj) -> SkeletonNode:
    """
    Convert an object hierarchy into SkeletonNodes.

    Armature objects contribute their bones (root bones first) ahead of
    their child objects, mirroring the transform tree of an FBX import.
    """
    position, rotation, scale = _decompose(obj.matrix_local)
    node = SkeletonNode(name=obj.name, position=position,
                        rotation=rotation, scale=scale)

    if obj.type == 'ARMATURE' and obj.data is not None:
        for bone in obj.data.bones:
            if bone.parent is None:
                node.add_child(_bone_node(bone))

    for child in obj.children:
        node.add_child(skeleton_from_object(child))
    return node


def _shader_name(material) -> str:
    """Name of the first node group used by a material, '' if none."""
    if material is None or not getattr(material, 'use_nodes', False):
        return ""
    tree = getattr(material, 'node_tree', None)
    if tree is None:
        return ""
    for node in tree.nodes:
        if node.type == 'GROUP' and node.node_tree is not None:
            return node.node_tree.name
    return ""


def renderer_from_object(obj) -> RendererDescriptor:
    renderer = RendererDescriptor(name=obj.name)
    for slot in obj.material_slots:
        if slot.material is None:
            continue
        renderer.materials.append(slot.material.name)
        renderer.shaders.append(_shader_name(slot.material))

    corners = [tuple(c) for c in obj.bound_box]
    if corners:
        renderer.bbox_min = tuple(min(c[i] for c in corners) for i in range(3))
        renderer.bbox_max = tuple(max(c[i] for c in corners) for i in range(3))
    return renderer


def renderers_from_hierarchy(root_obj) -> List[RendererDescriptor]:
    objects = [root_obj] + list(root_obj.children_recursive)
    return [renderer_from_object(o) for o in objects if o.type == 'MESH']


def clip_from_action(action) -> AnimationClipDescriptor:
    clip = AnimationClipDescriptor(name=action.name)
    for flag in CLIP_FLAG_NAMES:
        setattr(clip, flag, bool(action.get(CLIP_PROP_PREFIX + flag, False)))
    return clip


def clips_from_actions(actions: Iterable) -> List[AnimationClipDescriptor]:
    return [clip_from_action(a) for a in actions]


def write_clip_flags(
    actions: Iterable,
    clips: Iterable[AnimationClipDescriptor],
    log: ImportLogger,
) -> int:
    """Store clip flags back on the matching actions. Returns actions written."""
    by_name = {clip.name: clip for clip in clips}
    written = 0
    for action in actions:
        clip = by_name.get(action.name)
        if clip is None:
            continue
        try:
            for flag in CLIP_FLAG_NAMES:
                action[CLIP_PROP_PREFIX + flag] = getattr(clip, flag)
        except (TypeError, AttributeError) as e:
            log.error(f"Cannot store flags on action '{action.name}': {e}")
            continue
        written += 1
    return written


def write_lod_properties(
    objects: Iterable,
    group: LODGroupResult,
    log: ImportLogger,
) -> int:
    """
    Store LOD level and transition height on the grouped objects.

    Objects that are in no level lose the properties a previous grouping
    left on them. Returns objects assigned to a level.
    """
    assigned = {
        renderer.name: level
        for level in group.levels
        for renderer in level.renderers
    }
    written = 0
    for obj in objects:
        level = assigned.get(obj.name)
        try:
            if level is None:
                for key in (PROP_LOD_LEVEL, PROP_LOD_HEIGHT):
                    if key in obj:
                        del obj[key]
                continue
            obj[PROP_LOD_LEVEL] = level.index
            obj[PROP_LOD_HEIGHT] = level.screen_relative_height
        except (TypeError, AttributeError) as e:
            log.error(f"Cannot store LOD level on '{obj.name}': {e}")
            continue
        written += 1
    return written


def character_scene_from_object(
    root_obj,
    actions: Iterable = (),
    filepath: Optional[str] = None,
) -> CharacterScene:
    """Collect everything the import pass needs from a character root object."""
    return CharacterScene(
        name=root_obj.name,
        path=filepath or root_obj.name,
        generation_key=str(root_obj.get(PROP_GENERATION_KEY, "")),
        root=skeleton_from_object(root_obj),
        renderers=renderers_from_hierarchy(root_obj),
        clips=clips_from_actions(actions),
        has_json_data=bool(root_obj.get(PROP_JSON_DATA)),
    )
