import bpy
from bpy.props import (
    BoolProperty,
    EnumProperty,
    StringProperty,
)


class CCRigImportSettings(bpy.types.PropertyGroup):
    """Import settings stored per-scene."""

    # --- Rig ---
    generation_key: StringProperty(
        name="Generation Key",
        description="Character generation identifier (empty = detect from the hierarchy)",
        default="",
    )

    rig_override: EnumProperty(
        name="Rig Override",
        description="Rig mode for characters whose generation is not recognized",
        items=[
            ('NONE', "None", "Import without a rig"),
            ('HUMANOID', "Humanoid", "Humanoid rig with an automatic avatar"),
            ('GENERIC', "Generic", "Generic transform rig"),
        ],
        default='GENERIC',
    )

    motion_marker: StringProperty(
        name="Motion Marker",
        description="Name marker of motion-only exports",
        default="_Motion",
    )

    # --- LOD ---
    build_lod_group: BoolProperty(
        name="Build LOD Group",
        description="Group _LOD<n> meshes of LOD exports into levels",
        default=True,
    )

    lod_marker: StringProperty(
        name="LOD Marker",
        description="File name marker of LOD exports",
        default="_lod",
    )

    # --- Animation ---
    normalize_clips: BoolProperty(
        name="Normalize Clips",
        description="Lock root motion of all clips, loop '_loop' clips",
        default=True,
    )
