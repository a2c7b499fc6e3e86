bl_info = {
    "name": "CC Rig Import",
    "description": "Classify, retarget and LOD-group Character Creator characters",
    "author": "acs",
    "version": (1, 0, 0),
    "blender": (4, 0, 0),
    "location": "F3 > Character Import Pass",
    "category": "Import-Export",
}

# Blender modules are imported on register() only, so the import core
# (classifier, retargeter, LOD grouper, clip normalizer) works without bpy.


def _classes():
    from .preferences import CCRigImportPreferences
    from .properties import CCRigImportSettings
    from .operators import (
        CCRIG_OT_Classify,
        CCRIG_OT_GroupLODs,
        CCRIG_OT_ImportPass,
        CCRIG_OT_ImportReport,
        CCRIG_OT_NormalizeClips,
    )

    return (
        CCRigImportPreferences,
        CCRigImportSettings,
        CCRIG_OT_ImportPass,
        CCRIG_OT_Classify,
        CCRIG_OT_GroupLODs,
        CCRIG_OT_NormalizeClips,
        CCRIG_OT_ImportReport,
    )


def register():
    import bpy
    from .properties import CCRigImportSettings

    for cls in _classes():
        bpy.utils.register_class(cls)
    bpy.types.Scene.cc_rig_import = bpy.props.PointerProperty(type=CCRigImportSettings)


def unregister():
    import bpy

    del bpy.types.Scene.cc_rig_import
    for cls in reversed(_classes()):
        bpy.utils.unregister_class(cls)
