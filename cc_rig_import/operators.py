import bpy

from .animation.clips import normalize_clips
from .core.logging import ERROR_LEVELS, ImportLogger
from .core.types import ImportSettings, RigOverride
from .mesh.lod import build_lod_group
from .pipeline import (
    STEP_CLASSIFY,
    STEP_CLIPS,
    STEP_LOD,
    STEP_RETARGET,
    ImportResult,
    run_import_pass,
)
from .scene.extract import (
    PROP_BONE_MAPPING,
    PROP_GENERATION,
    PROP_GENERATION_KEY,
    character_scene_from_object,
    clips_from_actions,
    renderer_from_object,
    renderers_from_hierarchy,
    skeleton_from_object,
    write_clip_flags,
    write_lod_properties,
)
from .skeleton.classifier import classify
from .skeleton.retarget import build_mapping

# Module-level storage for last import log (used by report dialog)
_last_import_log: ImportLogger | None = None


def get_last_import_log() -> ImportLogger | None:
    return _last_import_log


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _max_messages() -> int:
    try:
        return bpy.context.preferences.addons[__package__].preferences.max_messages
    except KeyError:
        return 500


def _build_settings(scene_settings) -> ImportSettings:
    """Convert Blender PropertyGroup to ImportSettings dataclass."""
    return ImportSettings(
        generation_key=scene_settings.generation_key,
        rig_override=RigOverride.from_string(scene_settings.rig_override),
        motion_marker=scene_settings.motion_marker,
        build_lod_group=scene_settings.build_lod_group,
        lod_marker=scene_settings.lod_marker,
        normalize_clips=scene_settings.normalize_clips,
        max_log_messages=_max_messages(),
    )


def _store_result(root_obj, result: ImportResult, log: ImportLogger) -> None:
    """Keep generation and bone mapping on the character root for re-imports."""
    try:
        root_obj[PROP_GENERATION] = result.generation.value
        if result.retarget is not None:
            root_obj[PROP_BONE_MAPPING] = {
                entry.human_name: entry.bone_name for entry in result.retarget.bones
            }
        elif PROP_BONE_MAPPING in root_obj:
            del root_obj[PROP_BONE_MAPPING]
    except (TypeError, AttributeError) as e:
        log.error(f"Cannot store import result on '{root_obj.name}': {e}")


def _finish_import(operator, log: ImportLogger, summary: str) -> set:
    """Store log and show report if needed. Returns operator result set."""
    global _last_import_log
    _last_import_log = log

    if log.has_errors:
        operator.report({'ERROR'}, f"{summary} with {log.error_count} errors")
    else:
        operator.report({'INFO'}, f"{summary}, {log.warning_count} warnings")

    if log.has_errors or log.warning_count > 0:
        bpy.ops.cc_rig.import_report('INVOKE_DEFAULT')

    return {'FINISHED'}


# ---------------------------------------------------------------------------
# Full import pass
# ---------------------------------------------------------------------------

class CCRIG_OT_ImportPass(bpy.types.Operator):
    bl_idname = "cc_rig.import_pass"
    bl_label = "Character Import Pass"
    bl_description = ("Classify, retarget, group LODs and normalize clips "
                      "of the active character hierarchy")
    bl_options = {'REGISTER', 'UNDO'}

    @classmethod
    def poll(cls, context):
        return context.active_object is not None

    def execute(self, context):
        settings = _build_settings(context.scene.cc_rig_import)
        root_obj = context.active_object
        log = ImportLogger(settings.max_log_messages, asset=root_obj.name)
        actions = list(bpy.data.actions)

        scene = character_scene_from_object(
            root_obj, actions, bpy.data.filepath or None)
        result = run_import_pass(scene, settings, log)

        _store_result(root_obj, result, log)
        if result.clips_changed:
            with log.step(STEP_CLIPS):
                write_clip_flags(actions, scene.clips, log)

        return _finish_import(
            self, log,
            f"'{root_obj.name}': {result.generation.value}, "
            f"{result.animation_type.value}")


# ---------------------------------------------------------------------------
# Classify only
# ---------------------------------------------------------------------------

class CCRIG_OT_Classify(bpy.types.Operator):
    bl_idname = "cc_rig.classify"
    bl_label = "Classify Rig"
    bl_description = "Detect the rig generation and humanoid bone mapping of the active hierarchy"
    bl_options = {'REGISTER', 'UNDO'}

    @classmethod
    def poll(cls, context):
        return context.active_object is not None

    def execute(self, context):
        settings = _build_settings(context.scene.cc_rig_import)
        root_obj = context.active_object
        log = ImportLogger(settings.max_log_messages, asset=root_obj.name)

        key = settings.generation_key or str(root_obj.get(PROP_GENERATION_KEY, ""))
        root = skeleton_from_object(root_obj)
        with log.step(STEP_CLASSIFY):
            generation = classify(key, root, renderers_from_hierarchy(root_obj), log)

        result = ImportResult(generation=generation)
        if generation.is_known:
            with log.step(STEP_RETARGET):
                result.retarget = build_mapping(
                    generation, root, asset_name=root_obj.name,
                    motion_marker=settings.motion_marker, log=log)
        _store_result(root_obj, result, log)

        return _finish_import(self, log, f"'{root_obj.name}': {generation.value}")


# ---------------------------------------------------------------------------
# LOD grouping
# ---------------------------------------------------------------------------

class CCRIG_OT_GroupLODs(bpy.types.Operator):
    bl_idname = "cc_rig.group_lods"
    bl_label = "Group LODs"
    bl_description = "Assign selected _LOD<n> meshes to LOD levels"
    bl_options = {'REGISTER', 'UNDO'}

    @classmethod
    def poll(cls, context):
        return any(o.type == 'MESH' for o in context.selected_objects)

    def execute(self, context):
        log = ImportLogger(_max_messages())
        objects = [o for o in context.selected_objects if o.type == 'MESH']
        with log.step(STEP_LOD):
            group = build_lod_group([renderer_from_object(o) for o in objects], log)
            write_lod_properties(objects, group, log)

        return _finish_import(self, log, f"Grouped {len(group.levels)} LOD level(s)")


# ---------------------------------------------------------------------------
# Clip normalization
# ---------------------------------------------------------------------------

class CCRIG_OT_NormalizeClips(bpy.types.Operator):
    bl_idname = "cc_rig.normalize_clips"
    bl_label = "Normalize Clips"
    bl_description = "Lock root motion on all actions and loop '_loop' actions"
    bl_options = {'REGISTER', 'UNDO'}

    def execute(self, context):
        log = ImportLogger(_max_messages())
        actions = list(bpy.data.actions)
        if not actions:
            self.report({'WARNING'}, "No actions to normalize")
            return {'CANCELLED'}

        with log.step(STEP_CLIPS):
            clips, changed = normalize_clips(clips_from_actions(actions), log)
            written = write_clip_flags(actions, clips, log) if changed else 0

        return _finish_import(self, log, f"Normalized {written} action(s)")


# ---------------------------------------------------------------------------
# Import Report Dialog
# ---------------------------------------------------------------------------

class CCRIG_OT_ImportReport(bpy.types.Operator):
    """Show import log report dialog."""
    bl_idname = "cc_rig.import_report"
    bl_label = "Character Import Report"
    bl_options = {'INTERNAL'}

    def execute(self, context):
        return {'FINISHED'}

    def invoke(self, context, event):
        return context.window_manager.invoke_props_dialog(self, width=500)

    def draw(self, context):
        layout = self.layout
        log = get_last_import_log()
        if log is None:
            layout.label(text="No import log available.")
            return

        info_count = log.count("INFO")

        row = layout.row()
        row.label(text=f"Errors: {log.error_count}", icon='ERROR')
        row.label(text=f"Warnings: {log.warning_count}", icon='INFO')
        row.label(text=f"Info: {info_count}", icon='CHECKMARK')
        if log.dropped:
            layout.label(text=f"{log.dropped} message(s) over the log limit were dropped")

        for title, icon, levels in (("Errors", 'ERROR', ERROR_LEVELS),
                                    ("Warnings", 'INFO', ("WARNING",))):
            if not log.count(*levels):
                continue
            box = layout.box()
            box.label(text=f"{title} ({log.step_summary(*levels)})", icon=icon)
            for line in log.report_lines(*levels, limit=20):
                box.label(text=line)

        # Info (show last 10)
        if info_count:
            box = layout.box()
            box.label(text=f"Info ({info_count} messages)", icon='CHECKMARK')
            for line in log.report_lines("INFO", limit=10, newest=True):
                box.label(text=line)
