import bpy
from bpy.props import IntProperty


class CCRigImportPreferences(bpy.types.AddonPreferences):
    bl_idname = __package__

    max_messages: IntProperty(
        name="Max Log Messages",
        description="Maximum number of log messages to display",
        default=500,
        min=100,
        max=5000,
    )

    def draw(self, context):
        layout = self.layout
        layout.prop(self, "max_messages")
