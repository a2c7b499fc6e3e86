import sys
import os
import unittest
from types import SimpleNamespace

# Add the project root to sys.path
script_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(script_dir)
sys.path.insert(0, project_root)

from cc_rig_import.animation.clips import normalize_clips
from cc_rig_import.core.logging import ImportLogger
from cc_rig_import.data.intermediate import LODGroupResult, LODLevel, RendererDescriptor
from cc_rig_import.mesh.lod import build_lod_group
from cc_rig_import.scene.extract import (
    character_scene_from_object,
    clips_from_actions,
    renderer_from_object,
    write_clip_flags,
    write_lod_properties,
)


class FakeMatrix:
    """Translation-only stand-in for a mathutils.Matrix."""

    def __init__(self, x=0.0, y=0.0, z=0.0):
        self.t = (x, y, z)

    def copy(self):
        return FakeMatrix(*self.t)

    def inverted(self):
        return FakeMatrix(*(-v for v in self.t))

    def __matmul__(self, other):
        return FakeMatrix(*(a + b for a, b in zip(self.t, other.t)))

    def decompose(self):
        loc = SimpleNamespace(x=self.t[0], y=self.t[1], z=self.t[2])
        quat = SimpleNamespace(w=1.0, x=0.0, y=0.0, z=0.0)
        scl = SimpleNamespace(x=1.0, y=1.0, z=1.0)
        return loc, quat, scl


class FakeID(dict):
    """Blender ID block with custom properties."""

    def __init__(self, name, **attrs):
        super().__init__()
        self.name = name
        for key, value in attrs.items():
            setattr(self, key, value)


def bone(name, parent=None, y=0.0):
    b = SimpleNamespace(name=name, parent=parent, children=[],
                        matrix_local=FakeMatrix(0.0, y, 0.0))
    if parent is not None:
        parent.children.append(b)
    return b


def mesh(name, *materials):
    slots = [SimpleNamespace(material=SimpleNamespace(name=m, use_nodes=False))
             for m in materials]
    corners = [(-1.0, 0.0, -0.5), (1.0, 2.0, 0.5)]
    return FakeID(name, type='MESH', matrix_local=FakeMatrix(), children=[],
                  children_recursive=[], material_slots=slots, bound_box=corners)


class TestCharacterScene(unittest.TestCase):
    def setUp(self):
        hip = bone("CC_Base_Hip", y=1.0)
        waist = bone("CC_Base_Waist", parent=hip, y=1.25)
        armature = FakeID("RL_BoneRoot", type='ARMATURE', matrix_local=FakeMatrix(),
                          data=SimpleNamespace(bones=[hip, waist]), children=[])
        body = mesh("CC_Base_Body", "Std_Skin_Body")
        self.root = FakeID("Hero", type='EMPTY', matrix_local=FakeMatrix(),
                           children=[armature, body],
                           children_recursive=[armature, body])
        self.root["cc_generation_key"] = "RL_CharacterCreator_Base_Std_G3"

    def test_hierarchy(self):
        scene = character_scene_from_object(self.root, filepath="Hero_lod.blend")
        names = [n.name for n in scene.root.iter_preorder()]
        self.assertEqual(names, ["Hero", "RL_BoneRoot", "CC_Base_Hip",
                                 "CC_Base_Waist", "CC_Base_Body"])
        waist = scene.root.find("CC_Base_Waist")
        self.assertEqual(waist.position, (0.0, 0.25, 0.0))
        self.assertEqual(scene.generation_key, "RL_CharacterCreator_Base_Std_G3")
        self.assertEqual(scene.path, "Hero_lod.blend")
        self.assertFalse(scene.has_json_data)

    def test_renderers(self):
        scene = character_scene_from_object(self.root)
        self.assertEqual(len(scene.renderers), 1)
        body = scene.renderers[0]
        self.assertEqual(body.materials, ["Std_Skin_Body"])
        self.assertEqual(body.shaders, [""])
        self.assertEqual(body.bbox_min, (-1.0, 0.0, -0.5))
        self.assertEqual(body.bbox_max, (1.0, 2.0, 0.5))


class TestClipFlags(unittest.TestCase):
    def test_round_trip_through_actions(self):
        actions = [FakeID("Idle"), FakeID("Walk_Loop")]
        clips, changed = normalize_clips(clips_from_actions(actions))
        self.assertTrue(changed)

        log = ImportLogger()
        self.assertEqual(write_clip_flags(actions, clips, log), 2)
        self.assertTrue(actions[0]["cc_lock_root_position_xz"])
        self.assertTrue(actions[1]["cc_loop_time"])

        _, changed = normalize_clips(clips_from_actions(actions))
        self.assertFalse(changed)



class TestLodProperties(unittest.TestCase):
    def test_levels_written_and_stale_levels_cleared(self):
        body = mesh("Body")
        body_lod1 = mesh("Body_LOD1")
        stale = mesh("Body_LOD3")
        stale["cc_lod_level"] = 3
        stale["cc_lod_height"] = 0.02
        objects = [body, body_lod1, stale]

        group = LODGroupResult(levels=[
            LODLevel(index=0, renderers=[RendererDescriptor(name="Body")],
                     screen_relative_height=0.5),
            LODLevel(index=1, renderers=[RendererDescriptor(name="Body_LOD1")],
                     screen_relative_height=0.02),
        ])
        log = ImportLogger()
        self.assertEqual(write_lod_properties(objects, group, log), 2)

        self.assertEqual(body["cc_lod_level"], 0)
        self.assertAlmostEqual(body["cc_lod_height"], 0.5)
        self.assertEqual(body_lod1["cc_lod_level"], 1)
        self.assertNotIn("cc_lod_level", stale)
        self.assertNotIn("cc_lod_height", stale)
        self.assertFalse(log.has_errors)

    def test_regrouping_drops_objects_left_out(self):
        objects = [mesh("Body_LOD0"), mesh("Body_LOD1"), mesh("Body_LOD2")]
        log = ImportLogger()
        write_lod_properties(objects, build_lod_group(
            [renderer_from_object(o) for o in objects], log), log)
        self.assertEqual([o["cc_lod_level"] for o in objects], [0, 1, 2])

        # Body_LOD0 alone is left out of a two-renderer group up to LOD2
        regrouped = [objects[0], objects[2]]
        group = build_lod_group([renderer_from_object(o) for o in regrouped], log)
        write_lod_properties(regrouped, group, log)
        self.assertNotIn("cc_lod_level", objects[0])
        self.assertEqual(objects[2]["cc_lod_level"], 1)

if __name__ == "__main__":
    unittest.main()
