import sys
import os
import unittest

# Add the project root to sys.path
script_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(script_dir)
sys.path.insert(0, project_root)

from cc_rig_import.core.logging import ImportLogger
from cc_rig_import.core.types import RigGeneration
from cc_rig_import.data.intermediate import RendererDescriptor, SkeletonNode
from cc_rig_import.data.rig_tables import GENERATION_KEYS
from cc_rig_import.skeleton.classifier import (
    NAME_RULES,
    classify,
    classify_body_materials,
)
from cc_rig_import.skeleton.scanner import scan_skeleton


def tree(name, *children):
    return SkeletonNode(name=name, children=list(children))


class TestExplicitKey(unittest.TestCase):
    def test_every_key_maps_to_its_generation(self):
        # Skeleton signals are ignored when a key is given
        distractor = tree("RootNode_0_", tree("CC_Base_L_Finger42"))
        for key, generation in GENERATION_KEYS.items():
            self.assertEqual(classify(key, distractor, []), generation, key)

    def test_unknown_key_is_unknown_without_scanning(self):
        root = tree("RootNode_0_")
        self.assertEqual(classify("RL_CC9", root), RigGeneration.UNKNOWN)

    def test_keys_are_case_sensitive(self):
        self.assertEqual(classify("rl_cc3_plus"), RigGeneration.UNKNOWN)

    def test_empty_key_falls_back_to_scene(self):
        root = tree("Armature", tree("CC_Base_L_Pinky3"))
        self.assertEqual(classify("", root), RigGeneration.G3)
        self.assertEqual(classify(None, root), RigGeneration.G3)

    def test_nothing_to_classify(self):
        self.assertEqual(classify(None, None, None), RigGeneration.UNKNOWN)


class TestNamePass(unittest.TestCase):
    def test_rules_are_ordered_by_priority(self):
        self.assertEqual(
            [r.generation for r in NAME_RULES],
            [RigGeneration.ACTOR_CORE, RigGeneration.G3, RigGeneration.GAME_BASE,
             RigGeneration.G1, RigGeneration.G3])

    def test_actor_core_wins_over_g3(self):
        root = tree("RootNode_0_Character", tree("CC_Base_L_Pinky3"))
        self.assertEqual(classify(None, root), RigGeneration.ACTOR_CORE)

    def test_same_node_matching_two_rules_takes_first_rule(self):
        root = tree("Armature", tree("RootNode_0_CC_Base_L_Pinky3"))
        self.assertEqual(classify(None, root), RigGeneration.ACTOR_CORE)

    def test_first_matching_node_in_preorder_wins(self):
        root = tree("Armature",
                    tree("Hand", tree("pinky_03_l")),
                    tree("CC_Base_L_Finger42"))
        self.assertEqual(classify(None, root), RigGeneration.GAME_BASE)

    def test_names_are_case_insensitive(self):
        root = tree("Armature", tree("cc_base_l_finger42"))
        self.assertEqual(classify(None, root), RigGeneration.G1)

    def test_bone_root_with_hip_child_is_g3(self):
        root = tree("Character", tree("RL_BoneRoot", tree("CC_Base_Hip")))
        self.assertEqual(classify(None, root), RigGeneration.G3)

    def test_bone_root_without_hip_child_is_unknown(self):
        root = tree("Character", tree("RL_BoneRoot", tree("CC_Base_Waist")))
        self.assertEqual(classify(None, root), RigGeneration.UNKNOWN)

    def test_hip_must_be_a_direct_child(self):
        root = tree("RL_BoneRoot", tree("Pivot", tree("CC_Base_Hip")))
        self.assertEqual(classify(None, root), RigGeneration.UNKNOWN)


class TestMeshPass(unittest.TestCase):
    def test_game_body_and_tongue(self):
        for name in ("CC_Game_Body", "CC_Game_Tongue_01"):
            root = tree("Character", tree(name))
            self.assertEqual(classify(None, root), RigGeneration.GAME_BASE, name)

    def test_name_pass_runs_before_mesh_pass(self):
        root = tree("Character", tree("CC_Game_Body"), tree("CC_Base_L_Finger42"))
        self.assertEqual(classify(None, root), RigGeneration.G1)

    def test_body_materials_decide(self):
        root = tree("Character", tree("CC_Base_Body"))
        body = RendererDescriptor(name="CC_Base_Body",
                                  materials=["Std_Eye_L", "Skin_Body_G1"])
        self.assertEqual(classify(None, root, [body]), RigGeneration.G1)

    def test_skin_body_shadows_later_material_rules(self):
        self.assertEqual(classify_body_materials(["Std_Skin_Body"]), RigGeneration.G1)
        self.assertEqual(classify_body_materials(["ga_skin_body"]), RigGeneration.G1)
        self.assertIsNone(classify_body_materials(["Std_Eye_L", "Hair"]))

    def test_body_without_matching_material_keeps_scanning(self):
        root = tree("Character", tree("CC_Base_Body"), tree("CC_Game_Tongue"))
        body = RendererDescriptor(name="CC_Base_Body", materials=["Std_Nails"])
        self.assertEqual(classify(None, root, [body]), RigGeneration.GAME_BASE)

    def test_body_without_renderer_is_skipped(self):
        root = tree("Character", tree("CC_Base_Body"))
        self.assertEqual(classify(None, root, []), RigGeneration.UNKNOWN)

    def test_unknown_is_logged_as_warning(self):
        log = ImportLogger()
        classify(None, tree("Cube"), [], log)
        self.assertEqual(log.warning_count, 1)


class TestScanner(unittest.TestCase):
    def test_preorder_and_renderer_pairing(self):
        root = tree("A", tree("B", tree("C")), tree("D"))
        scan = scan_skeleton(root, [RendererDescriptor(name="C", materials=["M"])])
        self.assertEqual(scan.node_names, ["A", "B", "C", "D"])
        self.assertEqual(scan.nodes[2].materials, ("M",))
        self.assertFalse(scan.nodes[1].has_renderer)

    def test_empty_scan(self):
        self.assertEqual(scan_skeleton(None).nodes, [])


if __name__ == "__main__":
    unittest.main()
