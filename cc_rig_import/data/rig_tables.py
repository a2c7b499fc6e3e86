"""Static rig lookup tables.

GENERATION_KEYS maps the generation identifier written by the character
exporter to a RigGeneration. BONE_TABLES holds one ordered humanoid bone
table per generation family; the order of each table is the order of the
produced avatar mapping.

New rig generations are added here, without touching the classifier or
the retargeter.
"""

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from ..core.types import RigGeneration
from .intermediate import BoneMappingEntry

GENERATION_KEYS: Mapping[str, RigGeneration] = MappingProxyType({
    "RL_CC3_Plus": RigGeneration.G3_PLUS,
    "RL_CharacterCreator_Base_Game_G1_Divide_Eyelash_UV": RigGeneration.GAME_BASE,
    "RL_CharacterCreator_Base_Game_G1_Multi_UV": RigGeneration.GAME_BASE,
    "RL_CharacterCreator_Base_Game_G1_One_UV": RigGeneration.GAME_BASE,
    "RL_CharacterCreator_Base_Std_G3": RigGeneration.G3,
    "RL_G6_Standard_Series": RigGeneration.G1,
    "NonStdLookAtDataCopyFromCCBase": RigGeneration.ACTOR_CORE,
    "ActorBuild": RigGeneration.ACTOR_BUILD,
    "ActorScan": RigGeneration.ACTOR_CORE,
})


def _table(*pairs: Tuple[str, str]) -> Tuple[BoneMappingEntry, ...]:
    return tuple(BoneMappingEntry(human, bone) for human, bone in pairs)


G3_BONES = _table(
    ("Chest", "CC_Base_Spine01"),
    ("Head", "CC_Base_Head"),
    ("Hips", "CC_Base_Hip"),
    ("Jaw", "CC_Base_JawRoot"),
    ("Left Index Distal", "CC_Base_L_Index3"),
    ("Left Index Intermediate", "CC_Base_L_Index2"),
    ("Left Index Proximal", "CC_Base_L_Index1"),
    ("Left Little Distal", "CC_Base_L_Pinky3"),
    ("Left Little Intermediate", "CC_Base_L_Pinky2"),
    ("Left Little Proximal", "CC_Base_L_Pinky1"),
    ("Left Middle Distal", "CC_Base_L_Mid3"),
    ("Left Middle Intermediate", "CC_Base_L_Mid2"),
    ("Left Middle Proximal", "CC_Base_L_Mid1"),
    ("Left Ring Distal", "CC_Base_L_Ring3"),
    ("Left Ring Intermediate", "CC_Base_L_Ring2"),
    ("Left Ring Proximal", "CC_Base_L_Ring1"),
    ("Left Thumb Distal", "CC_Base_L_Thumb3"),
    ("Left Thumb Intermediate", "CC_Base_L_Thumb2"),
    ("Left Thumb Proximal", "CC_Base_L_Thumb1"),
    ("LeftEye", "CC_Base_L_Eye"),
    ("LeftFoot", "CC_Base_L_Foot"),
    ("LeftHand", "CC_Base_L_Hand"),
    ("LeftLowerArm", "CC_Base_L_Forearm"),
    ("LeftLowerLeg", "CC_Base_L_Calf"),
    ("LeftShoulder", "CC_Base_L_Clavicle"),
    ("LeftToes", "CC_Base_L_ToeBase"),
    ("LeftUpperArm", "CC_Base_L_Upperarm"),
    ("LeftUpperLeg", "CC_Base_L_Thigh"),
    ("Neck", "CC_Base_NeckTwist01"),
    ("Right Index Distal", "CC_Base_R_Index3"),
    ("Right Index Intermediate", "CC_Base_R_Index2"),
    ("Right Index Proximal", "CC_Base_R_Index1"),
    ("Right Little Distal", "CC_Base_R_Pinky3"),
    ("Right Little Intermediate", "CC_Base_R_Pinky2"),
    ("Right Little Proximal", "CC_Base_R_Pinky1"),
    ("Right Middle Distal", "CC_Base_R_Mid3"),
    ("Right Middle Intermediate", "CC_Base_R_Mid2"),
    ("Right Middle Proximal", "CC_Base_R_Mid1"),
    ("Right Ring Distal", "CC_Base_R_Ring3"),
    ("Right Ring Intermediate", "CC_Base_R_Ring2"),
    ("Right Ring Proximal", "CC_Base_R_Ring1"),
    ("Right Thumb Distal", "CC_Base_R_Thumb3"),
    ("Right Thumb Intermediate", "CC_Base_R_Thumb2"),
    ("Right Thumb Proximal", "CC_Base_R_Thumb1"),
    ("RightEye", "CC_Base_R_Eye"),
    ("RightFoot", "CC_Base_R_Foot"),
    ("RightHand", "CC_Base_R_Hand"),
    ("RightLowerArm", "CC_Base_R_Forearm"),
    ("RightLowerLeg", "CC_Base_R_Calf"),
    ("RightShoulder", "CC_Base_R_Clavicle"),
    ("RightToes", "CC_Base_R_ToeBase"),
    ("RightUpperArm", "CC_Base_R_Upperarm"),
    ("RightUpperLeg", "CC_Base_R_Thigh"),
    ("Spine", "CC_Base_Waist"),
    ("UpperChest", "CC_Base_Spine02"),
)

G1_BONES = _table(
    ("Chest", "CC_Base_Spine01"),
    ("Head", "CC_Base_Head"),
    ("Hips", "CC_Base_Hip"),
    ("Jaw", "CC_Base_JawRoot"),
    ("Left Index Distal", "CC_Base_L_Finger12"),
    ("Left Index Intermediate", "CC_Base_L_Finger11"),
    ("Left Index Proximal", "CC_Base_L_Finger10"),
    ("Left Little Distal", "CC_Base_L_Finger42"),
    ("Left Little Intermediate", "CC_Base_L_Finger41"),
    ("Left Little Proximal", "CC_Base_L_Finger40"),
    ("Left Middle Distal", "CC_Base_L_Finger22"),
    ("Left Middle Intermediate", "CC_Base_L_Finger21"),
    ("Left Middle Proximal", "CC_Base_L_Finger20"),
    ("Left Ring Distal", "CC_Base_L_Finger32"),
    ("Left Ring Intermediate", "CC_Base_L_Finger31"),
    ("Left Ring Proximal", "CC_Base_L_Finger30"),
    ("Left Thumb Distal", "CC_Base_L_Finger02"),
    ("Left Thumb Intermediate", "CC_Base_L_Finger01"),
    ("Left Thumb Proximal", "CC_Base_L_Finger00"),
    ("LeftEye", "CC_Base_L_Eye"),
    ("LeftFoot", "CC_Base_L_Foot"),
    ("LeftHand", "CC_Base_L_Hand"),
    ("LeftLowerArm", "CC_Base_L_Forearm"),
    ("LeftLowerLeg", "CC_Base_L_Calf"),
    ("LeftShoulder", "CC_Base_L_Clavicle"),
    ("LeftToes", "CC_Base_L_ToeBase"),
    ("LeftUpperArm", "CC_Base_L_Upperarm"),
    ("LeftUpperLeg", "CC_Base_L_Thigh"),
    ("Neck", "CC_Base_NeckTwist01"),
    ("Right Index Distal", "CC_Base_R_Finger12"),
    ("Right Index Intermediate", "CC_Base_R_Finger11"),
    ("Right Index Proximal", "CC_Base_R_Finger10"),
    ("Right Little Distal", "CC_Base_R_Finger42"),
    ("Right Little Intermediate", "CC_Base_R_Finger41"),
    ("Right Little Proximal", "CC_Base_R_Finger40"),
    ("Right Middle Distal", "CC_Base_R_Finger22"),
    ("Right Middle Intermediate", "CC_Base_R_Finger21"),
    ("Right Middle Proximal", "CC_Base_R_Finger20"),
    ("Right Ring Distal", "CC_Base_R_Finger32"),
    ("Right Ring Intermediate", "CC_Base_R_Finger31"),
    ("Right Ring Proximal", "CC_Base_R_Finger30"),
    ("Right Thumb Distal", "CC_Base_R_Finger02"),
    ("Right Thumb Intermediate", "CC_Base_R_Finger01"),
    ("Right Thumb Proximal", "CC_Base_R_Finger00"),
    ("RightEye", "CC_Base_R_Eye"),
    ("RightFoot", "CC_Base_R_Foot"),
    ("RightHand", "CC_Base_R_Hand"),
    ("RightLowerArm", "CC_Base_R_Forearm"),
    ("RightLowerLeg", "CC_Base_R_Calf"),
    ("RightShoulder", "CC_Base_R_Clavicle"),
    ("RightToes", "CC_Base_R_ToeBase"),
    ("RightUpperArm", "CC_Base_R_Upperarm"),
    ("RightUpperLeg", "CC_Base_R_Thigh"),
    ("Spine", "CC_Base_Waist"),
    ("UpperChest", "CC_Base_Spine02"),
)

GAME_BASE_BONES = _table(
    ("Chest", "spine_02"),
    ("Head", "head"),
    ("Hips", "pelvis"),
    ("Jaw", "CC_Base_JawRoot"),
    ("Left Index Distal", "index_03_l"),
    ("Left Index Intermediate", "index_02_l"),
    ("Left Index Proximal", "index_01_l"),
    ("Left Little Distal", "pinky_03_l"),
    ("Left Little Intermediate", "pinky_02_l"),
    ("Left Little Proximal", "pinky_01_l"),
    ("Left Middle Distal", "middle_03_l"),
    ("Left Middle Intermediate", "middle_02_l"),
    ("Left Middle Proximal", "middle_01_l"),
    ("Left Ring Distal", "ring_03_l"),
    ("Left Ring Intermediate", "ring_02_l"),
    ("Left Ring Proximal", "ring_01_l"),
    ("Left Thumb Distal", "thumb_03_l"),
    ("Left Thumb Intermediate", "thumb_02_l"),
    ("Left Thumb Proximal", "thumb_01_l"),
    ("LeftEye", "CC_Base_L_Eye"),
    ("LeftFoot", "foot_l"),
    ("LeftHand", "hand_l"),
    ("LeftLowerArm", "lowerarm_l"),
    ("LeftLowerLeg", "calf_l"),
    ("LeftShoulder", "clavicle_l"),
    ("LeftToes", "ball_l"),
    ("LeftUpperArm", "upperarm_l"),
    ("LeftUpperLeg", "thigh_l"),
    ("Neck", "neck_01"),
    ("Right Index Distal", "index_03_r"),
    ("Right Index Intermediate", "index_02_r"),
    ("Right Index Proximal", "index_01_r"),
    ("Right Little Distal", "pinky_03_r"),
    ("Right Little Intermediate", "pinky_02_r"),
    ("Right Little Proximal", "pinky_01_r"),
    ("Right Middle Distal", "middle_03_r"),
    ("Right Middle Intermediate", "middle_02_r"),
    ("Right Middle Proximal", "middle_01_r"),
    ("Right Ring Distal", "ring_03_r"),
    ("Right Ring Intermediate", "ring_02_r"),
    ("Right Ring Proximal", "ring_01_r"),
    ("Right Thumb Distal", "thumb_03_r"),
    ("Right Thumb Intermediate", "thumb_02_r"),
    ("Right Thumb Proximal", "thumb_01_r"),
    ("RightEye", "CC_Base_R_Eye"),
    ("RightFoot", "foot_r"),
    ("RightHand", "hand_r"),
    ("RightLowerArm", "lowerarm_r"),
    ("RightLowerLeg", "calf_r"),
    ("RightShoulder", "clavicle_r"),
    ("RightToes", "ball_r"),
    ("RightUpperArm", "upperarm_r"),
    ("RightUpperLeg", "thigh_r"),
    ("Spine", "spine_01"),
    ("UpperChest", "spine_03"),
)

BONE_TABLES: Mapping[RigGeneration, Tuple[BoneMappingEntry, ...]] = MappingProxyType({
    RigGeneration.G3: G3_BONES,
    RigGeneration.G3_PLUS: G3_BONES,
    RigGeneration.ACTOR_CORE: G3_BONES,
    RigGeneration.ACTOR_BUILD: G3_BONES,
    RigGeneration.G1: G1_BONES,
    RigGeneration.GAME_BASE: GAME_BASE_BONES,
})


def lookup_generation(key: str) -> Optional[RigGeneration]:
    return GENERATION_KEYS.get(key)


def bone_table_for(generation: RigGeneration) -> Optional[Tuple[BoneMappingEntry, ...]]:
    """Humanoid bone table of a generation family, None when not retargetable."""
    return BONE_TABLES.get(generation)
