"""Rig generation classification for Character Creator exports.

An explicit generation key always wins. Without one, the hierarchy is
scanned twice in pre-order with first-match-wins rule lists:

  Pass 1 (bone names):   each node is tested against NAME_RULES in order.
  Pass 2 (mesh names):   each node is tested against MESH_RULES; the body
                         mesh is then decided by its materials, in slot
                         order, against BODY_MATERIAL_RULES.

Nothing matched -> RigGeneration.UNKNOWN. ActorBuild has no scene signal
and can only come from the key table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence, Tuple

from ..core.logging import ImportLogger
from ..core.name_parser import icontains, icontains_any, iequals
from ..core.types import RigGeneration
from ..data.intermediate import RendererDescriptor, SkeletonNode
from ..data.rig_tables import lookup_generation
from .scanner import NodeSignals, SkeletonScan, scan_skeleton

BODY_MESH = "CC_Base_Body"


@dataclass(frozen=True)
class NodeRule:
    """A single (predicate, result) step of a classification pass."""
    description: str
    matches: Callable[[NodeSignals], bool]
    generation: RigGeneration


@dataclass(frozen=True)
class MaterialRule:
    description: str
    matches: Callable[[str], bool]
    generation: RigGeneration


def _name_contains(pattern: str) -> Callable[[NodeSignals], bool]:
    return lambda node: icontains(node.name, pattern)


NAME_RULES: Tuple[NodeRule, ...] = (
    NodeRule("name contains 'RootNode_0_'",
             _name_contains("RootNode_0_"), RigGeneration.ACTOR_CORE),
    NodeRule("name contains 'CC_Base_L_Pinky3'",
             _name_contains("CC_Base_L_Pinky3"), RigGeneration.G3),
    NodeRule("name contains 'pinky_03_l'",
             _name_contains("pinky_03_l"), RigGeneration.GAME_BASE),
    NodeRule("name contains 'CC_Base_L_Finger42'",
             _name_contains("CC_Base_L_Finger42"), RigGeneration.G1),
    NodeRule("'RL_BoneRoot' with a 'CC_Base_Hip' child",
             lambda node: icontains(node.name, "RL_BoneRoot") and node.has_hip_child,
             RigGeneration.G3),
)

MESH_RULES: Tuple[NodeRule, ...] = (
    NodeRule("game base body or tongue mesh",
             lambda node: icontains_any(node.name, ("CC_Game_Body", "CC_Game_Tongue")),
             RigGeneration.GAME_BASE),
)

# Case-insensitive, so 'Skin_Body' also covers the two rules below it.
BODY_MATERIAL_RULES: Tuple[MaterialRule, ...] = (
    MaterialRule("material contains 'Skin_Body'",
                 lambda mat: icontains(mat, "Skin_Body"), RigGeneration.G1),
    MaterialRule("material contains 'Std_Skin_Body'",
                 lambda mat: icontains(mat, "Std_Skin_Body"), RigGeneration.G3),
    MaterialRule("material contains 'ga_skin_body'",
                 lambda mat: icontains(mat, "ga_skin_body"), RigGeneration.GAME_BASE),
)


def first_matching_rule(
    node: NodeSignals, rules: Sequence[NodeRule],
) -> Optional[NodeRule]:
    for rule in rules:
        if rule.matches(node):
            return rule
    return None


def classify_body_materials(
    materials: Iterable[str],
    rules: Sequence[MaterialRule] = BODY_MATERIAL_RULES,
) -> Optional[RigGeneration]:
    """First material (in slot order) matching any rule decides."""
    for material in materials:
        for rule in rules:
            if rule.matches(material):
                return rule.generation
    return None


def classify_scan(scan: SkeletonScan, log: Optional[ImportLogger] = None) -> RigGeneration:
    """Run both heuristic passes over already scanned node signals."""
    log = log if log is not None else ImportLogger()

    for node in scan.nodes:
        rule = first_matching_rule(node, NAME_RULES)
        if rule is not None:
            log.info(f"Rig generation {rule.generation.value}: "
                     f"node '{node.name}' {rule.description}")
            return rule.generation

    for node in scan.nodes:
        rule = first_matching_rule(node, MESH_RULES)
        if rule is not None:
            log.info(f"Rig generation {rule.generation.value}: "
                     f"node '{node.name}' is {rule.description}")
            return rule.generation

        if iequals(node.name, BODY_MESH) and node.has_renderer:
            generation = classify_body_materials(node.materials)
            if generation is not None:
                log.info(f"Rig generation {generation.value}: "
                         f"decided by '{node.name}' materials")
                return generation

    log.warning("Rig generation not recognized from scene, using Unknown")
    return RigGeneration.UNKNOWN


def classify(
    explicit_key: Optional[str] = None,
    skeleton_root: Optional[SkeletonNode] = None,
    renderers: Optional[Iterable[RendererDescriptor]] = None,
    log: Optional[ImportLogger] = None,
) -> RigGeneration:
    """
    Determine the rig generation of a character.

    A non-empty explicit key is looked up in the generation key table and
    is final: unknown keys give Unknown without scanning the scene.
    """
    log = log if log is not None else ImportLogger()

    if explicit_key:
        generation = lookup_generation(explicit_key)
        if generation is None:
            log.warning(f"Unknown generation key '{explicit_key}'")
            return RigGeneration.UNKNOWN
        log.info(f"Rig generation {generation.value} from key '{explicit_key}'")
        return generation

    if skeleton_root is None:
        log.warning("No generation key and no hierarchy, rig generation Unknown")
        return RigGeneration.UNKNOWN

    return classify_scan(scan_skeleton(skeleton_root, renderers), log)
