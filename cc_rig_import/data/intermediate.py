from dataclasses import dataclass, field
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple


@dataclass
class SkeletonNode:
    """A scene node (transform) of an imported character hierarchy."""
    name: str = ""
    children: List["SkeletonNode"] = field(default_factory=list)
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: Tuple[float, float, float, float] = (1.0, 0.0, 0.0, 0.0)  # wxyz
    scale: Tuple[float, float, float] = (1.0, 1.0, 1.0)

    def add_child(self, child: "SkeletonNode") -> "SkeletonNode":
        self.children.append(child)
        return child

    def iter_preorder(self) -> Iterator["SkeletonNode"]:
        """Depth-first pre-order walk, self first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, name: str) -> Optional["SkeletonNode"]:
        """Exact (case-sensitive) recursive name search."""
        for node in self.iter_preorder():
            if node.name == name:
                return node
        return None


@dataclass
class RendererDescriptor:
    """A mesh renderer with its material slots."""
    name: str = ""
    materials: List[str] = field(default_factory=list)
    shaders: List[str] = field(default_factory=list)  # parallel to materials
    bbox_min: Optional[Tuple[float, float, float]] = None
    bbox_max: Optional[Tuple[float, float, float]] = None


@dataclass
class LODLevel:
    """A single LOD level of a grouped character."""
    index: int = 0
    renderers: List[RendererDescriptor] = field(default_factory=list)
    screen_relative_height: float = 1.0


@dataclass
class LODGroupResult:
    """Ordered LOD levels plus the bounds recomputed from their renderers."""
    levels: List[LODLevel] = field(default_factory=list)
    bbox_min: Optional[Tuple[float, float, float]] = None
    bbox_max: Optional[Tuple[float, float, float]] = None


@dataclass
class AnimationClipDescriptor:
    """Retarget flags of one imported animation clip."""
    name: str = ""
    keep_original_orientation: bool = False
    keep_original_position_y: bool = False
    keep_original_position_xz: bool = False
    lock_root_rotation: bool = False
    lock_root_height_y: bool = False
    lock_root_position_xz: bool = False
    loop_time: bool = False

    def flags(self) -> Dict[str, bool]:
        return {name: getattr(self, name) for name in CLIP_FLAG_NAMES}


CLIP_FLAG_NAMES = (
    "keep_original_orientation",
    "keep_original_position_y",
    "keep_original_position_xz",
    "lock_root_rotation",
    "lock_root_height_y",
    "lock_root_position_xz",
    "loop_time",
)


@dataclass(frozen=True)
class BoneMappingEntry:
    """Canonical humanoid bone -> source skeleton bone."""
    human_name: str
    bone_name: str
    use_default_limits: bool = True


@dataclass(frozen=True)
class HumanoidTuning:
    """Humanoid avatar muscle settings, identical for every generation."""
    upper_arm_twist: float = 0.5
    lower_arm_twist: float = 0.5
    upper_leg_twist: float = 0.5
    lower_leg_twist: float = 0.5
    arm_stretch: float = 0.05
    leg_stretch: float = 0.05
    feet_spacing: float = 0.0
    has_translation_dof: bool = False


@dataclass(frozen=True)
class SkeletonBoneSnapshot:
    """Local rest transform of one skeleton node."""
    name: str
    position: Tuple[float, float, float]
    rotation: Tuple[float, float, float, float]  # wxyz
    scale: Tuple[float, float, float]


class RetargetResult(NamedTuple):
    bones: List[BoneMappingEntry]
    skeleton: List[SkeletonBoneSnapshot]
    tuning: HumanoidTuning
