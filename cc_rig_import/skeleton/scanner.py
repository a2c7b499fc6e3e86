"""Skeleton scanning: extract classification signals from a character hierarchy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..core.name_parser import iequals
from ..data.intermediate import RendererDescriptor, SkeletonNode

HIP_BONE = "CC_Base_Hip"


@dataclass(frozen=True)
class NodeSignals:
    """What the rig classifier gets to see of a single node."""
    name: str
    has_hip_child: bool = False
    materials: Tuple[str, ...] = ()
    has_renderer: bool = False


@dataclass
class SkeletonScan:
    """Pre-order node signals of a whole character hierarchy."""
    nodes: List[NodeSignals] = field(default_factory=list)

    @property
    def node_names(self) -> List[str]:
        return [n.name for n in self.nodes]


def has_child_named(node: SkeletonNode, name: str) -> bool:
    """Direct-child name test, case-insensitive."""
    return any(iequals(child.name, name) for child in node.children)


def _index_renderers(
    renderers: Optional[Iterable[RendererDescriptor]],
) -> Dict[str, RendererDescriptor]:
    index: Dict[str, RendererDescriptor] = {}
    for renderer in renderers or ():
        # First renderer wins for duplicated object names
        index.setdefault(renderer.name, renderer)
    return index


class SkeletonScanner:
    """
    Walks a character hierarchy and pairs each node with its renderer.

    Node order is depth-first pre-order (root first), which is the order
    the classifier's first-match-wins rules depend on.
    """

    def __init__(self, renderers: Optional[Iterable[RendererDescriptor]] = None):
        self._renderers = _index_renderers(renderers)

    def renderer_for(self, node_name: str) -> Optional[RendererDescriptor]:
        return self._renderers.get(node_name)

    def scan(self, root: Optional[SkeletonNode]) -> SkeletonScan:
        result = SkeletonScan()
        if root is None:
            return result

        for node in root.iter_preorder():
            renderer = self.renderer_for(node.name)
            result.nodes.append(NodeSignals(
                name=node.name,
                has_hip_child=has_child_named(node, HIP_BONE),
                materials=tuple(renderer.materials) if renderer else (),
                has_renderer=renderer is not None,
            ))
        return result


def scan_skeleton(
    root: Optional[SkeletonNode],
    renderers: Optional[Iterable[RendererDescriptor]] = None,
) -> SkeletonScan:
    return SkeletonScanner(renderers).scan(root)
