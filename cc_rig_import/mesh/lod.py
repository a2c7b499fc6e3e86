"""LOD grouping of exported character meshes by name convention."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set, Tuple

from ..core.logging import ImportLogger
from ..core.name_parser import ParsedName, icontains, is_motion_name, parse_object_name
from ..data.intermediate import LODGroupResult, LODLevel, RendererDescriptor

LAST_LOD_HEIGHT = 0.02


def lod_transition_height(index: int, level_count: int) -> float:
    """Screen relative height at which level `index` hands over to the next one."""
    if index == level_count - 1:
        return LAST_LOD_HEIGHT
    return 1.0 / (index + 2)


def _parse_all(renderers: Sequence[RendererDescriptor]) -> List[Tuple[RendererDescriptor, ParsedName]]:
    return [(r, parse_object_name(r.name)) for r in renderers]


def count_lods(renderers: Iterable[RendererDescriptor]) -> int:
    """Number of distinct LOD levels; unsuffixed renderers count as level 0."""
    levels: Set[int] = set()
    for renderer in renderers:
        levels.add(parse_object_name(renderer.name).effective_level)
    return len(levels)


def group_lods(
    renderers: Sequence[RendererDescriptor],
    log: Optional[ImportLogger] = None,
) -> List[LODLevel]:
    """
    Rebuild ordered LOD levels from '_LOD<d>' renderer name suffixes.

    General case: level 0 holds the unsuffixed and '_LOD0' renderers, level d the
    renderers suffixed with d, for d up to the highest suffix seen.

    One renderer per suffixed level (renderer count == highest suffix):
    level 0 is absent from the export, so suffix d fills level d - 1.

    Empty levels are kept so indices stay contiguous.
    """
    log = log if log is not None else ImportLogger()

    if not renderers:
        return []

    parsed = _parse_all(renderers)
    max_level = max(p.effective_level for _, p in parsed)

    if len(renderers) == max_level:
        level_count = max_level
        members = [
            [r for r, p in parsed if p.lod_level == i + 1]
            for i in range(level_count)
        ]
        unassigned = [r.name for r, p in parsed if p.effective_level == 0]
        if unassigned:
            log.warning(f"Base level renderers left out of LOD group: "
                        f"{', '.join(unassigned)}")
        log.info(f"LOD group without base level: {level_count} level(s)")
    else:
        level_count = max_level + 1
        members = [
            [r for r, p in parsed if p.effective_level == i]
            for i in range(level_count)
        ]
        log.info(f"LOD group: {level_count} level(s) from {len(renderers)} renderer(s)")

    levels: List[LODLevel] = []
    for i, level_renderers in enumerate(members):
        if not level_renderers:
            log.warning(f"LOD level {i} has no renderers")
        levels.append(LODLevel(
            index=i,
            renderers=level_renderers,
            screen_relative_height=lod_transition_height(i, level_count),
        ))
    return levels


def lod_bounds(
    levels: Iterable[LODLevel],
) -> Tuple[Optional[Tuple[float, float, float]], Optional[Tuple[float, float, float]]]:
    """Union of the bounds of all member renderers; (None, None) if none has bounds."""
    bbox_min = None
    bbox_max = None
    for level in levels:
        for renderer in level.renderers:
            if renderer.bbox_min is None or renderer.bbox_max is None:
                continue
            if bbox_min is None:
                bbox_min = tuple(renderer.bbox_min)
                bbox_max = tuple(renderer.bbox_max)
                continue
            bbox_min = (
                min(bbox_min[0], renderer.bbox_min[0]),
                min(bbox_min[1], renderer.bbox_min[1]),
                min(bbox_min[2], renderer.bbox_min[2]),
            )
            bbox_max = (
                max(bbox_max[0], renderer.bbox_max[0]),
                max(bbox_max[1], renderer.bbox_max[1]),
                max(bbox_max[2], renderer.bbox_max[2]),
            )
    return bbox_min, bbox_max


def build_lod_group(
    renderers: Sequence[RendererDescriptor],
    log: Optional[ImportLogger] = None,
) -> LODGroupResult:
    """Group renderers into LOD levels and recalculate the group bounds."""
    levels = group_lods(renderers, log)
    bbox_min, bbox_max = lod_bounds(levels)
    return LODGroupResult(levels=levels, bbox_min=bbox_min, bbox_max=bbox_max)


def wants_lod_group(
    asset_name: str,
    asset_path: str,
    renderers: Sequence[RendererDescriptor],
    lod_marker: str = "_lod",
    motion_marker: str = "_Motion",
) -> bool:
    """LOD exports are recognized by path marker and more than one level present."""
    if is_motion_name(asset_name, motion_marker):
        return False
    return icontains(asset_path, lod_marker) and count_lods(renderers) > 1
