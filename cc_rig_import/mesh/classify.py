"""Simple body/hair mesh identification by object, material and shader names."""

from __future__ import annotations

from typing import Iterable, List

from ..core.name_parser import icontains, iequals
from ..data.intermediate import RendererDescriptor

BODY_MESH_NAMES = ("CC_Base_Body", "CC_Game_Body")

# High quality shader names of the import pipelines
SHADER_HQ_HEAD = "RL_HeadShader"
SHADER_HQ_SKIN = "RL_SkinShader_Variants"
SHADER_HQ_HAIR = "RL_HairShader_Variants"


def is_body_mesh(renderer: RendererDescriptor) -> bool:
    if any(iequals(renderer.name, name) for name in BODY_MESH_NAMES):
        return True

    for material in renderer.materials:
        if icontains(material, "Std_Skin_"):
            return True
    for shader in renderer.shaders:
        if icontains(shader, SHADER_HQ_HEAD) or icontains(shader, SHADER_HQ_SKIN):
            return True

    return False


def is_hair_mesh(renderer: RendererDescriptor) -> bool:
    for material in renderer.materials:
        if icontains(material, "Hair") and icontains(material, "Transparency"):
            return True
    for shader in renderer.shaders:
        if icontains(shader, SHADER_HQ_HAIR):
            return True

    return False


def body_mesh_names(renderers: Iterable[RendererDescriptor]) -> List[str]:
    return [r.name for r in renderers if is_body_mesh(r)]


def hair_mesh_names(renderers: Iterable[RendererDescriptor]) -> List[str]:
    return [r.name for r in renderers if is_hair_mesh(r)]
