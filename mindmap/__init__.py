"""Indented outlines -> two-sided mind map scene -> SVG/HTML, PDF, PNG, XMind."""
from __future__ import annotations

from .config import LayoutConfig, SceneConfig
from .layout import SceneGraph, build_scene, layout_tree
from .outline import parse_outline


def render_outline(
    text: str,
    layout_config: LayoutConfig | None = None,
    scene_config: SceneConfig | None = None,
) -> SceneGraph:
    """text -> tree -> positioned tree -> scene graph."""
    layout_config = layout_config or LayoutConfig()
    return build_scene(layout_tree(parse_outline(text), layout_config), layout_config, scene_config)


__all__ = ["render_outline"]
