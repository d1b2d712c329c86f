"""Layout: outline tree -> measured -> positioned -> scene graph; SVG/HTML and XMind output."""
from .measure import MeasuredNode, wrap_label, measure_label, measure_tree
from .tree_layout import PositionedNode, Edge, LayoutResult, layout_tree, layout_measured, split_sides
from .scene import Bounds, NodeShape, TextRun, Connector, SceneGraph, build_scene, depth_color
from .render_scene import scene_to_svg, framed_svg, render_to_svg, render_to_html
from .layout_mind import build_xmind, load_xmind_topic_titles, load_xmind_parent_child_pairs

__all__ = [
    "MeasuredNode",
    "wrap_label",
    "measure_label",
    "measure_tree",
    "PositionedNode",
    "Edge",
    "LayoutResult",
    "layout_tree",
    "layout_measured",
    "split_sides",
    "Bounds",
    "NodeShape",
    "TextRun",
    "Connector",
    "SceneGraph",
    "build_scene",
    "depth_color",
    "scene_to_svg",
    "framed_svg",
    "render_to_svg",
    "render_to_html",
    "build_xmind",
    "load_xmind_topic_titles",
    "load_xmind_parent_child_pairs",
]
