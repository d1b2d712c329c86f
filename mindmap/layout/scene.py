"""
Positioned tree -> surface-independent scene graph (shapes, text runs, connectors).

Scene coordinates put the depth axis horizontally: a node at layout (x, y) is
drawn centred on scene point (y, x).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import LayoutConfig, SceneConfig
from .tree_layout import Edge, LayoutResult, PositionedNode

Point = tuple[float, float]


@dataclass(frozen=True)
class Bounds:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def expand(self, padding: float) -> "Bounds":
        return Bounds(self.min_x - padding, self.min_y - padding, self.max_x + padding, self.max_y + padding)


@dataclass(frozen=True)
class NodeShape:
    x: float
    y: float
    width: float
    height: float
    corner_radius: float
    fill: str
    stroke: str
    stroke_width: float
    depth: int

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True)
class TextRun:
    x: float
    baseline: float
    text: str
    font_size: int
    font_weight: int
    fill: str


@dataclass(frozen=True)
class Connector:
    """Cubic curve start -> end with control points c1, c2."""

    start: Point
    c1: Point
    c2: Point
    end: Point
    stroke: str
    stroke_width: float
    opacity: float

    def path_data(self) -> str:
        (sx, sy), (ax, ay), (bx, by), (ex, ey) = self.start, self.c1, self.c2, self.end
        return f"M{sx:g},{sy:g}C{ax:g},{ay:g},{bx:g},{by:g},{ex:g},{ey:g}"

    def points(self, segments: int = 24) -> list[Point]:
        """Tessellate the curve into segments + 1 points."""
        (x0, y0), (x1, y1), (x2, y2), (x3, y3) = self.start, self.c1, self.c2, self.end
        pts = []
        for i in range(segments + 1):
            t = i / segments
            u = 1 - t
            pts.append((
                u**3 * x0 + 3 * u**2 * t * x1 + 3 * u * t**2 * x2 + t**3 * x3,
                u**3 * y0 + 3 * u**2 * t * y1 + 3 * u * t**2 * y2 + t**3 * y3,
            ))
        return pts


@dataclass(frozen=True)
class SceneGraph:
    shapes: tuple[NodeShape, ...]
    texts: tuple[TextRun, ...]
    connectors: tuple[Connector, ...]
    config: SceneConfig = SceneConfig()

    @property
    def is_empty(self) -> bool:
        return not self.shapes

    @property
    def bounds(self) -> Optional[Bounds]:
        """Tight box around every node shape; None for an empty scene."""
        if not self.shapes:
            return None
        return Bounds(
            min(s.x for s in self.shapes),
            min(s.y for s in self.shapes),
            max(s.x + s.width for s in self.shapes),
            max(s.y + s.height for s in self.shapes),
        )


def depth_color(depth: int, palette: tuple[str, ...]) -> str:
    return palette[depth % len(palette)]


def _node_shape(node: PositionedNode, config: SceneConfig) -> NodeShape:
    return NodeShape(
        x=node.y - node.box_width / 2,
        y=node.x - node.box_height / 2,
        width=node.box_width,
        height=node.box_height,
        corner_radius=config.corner_radius,
        fill=config.node_fill,
        stroke=depth_color(node.depth, config.palette),
        stroke_width=config.stroke_width,
        depth=node.depth,
    )


def _text_runs(node: PositionedNode, line_height: float, config: SceneConfig) -> list[TextRun]:
    # The line block is centred vertically on the node.
    top = node.x - len(node.lines) * line_height / 2
    return [
        TextRun(
            x=node.y,
            baseline=top + i * line_height + line_height / 2 + config.baseline_shift,
            text=line,
            font_size=config.font_size,
            font_weight=config.font_weight,
            fill=config.text_color,
        )
        for i, line in enumerate(node.lines)
    ]


def _connector(edge: Edge, config: SceneConfig) -> Connector:
    parent, child = edge.parent, edge.child
    direction = 1.0 if child.y >= parent.y else -1.0
    sx = parent.y + direction * parent.box_width / 2
    ex = child.y - direction * child.box_width / 2
    sy, ey = parent.x, child.x
    mid = (sx + ex) / 2
    return Connector(
        start=(sx, sy),
        c1=(mid, sy),
        c2=(mid, ey),
        end=(ex, ey),
        stroke=config.connector_color,
        stroke_width=config.connector_width,
        opacity=config.connector_opacity,
    )


def build_scene(
    layout: LayoutResult,
    layout_config: LayoutConfig | None = None,
    scene_config: SceneConfig | None = None,
) -> SceneGraph:
    """One rounded box and its text lines per node, one horizontal curve per edge."""
    layout_config = layout_config or LayoutConfig()
    scene_config = scene_config or SceneConfig()
    texts: list[TextRun] = []
    for node in layout.nodes:
        texts.extend(_text_runs(node, layout_config.line_height, scene_config))
    return SceneGraph(
        shapes=tuple(_node_shape(node, scene_config) for node in layout.nodes),
        texts=tuple(texts),
        connectors=tuple(_connector(edge, scene_config) for edge in layout.edges),
        config=scene_config,
    )
