"""
Rasterize a SceneGraph with Pillow onto a solid background at a supersampling scale.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from ..config import ExportConfig
from ..layout.scene import SceneGraph

logger = logging.getLogger(__name__)

FONT_CANDIDATES = (
    "DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/System/Library/Fonts/Supplemental/Arial.ttf",
    "/usr/share/fonts/truetype/noto/NotoSansCJK-Regular.ttc",
)


class ExportError(RuntimeError):
    """The scene cannot be exported (nothing to draw or a zero-sized frame)."""


@dataclass(frozen=True)
class ExportFrame:
    """Padded content box in scene units; offset shifts its top-left corner to the origin."""

    min_x: float
    min_y: float
    width: float
    height: float

    @property
    def offset_x(self) -> float:
        return -self.min_x

    @property
    def offset_y(self) -> float:
        return -self.min_y

    @property
    def orientation(self) -> Literal["landscape", "portrait"]:
        return "landscape" if self.width > self.height else "portrait"


def export_frame(scene: SceneGraph, padding: float) -> ExportFrame:
    """Tight box over all node shapes plus padding on every side (view transform is ignored)."""
    bounds = scene.bounds
    if bounds is None:
        raise ExportError("Scene has no nodes to export")
    if bounds.width <= 0 or bounds.height <= 0:
        raise ExportError(f"Scene has zero-sized bounds ({bounds.width}x{bounds.height})")
    padded = bounds.expand(padding)
    return ExportFrame(padded.min_x, padded.min_y, padded.width, padded.height)


@lru_cache(maxsize=16)
def _load_font(size: int):
    from PIL import ImageFont

    for try_path in FONT_CANDIDATES:
        try:
            return ImageFont.truetype(try_path, size)
        except (OSError, IOError):
            continue
    logger.debug("No TrueType font found, using Pillow default font")
    return ImageFont.load_default(size=size)


def rasterize_scene(scene: SceneGraph, frame: ExportFrame, config: ExportConfig):
    """Return an RGB PIL image of frame.width*scale x frame.height*scale pixels."""
    from PIL import Image, ImageColor, ImageDraw, ImageFont

    scale = config.scale
    size = (max(1, round(frame.width * scale)), max(1, round(frame.height * scale)))
    img = Image.new("RGB", size, config.background)
    draw = ImageDraw.Draw(img, "RGBA")

    def px(x: float, y: float) -> tuple[float, float]:
        return ((x + frame.offset_x) * scale, (y + frame.offset_y) * scale)

    for c in scene.connectors:
        alpha = max(0, min(255, round(c.opacity * 255)))
        draw.line(
            [px(x, y) for x, y in c.points()],
            fill=ImageColor.getrgb(c.stroke)[:3] + (alpha,),
            width=max(1, round(c.stroke_width * scale)),
            joint="curve",
        )

    for s in scene.shapes:
        x0, y0 = px(s.x, s.y)
        x1, y1 = px(s.x + s.width, s.y + s.height)
        draw.rounded_rectangle(
            (x0, y0, x1, y1),
            radius=round(s.corner_radius * scale),
            fill=s.fill,
            outline=s.stroke,
            width=max(1, round(s.stroke_width * scale)),
        )

    for t in scene.texts:
        if not t.text:
            continue
        font = _load_font(round(t.font_size * scale))
        x, y = px(t.x, t.baseline)
        if isinstance(font, ImageFont.FreeTypeFont):
            draw.text((x, y), t.text, fill=t.fill, font=font, anchor="ms")
        else:
            width = draw.textlength(t.text, font=font)
            draw.text((x - width / 2, y - t.font_size * scale), t.text, fill=t.fill, font=font)

    return img
