"""
Pan/zoom state mapping scene coordinates to view coordinates.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from ..config import ViewConfig


@dataclass
class ViewTransform:
    tx: float = 0.0
    ty: float = 0.0
    scale: float = 1.0
    config: ViewConfig = field(default_factory=ViewConfig)

    def clamp_scale(self, scale: float) -> float:
        return max(self.config.zoom_min, min(self.config.zoom_max, scale))

    def pan(self, dx: float, dy: float) -> None:
        self.tx += dx
        self.ty += dy

    def zoom(self, factor: float, cx: float = 0.0, cy: float = 0.0) -> None:
        """Scale by factor about view point (cx, cy), clamped to the zoom range."""
        if factor <= 0:
            return
        new_scale = self.clamp_scale(self.scale * factor)
        sx, sy = self.invert(cx, cy)
        self.scale = new_scale
        self.tx = cx - sx * new_scale
        self.ty = cy - sy * new_scale

    def reset(self, width: float, height: float) -> None:
        """Centre the scene origin in a width x height viewport, slightly zoomed out."""
        self.tx = width / 2
        self.ty = height / 2
        self.scale = self.clamp_scale(self.config.zoom_reset_scale)

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (x * self.scale + self.tx, y * self.scale + self.ty)

    def invert(self, x: float, y: float) -> tuple[float, float]:
        return ((x - self.tx) / self.scale, (y - self.ty) / self.scale)

    def svg_transform(self) -> str:
        return f"translate({self.tx:g},{self.ty:g}) scale({self.scale:g})"
