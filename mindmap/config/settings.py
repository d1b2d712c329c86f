"""
Tunable constants for measuring, layout, scene styling, view and export.
Defaults can be overridden per key through MINDMAP_* environment variables.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, TypeVar

from .config import load_env

logger = logging.getLogger(__name__)

PALETTE = ("#60a5fa", "#34d399", "#f472b6", "#a78bfa", "#fbbf24", "#f87171")


@dataclass(frozen=True)
class LayoutConfig:
    # Wrap labels after this many characters (tokens are never split).
    max_line_chars: int = 20
    line_height: int = 18
    padding_x: int = 24
    padding_y: int = 16
    min_node_width: int = 120
    # Estimated glyph width; boxes are sized from character counts, not font metrics.
    avg_char_width: int = 8
    # Perpendicular distance between adjacent siblings.
    sibling_spacing: float = 200.0
    # Distance between depth levels.
    level_spacing: float = 320.0
    # Separation multiplier for neighbours that do not share a parent.
    cousin_separation: float = 1.4


@dataclass(frozen=True)
class SceneConfig:
    palette: tuple[str, ...] = PALETTE
    node_fill: str = "#1e293b"
    stroke_width: float = 2
    corner_radius: float = 8
    text_color: str = "#e2e8f0"
    font_size: int = 14
    font_weight: int = 500
    # Offset from the line box middle to the text baseline.
    baseline_shift: float = 5
    connector_color: str = "#475569"
    connector_width: float = 1.5
    connector_opacity: float = 0.6


@dataclass(frozen=True)
class ViewConfig:
    zoom_min: float = 0.1
    zoom_max: float = 3.0
    zoom_reset_scale: float = 0.8


@dataclass(frozen=True)
class ExportConfig:
    padding: float = 80.0
    scale: int = 2
    background: str = "#020617"
    filename: str = "mindmap.pdf"
    jpeg_quality: int = 95


_C = TypeVar("_C")

_ENV_KEYS: dict[type, dict[str, str]] = {
    LayoutConfig: {
        "max_line_chars": "MINDMAP_MAX_LINE_CHARS",
        "line_height": "MINDMAP_LINE_HEIGHT",
        "padding_x": "MINDMAP_NODE_PADDING_X",
        "padding_y": "MINDMAP_NODE_PADDING_Y",
        "min_node_width": "MINDMAP_MIN_NODE_WIDTH",
        "sibling_spacing": "MINDMAP_SIBLING_SPACING",
        "level_spacing": "MINDMAP_LEVEL_SPACING",
    },
    ViewConfig: {
        "zoom_min": "MINDMAP_ZOOM_MIN",
        "zoom_max": "MINDMAP_ZOOM_MAX",
        "zoom_reset_scale": "MINDMAP_ZOOM_RESET_SCALE",
    },
    ExportConfig: {
        "padding": "MINDMAP_EXPORT_PADDING",
        "scale": "MINDMAP_EXPORT_SCALE",
    },
}


def _from_env(cls: type[_C]) -> _C:
    """Build cls with numeric fields overridden from env; bad values keep the default."""
    load_env()
    base = cls()
    types = {f.name: type(getattr(base, f.name)) for f in fields(base)}
    overrides: dict[str, Any] = {}
    for name, env_key in _ENV_KEYS.get(cls, {}).items():
        raw = os.environ.get(env_key)
        if raw is None or not raw.strip():
            continue
        try:
            if types[name] is int:
                number = float(raw)
                if not number.is_integer():
                    raise ValueError(raw)
                value = int(number)
            else:
                value = types[name](raw)
        except ValueError:
            logger.warning("Ignoring %s=%r (expected a number, whole for integer settings)", env_key, raw)
            continue
        if value <= 0:
            logger.warning("Ignoring %s=%r (must be positive)", env_key, raw)
            continue
        overrides[name] = value
    return replace(base, **overrides)


def get_layout_config() -> LayoutConfig:
    return _from_env(LayoutConfig)


def get_view_config() -> ViewConfig:
    cfg = _from_env(ViewConfig)
    if cfg.zoom_min > cfg.zoom_max:
        logger.warning("Zoom range %.2f..%.2f is inverted, using defaults", cfg.zoom_min, cfg.zoom_max)
        return ViewConfig()
    return cfg


def get_export_config() -> ExportConfig:
    return _from_env(ExportConfig)
