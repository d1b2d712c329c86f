"""
Render a SceneGraph to SVG markup, a static SVG file or an interactive HTML page.
"""
from __future__ import annotations

import html
import json
from pathlib import Path

from ..config import ViewConfig
from .scene import Bounds, SceneGraph


def _svg_esc(s: str) -> str:
    return html.escape(str(s), quote=True)


def _render_connectors(scene: SceneGraph) -> str:
    return "\n".join(
        f'<path class="link" d="{c.path_data()}" fill="none" stroke="{c.stroke}" '
        f'stroke-width="{c.stroke_width:g}" opacity="{c.opacity:g}"/>'
        for c in scene.connectors
    )


def _render_shapes(scene: SceneGraph) -> str:
    return "\n".join(
        f'<rect class="node depth-{s.depth}" x="{s.x:g}" y="{s.y:g}" width="{s.width:g}" height="{s.height:g}" '
        f'rx="{s.corner_radius:g}" ry="{s.corner_radius:g}" fill="{s.fill}" stroke="{s.stroke}" stroke-width="{s.stroke_width:g}"/>'
        for s in scene.shapes
    )


def _render_texts(scene: SceneGraph) -> str:
    return "\n".join(
        f'<text x="{t.x:g}" y="{t.baseline:g}" text-anchor="middle" font-family="sans-serif" '
        f'font-size="{t.font_size}" font-weight="{t.font_weight}" fill="{t.fill}">{_svg_esc(t.text)}</text>'
        for t in scene.texts
    )


def scene_body(scene: SceneGraph) -> str:
    """Connectors first so they sit under the node boxes."""
    return "\n".join(part for part in (_render_connectors(scene), _render_shapes(scene), _render_texts(scene)) if part)


def scene_to_svg(
    scene: SceneGraph,
    width: float,
    height: float,
    *,
    transform: str = "",
    background: str | None = None,
) -> str:
    """SVG document of the given size; transform is applied to the single content group."""
    bg = f'<rect width="100%" height="100%" fill="{background}"/>\n' if background else ""
    return f'''<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="{width:g}" height="{height:g}" viewBox="0 0 {width:g} {height:g}">
{bg}<g id="scene" transform="{transform}">
{scene_body(scene)}
</g>
</svg>
'''


def framed_svg(scene: SceneGraph, padding: float, background: str | None = None) -> tuple[str, Bounds]:
    """Tight SVG: bounds plus padding, content shifted so the padded box starts at the origin."""
    bounds = scene.bounds or Bounds(0, 0, 0, 0)
    frame = bounds.expand(padding)
    svg = scene_to_svg(
        scene,
        frame.width,
        frame.height,
        transform=f"translate({-frame.min_x:g},{-frame.min_y:g})",
        background=background,
    )
    return svg, frame


def render_to_svg(scene: SceneGraph, out_path: Path | str, *, padding: float = 80, background: str | None = None) -> Path:
    """Write a static SVG cropped to the diagram."""
    out_path = Path(out_path)
    svg, _ = framed_svg(scene, padding, background)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(svg, encoding="utf-8")
    return out_path


def render_to_html(
    scene: SceneGraph,
    out_path: Path | str,
    *,
    view: ViewConfig | None = None,
    title: str = "Mind Map",
    background: str = "#020617",
) -> Path:
    """
    Write a standalone page: wheel to zoom (clamped), drag to pan, Reset to recentre.
    Navigation only rewrites the group transform; the scene markup never changes.
    """
    out_path = Path(out_path)
    view = view or ViewConfig()
    options = json.dumps({
        "zoomMin": view.zoom_min,
        "zoomMax": view.zoom_max,
        "resetScale": view.zoom_reset_scale,
    })
    empty_note = '<p class="empty">No data to visualize</p>' if scene.is_empty else ""

    html_content = f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8"/>
<meta name="viewport" content="width=device-width, initial-scale=1"/>
<title>{_svg_esc(title)}</title>
<style>
  html, body {{ margin: 0; height: 100%; background: {background}; overflow: hidden; font-family: sans-serif; }}
  #viewport {{ width: 100vw; height: 100vh; cursor: grab; user-select: none; }}
  #viewport.dragging {{ cursor: grabbing; }}
  .empty {{ position: absolute; inset: 0; display: flex; align-items: center; justify-content: center; color: #64748b; pointer-events: none; }}
  .controls {{ position: absolute; right: 24px; bottom: 24px; display: flex; gap: 8px; }}
  .controls button {{ background: #1e293b; color: #cbd5e1; border: 1px solid #334155; border-radius: 8px; padding: 8px 12px; font-size: 12px; cursor: pointer; }}
  .controls button:hover {{ background: #334155; }}
</style>
</head>
<body>
<svg id="viewport" xmlns="http://www.w3.org/2000/svg">
<g id="scene">
{scene_body(scene)}
</g>
</svg>
{empty_note}
<div class="controls"><button id="reset-btn" title="Reset View">Reset</button></div>
<script>
(function() {{
  var opts = {options};
  var svg = document.getElementById("viewport");
  var g = document.getElementById("scene");
  var t = {{ x: 0, y: 0, k: 1 }};
  var drag = null;

  function clamp(k) {{ return Math.max(opts.zoomMin, Math.min(opts.zoomMax, k)); }}
  function apply() {{ g.setAttribute("transform", "translate(" + t.x + "," + t.y + ") scale(" + t.k + ")"); }}
  function reset() {{
    var w = svg.clientWidth, h = svg.clientHeight;
    if (!w || !h) return;
    t = {{ x: w / 2, y: h / 2, k: clamp(opts.resetScale) }};
    apply();
  }}

  svg.addEventListener("wheel", function(e) {{
    e.preventDefault();
    var rect = svg.getBoundingClientRect();
    var cx = e.clientX - rect.left, cy = e.clientY - rect.top;
    var k = clamp(t.k * Math.pow(2, -e.deltaY * 0.002));
    var sx = (cx - t.x) / t.k, sy = (cy - t.y) / t.k;
    t = {{ x: cx - sx * k, y: cy - sy * k, k: k }};
    apply();
  }}, {{ passive: false }});
  svg.addEventListener("mousedown", function(e) {{
    drag = {{ x: e.clientX, y: e.clientY }};
    svg.classList.add("dragging");
  }});
  document.addEventListener("mousemove", function(e) {{
    if (!drag) return;
    t.x += e.clientX - drag.x;
    t.y += e.clientY - drag.y;
    drag = {{ x: e.clientX, y: e.clientY }};
    apply();
  }});
  document.addEventListener("mouseup", function() {{ drag = null; svg.classList.remove("dragging"); }});
  document.addEventListener("mouseleave", function() {{ drag = null; svg.classList.remove("dragging"); }});
  document.getElementById("reset-btn").addEventListener("click", reset);
  window.addEventListener("resize", reset);
  reset();
}})();
</script>
</body>
</html>
"""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(html_content, encoding="utf-8")
    return out_path
