#!/usr/bin/env python3
"""
Root entry: outline text (file, stdin or AI-generated from --topic) -> mind map ->
interactive HTML plus optional PDF / SVG / PNG / XMind exports.
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path

_ROOT = Path(__file__).resolve().parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from mindmap.config import load_env, get_output_dir, get_export_config, get_layout_config, get_view_config
from mindmap.generate import get_generator
from mindmap.layout import build_scene, build_xmind, layout_tree, render_to_html, render_to_svg
from mindmap.export import PdfExporter, export_png
from mindmap.outline import parse_outline, strip_code_fences

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def _read_outline(source: str) -> str:
    """Read outline text from a path, or from stdin when source is "-"."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Turn an indented outline into a two-sided mind map (HTML, PDF, SVG, PNG, XMind)."
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="Outline file (use - for stdin). Omit when using --topic.",
    )
    parser.add_argument(
        "--topic",
        metavar="TOPIC",
        default=None,
        help="Generate the outline with the configured LLM instead of reading a file",
    )
    parser.add_argument(
        "--out",
        metavar="DIR",
        default=None,
        help="Output directory (default: MINDMAP_OUTPUT_DIR or ./output)",
    )
    parser.add_argument("--pdf", action="store_true", help="Also export mindmap.pdf")
    parser.add_argument("--svg", action="store_true", help="Also export a cropped mindmap.svg")
    parser.add_argument("--png", action="store_true", help="Also export mindmap.png (same raster as the PDF)")
    parser.add_argument("--xmind", action="store_true", help="Also export mindmap.xmind")
    parser.add_argument("--no-html", action="store_true", help="Skip the interactive mindmap.html")
    args = parser.parse_args()

    load_env()
    out_dir = Path(args.out) if args.out else get_output_dir()

    if args.topic is not None:
        text = _generate_text(args.topic)
        if text is None:
            return 1
    elif args.input is not None:
        try:
            text = _read_outline(args.input)
        except OSError as e:
            logger.error("Cannot read outline %s: %s", args.input, e)
            return 1
    else:
        logger.error("Give an outline file (or -) or --topic TOPIC")
        return 1

    out_dir.mkdir(parents=True, exist_ok=True)
    return _run_render(text, out_dir, args)


def _generate_text(topic: str) -> str | None:
    """Call the generator; None (after logging) on empty topic or failure."""
    topic = topic.strip()
    if not topic:
        logger.error("--topic must not be empty")
        return None
    t0 = time.perf_counter()
    try:
        text = strip_code_fences(get_generator()(topic))
    except Exception as e:
        logger.error("Generation failed: %s", e)
        return None
    logger.info("Generated outline for %r in %.2fs", topic, time.perf_counter() - t0)
    return text


def _run_render(text: str, out_dir: Path, args: argparse.Namespace) -> int:
    """Parse, lay out and write every requested output; failures of one export do not stop the others."""
    layout_config = get_layout_config()
    export_config = get_export_config()
    t0 = time.perf_counter()
    tree = parse_outline(text)
    try:
        layout = layout_tree(tree, layout_config)
        scene = build_scene(layout, layout_config)
    except Exception as e:
        logger.error("Layout failed: %s", e)
        return 1
    logger.info("Layout: %d node(s), %d edge(s) in %.2fs", len(layout.nodes), len(layout.edges), time.perf_counter() - t0)

    status = 0
    if not args.no_html:
        try:
            render_to_html(scene, out_dir / "mindmap.html", view=get_view_config(), title=tree.name or "Mind Map")
            logger.info("HTML: mindmap.html")
        except Exception as e:
            logger.warning("HTML render failed: %s", e)
            status = 1
    if args.svg:
        try:
            render_to_svg(scene, out_dir / "mindmap.svg", padding=export_config.padding, background=export_config.background)
            logger.info("SVG: mindmap.svg")
        except Exception as e:
            logger.warning("SVG export failed: %s", e)
            status = 1
    if args.png:
        try:
            export_png(scene, out_dir / "mindmap.png", export_config)
            logger.info("PNG: mindmap.png")
        except Exception as e:
            logger.warning("PNG export failed: %s", e)
            status = 1
    if args.pdf:
        if asyncio.run(PdfExporter(export_config).export(scene, out_dir)) is None:
            status = 1
    if args.xmind:
        try:
            xmind_path = build_xmind(tree, out_dir / "mindmap.xmind", sheet_title=tree.name or "Mind Map")
            logger.info("XMind: %s", xmind_path.name)
        except Exception as e:
            logger.warning("XMind export failed: %s", e)
            status = 1

    logger.info("Output: %s", out_dir)
    return status


if __name__ == "__main__":
    sys.exit(main())
