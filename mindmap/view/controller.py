"""
Interactive session: current text, tree, scene and view transform, driven from one
asyncio loop. Re-layout is cancelable (newest trigger wins); generation and export
are single in-flight.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, Optional

from ..config import (
    ExportConfig,
    LayoutConfig,
    SceneConfig,
    ViewConfig,
    get_export_config,
    get_layout_config,
    get_view_config,
)
from ..export import PdfExporter
from ..layout import LayoutResult, SceneGraph, build_scene, layout_tree
from ..outline import MindMapNode, parse_outline, strip_code_fences
from .transform import ViewTransform

logger = logging.getLogger(__name__)

DEFAULT_OUTLINE = """- Mind Map
  - Features
    - Outline Input
    - AI Generation
    - PDF Export
  - Tech Stack
    - Python
    - Pillow
    - OpenAI SDK"""

GENERATION_ERROR = "Failed to generate. Check API Key."


class MindMapSession:
    def __init__(
        self,
        text: str = DEFAULT_OUTLINE,
        *,
        layout_config: LayoutConfig | None = None,
        scene_config: SceneConfig | None = None,
        view_config: ViewConfig | None = None,
        export_config: ExportConfig | None = None,
        generator: Callable[[str], str] | None = None,
    ) -> None:
        self.layout_config = layout_config or get_layout_config()
        self.scene_config = scene_config or SceneConfig()
        self.transform = ViewTransform(config=view_config or get_view_config())
        self.exporter = PdfExporter(export_config or get_export_config())
        self.generator = generator

        self.width = 0.0
        self.height = 0.0
        self.text = ""
        self.tree: MindMapNode = parse_outline("")
        self.layout: Optional[LayoutResult] = None
        self.scene: Optional[SceneGraph] = None
        self.render_count = 0
        self.error_message: Optional[str] = None
        self.is_generating = False

        self._generation = 0
        self._layout_task: Optional[asyncio.Task[None]] = None
        self._reset_view_pending = True
        self.set_text(text)

    # Input

    def set_text(self, text: str) -> None:
        """Replace the diagram: parse (never fails) and schedule a fresh layout."""
        self.text = text
        self.tree = parse_outline(text)
        self._reset_view_pending = True
        self._schedule_render()

    def resize(self, width: float, height: float) -> None:
        """Container size changed; zero-area sizes are ignored until real ones arrive."""
        if width <= 0 or height <= 0:
            logger.debug("Ignoring zero-area resize %sx%s", width, height)
            return
        first = self.width <= 0 or self.height <= 0
        self.width, self.height = float(width), float(height)
        if first:
            self._reset_view_pending = True
        self._schedule_render()

    @property
    def has_size(self) -> bool:
        return self.width > 0 and self.height > 0

    # Layout / render

    def _schedule_render(self) -> None:
        if not self.has_size:
            # Retried by the next non-zero resize.
            return
        self._generation += 1
        token = self._generation
        if self._layout_task is not None and not self._layout_task.done():
            self._layout_task.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._commit(token, self.tree)
            return
        self._layout_task = loop.create_task(self._relayout(token, self.tree))

    async def _relayout(self, token: int, tree: MindMapNode) -> None:
        # Let triggers queued in the same tick supersede this one.
        await asyncio.sleep(0)
        if token != self._generation:
            return
        self._commit(token, tree)

    def _compute(self, tree: MindMapNode) -> tuple[LayoutResult, SceneGraph]:
        layout = layout_tree(tree, self.layout_config)
        return layout, build_scene(layout, self.layout_config, self.scene_config)

    def _commit(self, token: int, tree: MindMapNode) -> None:
        try:
            layout, scene = self._compute(tree)
        except Exception:
            logger.exception("Render failed; keeping previous diagram")
            return
        if token != self._generation:
            logger.debug("Discarding stale layout %d (current %d)", token, self._generation)
            return
        self.layout, self.scene = layout, scene
        self.render_count += 1
        if self._reset_view_pending:
            self.reset_view()
            self._reset_view_pending = False

    async def wait_rendered(self) -> None:
        """Wait until the most recently scheduled layout has finished or been superseded."""
        while self._layout_task is not None and not self._layout_task.done():
            await asyncio.wait({self._layout_task})

    # View navigation (never triggers layout)

    def pan(self, dx: float, dy: float) -> None:
        self.transform.pan(dx, dy)

    def zoom(self, factor: float, cx: float | None = None, cy: float | None = None) -> None:
        self.transform.zoom(
            factor,
            self.width / 2 if cx is None else cx,
            self.height / 2 if cy is None else cy,
        )

    def reset_view(self) -> None:
        self.transform.reset(self.width, self.height)

    # Collaborators

    async def generate(self, topic: str) -> bool:
        """
        Replace the diagram with a generated outline. Empty topic or a request already
        pending is a no-op. On failure the current text is kept and error_message set.
        """
        topic = (topic or "").strip()
        if not topic or self.is_generating:
            return False
        self.is_generating = True
        self.error_message = None
        try:
            if self.generator is None:
                from ..generate import get_generator

                self.generator = get_generator()
            raw = await asyncio.to_thread(self.generator, topic)
        except Exception as e:
            logger.warning("Generation failed for %r: %s", topic, e)
            self.error_message = GENERATION_ERROR
            return False
        finally:
            self.is_generating = False
        self.set_text(strip_code_fences(raw))
        return True

    async def export_pdf(self, out_dir: Path | str) -> Path | None:
        """Export the most recently completed scene; None if skipped or failed."""
        await self.wait_rendered()
        return await self.exporter.export(self.scene, out_dir)
