"""Tests for the view transform and the interactive MindMapSession."""
from __future__ import annotations

import asyncio
import logging
import threading
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from mindmap.config import ViewConfig
from mindmap.view import GENERATION_ERROR, MindMapSession, ViewTransform


# ViewTransform


def test_pan_accumulates() -> None:
    t = ViewTransform()
    t.pan(10, -5)
    t.pan(2, 2)
    assert (t.tx, t.ty) == (12, -3)


def test_zoom_keeps_pivot_fixed() -> None:
    t = ViewTransform(tx=30, ty=40, scale=1.0)
    before = t.invert(100, 50)
    t.zoom(2, 100, 50)
    assert t.scale == 2
    assert t.invert(100, 50) == pytest.approx(before)
    assert t.apply(*before) == pytest.approx((100, 50))


def test_zoom_is_clamped() -> None:
    t = ViewTransform()
    t.zoom(100)
    assert t.scale == 3.0
    t.zoom(1e-6)
    assert t.scale == 0.1


def test_zoom_ignores_non_positive_factor() -> None:
    t = ViewTransform(tx=1, ty=2, scale=1.5)
    t.zoom(0)
    t.zoom(-2)
    assert (t.tx, t.ty, t.scale) == (1, 2, 1.5)


def test_reset_centres_origin() -> None:
    t = ViewTransform(tx=5, ty=5, scale=2.5)
    t.reset(800, 600)
    assert (t.tx, t.ty, t.scale) == (400, 300, 0.8)
    assert t.apply(0, 0) == (400, 300)
    assert t.svg_transform() == "translate(400,300) scale(0.8)"


def test_reset_scale_respects_custom_range() -> None:
    t = ViewTransform(config=ViewConfig(zoom_min=1.0, zoom_max=2.0, zoom_reset_scale=0.8))
    t.reset(100, 100)
    assert t.scale == 1.0


# MindMapSession


def _session(text: str = "- A\n  - B\n  - C", **kwargs) -> MindMapSession:
    return MindMapSession(text, **kwargs)


def test_no_render_until_sized() -> None:
    s = _session()
    assert s.tree.name == "A"
    assert s.scene is None
    assert s.render_count == 0


def test_zero_area_resize_is_ignored() -> None:
    s = _session()
    s.resize(0, 600)
    s.resize(800, 0)
    assert s.scene is None
    assert not s.has_size
    s.resize(800, 600)
    assert s.render_count == 1
    assert len(s.scene.shapes) == 3


def test_first_render_resets_view() -> None:
    s = _session()
    s.resize(800, 600)
    assert (s.transform.tx, s.transform.ty, s.transform.scale) == (400, 300, 0.8)


def test_later_resize_keeps_navigation() -> None:
    s = _session()
    s.resize(800, 600)
    s.pan(25, 10)
    s.resize(1024, 768)
    assert s.render_count == 2
    assert (s.transform.tx, s.transform.ty) == (425, 310)


def test_new_text_resets_view() -> None:
    s = _session()
    s.resize(800, 600)
    s.pan(25, 10)
    s.set_text("- Z")
    assert s.layout.root.name == "Z"
    assert (s.transform.tx, s.transform.ty) == (400, 300)


def test_navigation_does_not_relayout() -> None:
    s = _session()
    s.resize(800, 600)
    scene = s.scene
    s.pan(5, 5)
    s.zoom(2)
    s.reset_view()
    assert s.scene is scene
    assert s.render_count == 1


def test_zoom_defaults_to_viewport_centre() -> None:
    s = _session()
    s.resize(800, 600)
    s.zoom(2)
    assert s.transform.scale == pytest.approx(1.6)
    assert (s.transform.tx, s.transform.ty) == pytest.approx((400, 300))


def test_newest_trigger_wins_inside_loop() -> None:
    async def run():
        s = _session()
        s.resize(800, 600)
        s.set_text("- B")
        s.set_text("- C\n  - D")
        await s.wait_rendered()
        return s

    s = asyncio.run(run())
    assert s.render_count == 1
    assert s.layout.root.name == "C"
    assert len(s.scene.shapes) == 2


def test_render_failure_keeps_previous_scene(caplog) -> None:
    s = _session()
    s.resize(800, 600)
    scene = s.scene
    with caplog.at_level(logging.ERROR, logger="mindmap.view.controller"):
        with patch("mindmap.view.controller.layout_tree", side_effect=RuntimeError("boom")):
            s.set_text("- Broken")
    assert s.scene is scene
    assert s.render_count == 1
    assert s.text == "- Broken"
    assert "Render failed" in caplog.text


def test_generate_replaces_text() -> None:
    generator = MagicMock(return_value="```markdown\n- Ocean\n  - Tides\n```")

    async def run():
        s = _session(generator=generator)
        s.resize(800, 600)
        ok = await s.generate("  Ocean ")
        await s.wait_rendered()
        return s, ok

    s, ok = asyncio.run(run())
    assert ok is True
    generator.assert_called_once_with("Ocean")
    assert s.text == "- Ocean\n  - Tides"
    assert s.layout.root.name == "Ocean"
    assert s.error_message is None
    assert s.is_generating is False


def test_generate_empty_topic_is_no_op() -> None:
    generator = MagicMock()
    s = _session(generator=generator)
    assert asyncio.run(s.generate("   ")) is False
    generator.assert_not_called()


def test_generate_failure_keeps_text_and_sets_error() -> None:
    generator = MagicMock(side_effect=RuntimeError("401"))
    s = _session(generator=generator)
    before = s.text
    assert asyncio.run(s.generate("Topic")) is False
    assert s.text == before
    assert s.error_message == GENERATION_ERROR
    assert s.is_generating is False


def test_generate_single_in_flight() -> None:
    release = threading.Event()

    def slow(topic: str) -> str:
        release.wait(5)
        return f"- {topic}"

    generator = MagicMock(side_effect=slow)

    async def run():
        s = _session(generator=generator)
        s.resize(800, 600)
        first = asyncio.create_task(s.generate("One"))
        await asyncio.sleep(0)
        assert s.is_generating
        second = await s.generate("Two")
        release.set()
        return s, await first, second

    s, first, second = asyncio.run(run())
    assert (first, second) == (True, False)
    generator.assert_called_once_with("One")
    assert s.tree.name == "One"


def test_session_export_pdf(tmp_path: Path) -> None:
    async def run():
        s = _session()
        s.resize(800, 600)
        s.set_text("- Export\n  - Me")
        return await s.export_pdf(tmp_path)

    path = asyncio.run(run())
    assert path == tmp_path / "mindmap.pdf"
    assert path.read_bytes().startswith(b"%PDF")


def test_session_export_before_render_returns_none(tmp_path: Path) -> None:
    s = _session()
    assert asyncio.run(s.export_pdf(tmp_path)) is None
