"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import pytest


@pytest.fixture
def sample_outline() -> str:
    """Root with four children: c0/c2 land right, c1/c3 land left."""
    return "- Root\n  - c0\n  - c1\n  - c2\n  - c3"


@pytest.fixture
def nested_outline() -> str:
    return (
        "- Mind Map\n"
        "  - Features\n"
        "    - Outline Input\n"
        "    - AI Generation\n"
        "  - Tech Stack\n"
        "    - Python\n"
        "  - Export\n"
        "    - PDF\n"
        "    - XMind"
    )


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch, tmp_path_factory):
    """Avoid loading project .env in tests unless explicitly set."""
    for key in (
        "GOOGLE_API_KEY",
        "GOOGLE_MODEL_NAME",
        "OPENAI_API_KEY",
        "OPENAI_BASE_URL",
        "OPENAI_MODEL_NAME",
        "MINDMAP_API_KEY",
        "MINDMAP_BASE_URL",
        "MINDMAP_MODEL_NAME",
        "MINDMAP_GENERATOR",
        "MINDMAP_OUTPUT_DIR",
        "MINDMAP_MAX_LINE_CHARS",
        "MINDMAP_SIBLING_SPACING",
        "MINDMAP_LEVEL_SPACING",
        "MINDMAP_ZOOM_MIN",
        "MINDMAP_ZOOM_MAX",
        "MINDMAP_ZOOM_RESET_SCALE",
        "MINDMAP_EXPORT_PADDING",
        "MINDMAP_EXPORT_SCALE",
    ):
        monkeypatch.delenv(key, raising=False)
    root = tmp_path_factory.mktemp("project")
    monkeypatch.setattr("mindmap.config.config._project_root", lambda: root)
