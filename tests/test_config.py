"""Tests for mindmap.config."""
from __future__ import annotations

import os
from pathlib import Path

import pytest

from mindmap.config import (
    ExportConfig,
    LayoutConfig,
    ViewConfig,
    get_api_key,
    get_base_url,
    get_export_config,
    get_generator_name,
    get_layout_config,
    get_model_name,
    get_output_dir,
    get_view_config,
    load_env,
)
from mindmap.config.config import DEFAULT_GOOGLE_MODEL, DEFAULT_OPENAI_MODEL, GOOGLE_OPENAI_BASE_URL


def test_get_output_dir_default() -> None:
    """Without MINDMAP_OUTPUT_DIR, output goes to <project>/output."""
    assert get_output_dir().name == "output"


def test_get_output_dir_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MINDMAP_OUTPUT_DIR", str(tmp_path / "maps"))
    assert get_output_dir() == tmp_path / "maps"


def test_get_api_key_none_by_default() -> None:
    assert get_api_key() is None


def test_get_api_key_prefers_google(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")
    monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
    assert get_api_key() == "google-key"


def test_get_api_key_falls_back_to_openai(monkeypatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")
    assert get_api_key() == "sk-openai"


def test_google_key_selects_google_endpoint_and_model(monkeypatch) -> None:
    monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
    assert get_base_url() == GOOGLE_OPENAI_BASE_URL
    assert get_model_name() == DEFAULT_GOOGLE_MODEL


def test_openai_defaults(monkeypatch) -> None:
    assert get_base_url() is None
    assert get_model_name() == DEFAULT_OPENAI_MODEL
    monkeypatch.setenv("OPENAI_BASE_URL", "http://localhost:8000/v1")
    monkeypatch.setenv("MINDMAP_MODEL_NAME", "local-model")
    assert get_base_url() == "http://localhost:8000/v1"
    assert get_model_name() == "local-model"


def test_get_generator_name(monkeypatch) -> None:
    assert get_generator_name() == "openai"
    monkeypatch.setenv("MINDMAP_GENERATOR", " Gemini ")
    assert get_generator_name() == "gemini"
    monkeypatch.setenv("MINDMAP_GENERATOR", "unknown")
    assert get_generator_name() == "openai"


def test_load_env_reads_project_dotenv(monkeypatch) -> None:
    """Values from .env are used but never override the real environment."""
    from mindmap.config import config

    env_file = config._project_root() / ".env"
    env_file.write_text("# comment\nGOOGLE_MODEL_NAME='gemini-test'\nMINDMAP_OUTPUT_DIR=/from/dotenv\n", encoding="utf-8")
    monkeypatch.setenv("MINDMAP_OUTPUT_DIR", "/from/env")
    load_env()
    assert os.environ["GOOGLE_MODEL_NAME"] == "gemini-test"
    assert os.environ["MINDMAP_OUTPUT_DIR"] == "/from/env"


def test_layout_config_defaults() -> None:
    cfg = get_layout_config()
    assert cfg == LayoutConfig()
    assert cfg.max_line_chars == 20
    assert (cfg.sibling_spacing, cfg.level_spacing) == (200.0, 320.0)


def test_layout_config_env_override(monkeypatch) -> None:
    monkeypatch.setenv("MINDMAP_MAX_LINE_CHARS", "30")
    monkeypatch.setenv("MINDMAP_LEVEL_SPACING", "400")
    cfg = get_layout_config()
    assert cfg.max_line_chars == 30
    assert isinstance(cfg.max_line_chars, int)
    assert cfg.level_spacing == 400.0


@pytest.mark.parametrize("raw", ["abc", "-5", "0"])
def test_layout_config_bad_values_keep_default(monkeypatch, raw: str) -> None:
    monkeypatch.setenv("MINDMAP_SIBLING_SPACING", raw)
    assert get_layout_config().sibling_spacing == 200.0


def test_view_config_inverted_range_uses_defaults(monkeypatch) -> None:
    monkeypatch.setenv("MINDMAP_ZOOM_MIN", "5")
    monkeypatch.setenv("MINDMAP_ZOOM_MAX", "2")
    assert get_view_config() == ViewConfig()


def test_export_config_env_override(monkeypatch) -> None:
    monkeypatch.setenv("MINDMAP_EXPORT_SCALE", "3")
    monkeypatch.setenv("MINDMAP_EXPORT_PADDING", "40")
    cfg = get_export_config()
    assert cfg.scale == 3
    assert cfg.padding == 40.0
    assert cfg.background == ExportConfig().background


@pytest.mark.parametrize("raw", ["1.5", "nan", "inf"])
def test_integer_setting_rejects_non_whole_values(monkeypatch, caplog, raw: str) -> None:
    monkeypatch.setenv("MINDMAP_EXPORT_SCALE", raw)
    with caplog.at_level("WARNING", logger="mindmap.config.settings"):
        cfg = get_export_config()
    assert cfg.scale == ExportConfig().scale
    assert "MINDMAP_EXPORT_SCALE" in caplog.text


def test_integer_setting_accepts_whole_float_text(monkeypatch) -> None:
    monkeypatch.setenv("MINDMAP_EXPORT_SCALE", "3.0")
    assert get_export_config().scale == 3
