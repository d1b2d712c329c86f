"""
Load .env from project root; expose API keys, model names and output dir.
Call load_env() before using in main or other modules.
"""
from __future__ import annotations

import os
from pathlib import Path

GOOGLE_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_GOOGLE_MODEL = "gemini-2.5-flash"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


def _project_root() -> Path:
    """Project root (directory containing mindmap/ or main.py)."""
    p = Path(__file__).resolve()
    # mindmap/config/config.py -> two levels up
    for _ in range(3):
        p = p.parent
        if (p / "main.py").is_file() or (p / "mindmap").is_dir():
            return p
    return Path.cwd()


def load_env() -> None:
    """Load env vars from project root .env if present."""
    root = _project_root()
    env_file = root / ".env"
    if not env_file.is_file():
        return
    for line in env_file.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, _, v = line.partition("=")
        k, v = k.strip(), v.strip().strip("'\"")
        if k and v:
            os.environ.setdefault(k, v)


def get_output_dir() -> Path:
    """Export root; default <project_root>/output."""
    load_env()
    out_dir = os.environ.get("MINDMAP_OUTPUT_DIR")
    if out_dir:
        return Path(out_dir)
    return _project_root() / "output"


def get_api_key() -> str | None:
    """Generation API key (GOOGLE_API_KEY, MINDMAP_API_KEY or OPENAI_API_KEY)."""
    load_env()
    return (
        os.environ.get("GOOGLE_API_KEY")
        or os.environ.get("MINDMAP_API_KEY")
        or os.environ.get("OPENAI_API_KEY")
        or None
    )


def get_base_url() -> str | None:
    """OpenAI-compatible base URL; Google's endpoint when GOOGLE_API_KEY is set."""
    load_env()
    if os.environ.get("GOOGLE_API_KEY") is not None:
        return GOOGLE_OPENAI_BASE_URL
    return os.environ.get("MINDMAP_BASE_URL") or os.environ.get("OPENAI_BASE_URL")


def get_model_name() -> str:
    """Model name (GOOGLE_MODEL_NAME with a Google key, else MINDMAP_MODEL_NAME / OPENAI_MODEL_NAME)."""
    load_env()
    if os.environ.get("GOOGLE_API_KEY") is not None:
        return os.environ.get("GOOGLE_MODEL_NAME") or DEFAULT_GOOGLE_MODEL
    return (
        os.environ.get("MINDMAP_MODEL_NAME")
        or os.environ.get("OPENAI_MODEL_NAME")
        or DEFAULT_OPENAI_MODEL
    )


def get_generator_name() -> str:
    """Which generation backend to use: "openai" (default) or "gemini"."""
    load_env()
    name = (os.environ.get("MINDMAP_GENERATOR") or "openai").strip().lower()
    return name if name in ("openai", "gemini") else "openai"
