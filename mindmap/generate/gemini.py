"""
Topic -> outline text (Gemini). Uses google-genai (new SDK).
"""
from __future__ import annotations

import logging

from ..config import get_api_key, load_env
from ..config.config import DEFAULT_GOOGLE_MODEL
from ..outline import strip_code_fences
from .engine import _require_topic, build_prompt

logger = logging.getLogger(__name__)


def generate_outline_gemini(
    topic: str,
    *,
    api_key: str | None = None,
    model_name: str = DEFAULT_GOOGLE_MODEL,
) -> str:
    topic = _require_topic(topic)
    load_env()
    key = api_key or get_api_key()
    if not key:
        raise ValueError("Set GOOGLE_API_KEY or pass api_key")

    from google import genai

    client = genai.Client(api_key=key)
    logger.info("Generating outline for %r with %s (google-genai)", topic, model_name)
    try:
        response = client.models.generate_content(
            model=model_name,
            contents=build_prompt(topic),
        )
        raw = response.text if response else ""
    except Exception as e:
        raise RuntimeError(f"Gemini did not return text: {e}") from e

    text = strip_code_fences(raw or "")
    if not text:
        raise RuntimeError("Gemini returned an empty outline")
    return text
