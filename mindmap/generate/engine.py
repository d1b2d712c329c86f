"""
Topic -> outline text using the OpenAI SDK (OpenAI, Gemini's OpenAI-compatible
endpoint, or any other compatible server).
"""
from __future__ import annotations

import logging

from ..config import get_api_key, get_base_url, get_model_name, load_env
from ..outline import strip_code_fences

try:
    from openai import OpenAI
except ImportError:
    OpenAI = None

logger = logging.getLogger(__name__)


def build_prompt(topic: str) -> str:
    return f"""You are an expert mind map creator.
Create a detailed hierarchical mind map about the topic: "{topic}".

Output Rules:
1. Format strict Markdown list using hyphens (-).
2. Indentation must be exactly 2 spaces per level.
3. No bold, italics, code blocks, or introductory text.
4. Start directly with the root topic as "- Topic Name".
5. Limit depth to 3-4 levels.
6. Provide 15-25 nodes total.
"""


def _require_topic(topic: str) -> str:
    cleaned = (topic or "").strip()
    if not cleaned:
        raise ValueError("Topic must not be empty")
    return cleaned


def generate_outline(
    topic: str,
    *,
    api_key: str | None = None,
    model_name: str | None = None,
) -> str:
    """
    Ask the model for an outline about topic. Returns fence-stripped text ready for
    parse_outline. Raises ValueError for bad input/config, RuntimeError if the call fails.
    """
    topic = _require_topic(topic)
    load_env()
    key = api_key or get_api_key()
    if not key:
        raise ValueError("Set GOOGLE_API_KEY (or MINDMAP_API_KEY / OPENAI_API_KEY) or pass api_key")

    if OpenAI is None:
        raise ImportError("Please install openai: pip install openai")

    client = OpenAI(api_key=key, base_url=get_base_url())
    model = model_name or get_model_name()

    logger.info("Generating outline for %r with %s", topic, model)
    try:
        response = client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": build_prompt(topic)}],
            max_tokens=2048,
        )
        content = response.choices[0].message.content
    except Exception as e:
        raise RuntimeError(f"OpenAI SDK request failed: {e}") from e

    text = strip_code_fences(content or "")
    if not text:
        raise RuntimeError("Model returned an empty outline")
    return text
