"""Generate: topic -> outline text via an LLM (OpenAI SDK or google-genai)."""
from typing import Callable

from ..config import get_generator_name
from .engine import build_prompt, generate_outline
from .gemini import generate_outline_gemini


def get_generator() -> Callable[[str], str]:
    """Backend selected by MINDMAP_GENERATOR ("openai" by default, or "gemini")."""
    if get_generator_name() == "gemini":
        return generate_outline_gemini
    return generate_outline


__all__ = [
    "build_prompt",
    "generate_outline",
    "generate_outline_gemini",
    "get_generator",
]
