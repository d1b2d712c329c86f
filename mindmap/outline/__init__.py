"""Outline: indented text -> MindMapNode tree."""
from .model import MindMapNode
from .parse import parse_outline, strip_code_fences, EMPTY_MAP_NAME, START_TYPING_NAME

__all__ = [
    "MindMapNode",
    "parse_outline",
    "strip_code_fences",
    "EMPTY_MAP_NAME",
    "START_TYPING_NAME",
]
