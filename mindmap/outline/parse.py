"""
Parse indented plain-text outlines into a single-rooted MindMapNode tree.
"""
from __future__ import annotations

import re
from typing import List, Tuple

from .model import MindMapNode

TAB_WIDTH = 2
EMPTY_MAP_NAME = "Empty Map"
START_TYPING_NAME = "Start Typing..."

_LIST_MARKER_PATTERN = re.compile(r"^[-*+]\s+")
_HEADING_MARKER_PATTERN = re.compile(r"^#+\s+")
_FENCE_OPEN_PATTERN = re.compile(r"^```[\w+-]*[ \t]*\r?\n?")
_FENCE_CLOSE_PATTERN = re.compile(r"\r?\n?```\s*$")


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip())


def _clean_content(line: str) -> str:
    """Strip one list marker and then one heading marker; what remains is the label."""
    content = line.strip()
    content = _LIST_MARKER_PATTERN.sub("", content, count=1)
    content = _HEADING_MARKER_PATTERN.sub("", content, count=1)
    return content


def parse_outline(text: str) -> MindMapNode:
    """
    Build a tree from an indented outline. Never raises: degenerate input yields a
    childless sentinel root.

    A line attaches under the nearest preceding line with strictly smaller
    indentation; equal indentation means sibling. Several top-level lines are
    resolved by making the first one the root and appending the rest to its
    children, in order.
    """
    normalized = (text or "").replace("\t", " " * TAB_WIDTH)
    lines = [ln for ln in normalized.split("\n") if ln.strip()]
    if not lines:
        return MindMapNode(name=EMPTY_MAP_NAME)

    virtual_root = MindMapNode(name="root")
    stack: List[Tuple[MindMapNode, int]] = [(virtual_root, -1)]

    for line in lines:
        indent = _indent_of(line)
        node = MindMapNode(name=_clean_content(line))
        while len(stack) > 1 and stack[-1][1] >= indent:
            stack.pop()
        stack[-1][0].children.append(node)
        stack.append((node, indent))

    top_level = virtual_root.children
    if not top_level:
        return MindMapNode(name=START_TYPING_NAME)
    if len(top_level) == 1:
        return top_level[0]

    real_root = top_level[0]
    real_root.children.extend(top_level[1:])
    return real_root


def strip_code_fences(text: str) -> str:
    """Remove a leading ```lang fence and a trailing ``` fence, then trim."""
    raw = (text or "").strip()
    raw = _FENCE_OPEN_PATTERN.sub("", raw, count=1)
    raw = _FENCE_CLOSE_PATTERN.sub("", raw, count=1)
    return raw.strip()
