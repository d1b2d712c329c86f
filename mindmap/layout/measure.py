"""
Label wrapping and box sizing. Sizes are estimated from character counts.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import LayoutConfig
from ..outline import MindMapNode


@dataclass(frozen=True)
class MeasuredNode:
    name: str
    lines: tuple[str, ...]
    box_width: float
    box_height: float
    children: tuple["MeasuredNode", ...] = ()
    id: Optional[str] = None


def wrap_label(label: str, max_chars: int) -> list[str]:
    """
    Greedy word wrap on whitespace. Always returns at least one line; a token
    longer than max_chars gets a line of its own and is never split.
    """
    words = (label or "").split()
    if not words:
        return [""]
    lines: list[str] = []
    current = words[0]
    for word in words[1:]:
        if len(current) + 1 + len(word) <= max_chars:
            current += " " + word
        else:
            lines.append(current)
            current = word
    lines.append(current)
    return lines


def measure_label(label: str, config: LayoutConfig) -> tuple[list[str], float, float]:
    """Return (wrapped lines, box width, box height)."""
    lines = wrap_label(label, config.max_line_chars)
    longest = max(len(line) for line in lines)
    width = max(config.min_node_width, longest * config.avg_char_width + config.padding_x * 2)
    height = len(lines) * config.line_height + config.padding_y * 2
    return lines, float(width), float(height)


def measure_tree(root: MindMapNode, config: LayoutConfig) -> MeasuredNode:
    """Build a measured copy of the tree; the source tree is left untouched."""
    # Post-order over an explicit stack so children are built before parents.
    order: list[MindMapNode] = []
    stack = [root]
    while stack:
        node = stack.pop()
        order.append(node)
        stack.extend(node.children)

    built: dict[int, MeasuredNode] = {}
    for node in reversed(order):
        lines, width, height = measure_label(node.name, config)
        built[id(node)] = MeasuredNode(
            name=node.name,
            lines=tuple(lines),
            box_width=width,
            box_height=height,
            children=tuple(built[id(child)] for child in node.children),
            id=node.id,
        )
    return built[id(root)]
