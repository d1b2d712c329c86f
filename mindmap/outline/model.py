from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional


@dataclass
class MindMapNode:
    name: str
    children: List["MindMapNode"] = field(default_factory=list)
    id: Optional[str] = None

    def iter_nodes(self) -> Iterator["MindMapNode"]:
        """Pre-order walk without recursion (outlines may nest thousands deep)."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def count(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    def depth(self) -> int:
        """Number of levels below this node (a leaf has depth 0)."""
        deepest = 0
        stack = [(self, 0)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children)
        return deepest

    def to_outline(self) -> str:
        """Serialize as hyphen bullets with two spaces per level."""
        lines: List[str] = []
        stack = [(self, 0)]
        while stack:
            node, level = stack.pop()
            lines.append(f"{'  ' * level}- {node.name}".rstrip())
            stack.extend((child, level + 1) for child in reversed(node.children))
        return "\n".join(lines)
