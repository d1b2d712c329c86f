"""
Two-sided tidy tree layout: root children alternate right/left, each side is laid
out independently with the Buchheim/Walker algorithm and the left side mirrored.

Coordinates follow the tree convention: x is the perpendicular (sibling) axis,
y is the depth axis. The root sits at (0, 0); a negative y means the left side.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Literal, Optional

from ..config import LayoutConfig
from ..outline import MindMapNode
from .measure import MeasuredNode, measure_tree

logger = logging.getLogger(__name__)

Side = Literal["left", "right"]


@dataclass(frozen=True)
class PositionedNode:
    name: str
    lines: tuple[str, ...]
    box_width: float
    box_height: float
    x: float
    y: float
    depth: int
    side: Side
    # Index of the parent in LayoutResult.nodes; only used to draw connectors.
    parent: Optional[int] = None
    id: Optional[str] = None


@dataclass(frozen=True)
class Edge:
    parent: PositionedNode
    child: PositionedNode


@dataclass(frozen=True)
class LayoutResult:
    nodes: tuple[PositionedNode, ...]
    edges: tuple[Edge, ...]

    @property
    def root(self) -> PositionedNode:
        return self.nodes[0]

    def parent_of(self, node: PositionedNode) -> Optional[PositionedNode]:
        return None if node.parent is None else self.nodes[node.parent]


class _TidyNode:
    """Working record for one node during the tidy tree pass."""

    __slots__ = (
        "source", "parent", "children", "index", "depth",
        "ancestor", "thread", "prelim", "mod", "change", "shift", "apportion_ancestor", "x",
    )

    def __init__(self, source: Optional[MeasuredNode], index: int, depth: int) -> None:
        self.source = source
        self.parent: Optional[_TidyNode] = None
        self.children: list[_TidyNode] = []
        self.index = index
        self.depth = depth
        self.ancestor: _TidyNode = self
        self.thread: Optional[_TidyNode] = None
        self.prelim = 0.0
        self.mod = 0.0
        self.change = 0.0
        self.shift = 0.0
        self.apportion_ancestor: Optional[_TidyNode] = None
        self.x = 0.0


Separation = Callable[[_TidyNode, _TidyNode], float]


def _build(root: MeasuredNode, children: tuple[MeasuredNode, ...]) -> _TidyNode:
    """Wrap root (restricted to the given children) and its descendants."""
    top = _TidyNode(root, 0, 0)
    pending = [(top, children)]
    while pending:
        node, kids = pending.pop()
        for i, kid in enumerate(kids):
            child = _TidyNode(kid, i, node.depth + 1)
            child.parent = node
            node.children.append(child)
            pending.append((child, kid.children))
    return top


def _post_order(root: _TidyNode) -> Iterator[_TidyNode]:
    """Children left to right, each before its parent."""
    visit = [root]
    out: list[_TidyNode] = []
    while visit:
        node = visit.pop()
        out.append(node)
        visit.extend(node.children)
    while out:
        yield out.pop()


def _pre_order(root: _TidyNode) -> Iterator[_TidyNode]:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _breadth_first(root: _TidyNode) -> Iterator[_TidyNode]:
    level = [root]
    while level:
        following: list[_TidyNode] = []
        for node in level:
            yield node
            following.extend(node.children)
        level = following


def _next_left(v: _TidyNode) -> Optional[_TidyNode]:
    return v.children[0] if v.children else v.thread


def _next_right(v: _TidyNode) -> Optional[_TidyNode]:
    return v.children[-1] if v.children else v.thread


def _move_subtree(wm: _TidyNode, wp: _TidyNode, shift: float) -> None:
    change = shift / (wp.index - wm.index)
    wp.change -= change
    wp.shift += shift
    wm.change += change
    wp.prelim += shift
    wp.mod += shift


def _execute_shifts(v: _TidyNode) -> None:
    shift = 0.0
    change = 0.0
    for w in reversed(v.children):
        w.prelim += shift
        w.mod += shift
        change += w.change
        shift += w.shift + change


def _next_ancestor(vim: _TidyNode, v: _TidyNode, ancestor: _TidyNode) -> _TidyNode:
    return vim.ancestor if vim.ancestor.parent is v.parent else ancestor


def _apportion(v: _TidyNode, w: Optional[_TidyNode], ancestor: _TidyNode, separation: Separation) -> _TidyNode:
    if w is None:
        return ancestor
    assert v.parent is not None
    vip: Optional[_TidyNode] = v
    vop: _TidyNode = v
    vim: Optional[_TidyNode] = w
    vom: _TidyNode = v.parent.children[0]
    sip = vip.mod
    sop = vop.mod
    sim = vim.mod
    som = vom.mod
    while True:
        vim = _next_right(vim)
        vip = _next_left(vip)
        if vim is None or vip is None:
            break
        vom = _next_left(vom)
        vop = _next_right(vop)
        vop.ancestor = v
        shift = vim.prelim + sim - vip.prelim - sip + separation(vim, vip)
        if shift > 0:
            _move_subtree(_next_ancestor(vim, v, ancestor), v, shift)
            sip += shift
            sop += shift
        sim += vim.mod
        sip += vip.mod
        som += vom.mod
        sop += vop.mod
    if vim is not None and _next_right(vop) is None:
        vop.thread = vim
        vop.mod += sim - sop
    if vip is not None and _next_left(vom) is None:
        vom.thread = vip
        vom.mod += sip - som
        ancestor = v
    return ancestor


def _first_walk(v: _TidyNode, separation: Separation) -> None:
    assert v.parent is not None
    siblings = v.parent.children
    w = siblings[v.index - 1] if v.index else None
    if v.children:
        _execute_shifts(v)
        midpoint = (v.children[0].prelim + v.children[-1].prelim) / 2
        if w is not None:
            v.prelim = w.prelim + separation(v, w)
            v.mod = v.prelim - midpoint
        else:
            v.prelim = midpoint
    elif w is not None:
        v.prelim = w.prelim + separation(v, w)
    v.parent.apportion_ancestor = _apportion(v, w, v.parent.apportion_ancestor or siblings[0], separation)


def _second_walk(v: _TidyNode) -> None:
    assert v.parent is not None
    v.x = v.prelim + v.parent.mod
    v.mod += v.parent.mod


def _tidy_layout(root: _TidyNode, separation: Separation) -> None:
    """Assign v.x (in sibling units) to every node; root ends at 0."""
    holder = _TidyNode(None, 0, -1)
    holder.children = [root]
    root.parent = holder
    for v in _post_order(root):
        _first_walk(v, separation)
    holder.mod = -root.prelim
    for v in _pre_order(root):
        _second_walk(v)
    root.parent = None


def _separation_for(config: LayoutConfig) -> Separation:
    def separation(a: _TidyNode, b: _TidyNode) -> float:
        return 1.0 if a.parent is b.parent else config.cousin_separation

    return separation


def split_sides(root: MeasuredNode) -> tuple[tuple[MeasuredNode, ...], tuple[MeasuredNode, ...]]:
    """Root children by position: even indices go right, odd indices go left."""
    return root.children[0::2], root.children[1::2]


def layout_measured(root: MeasuredNode, config: LayoutConfig) -> LayoutResult:
    right_children, left_children = split_sides(root)
    separation = _separation_for(config)

    nodes: list[PositionedNode] = []
    edges: list[Edge] = []
    for side, kids in (("right", right_children), ("left", left_children)):
        top = _build(root, kids)
        _tidy_layout(top, separation)
        sign = 1.0 if side == "right" else -1.0
        index_of: dict[int, int] = {}
        for tnode in _breadth_first(top):
            if tnode is top and side == "left":
                # The root already came from the right side.
                index_of[id(tnode)] = 0
                continue
            src = tnode.source
            assert src is not None
            parent_index = index_of[id(tnode.parent)] if tnode.parent is not None else None
            positioned = PositionedNode(
                name=src.name,
                lines=src.lines,
                box_width=src.box_width,
                box_height=src.box_height,
                x=tnode.x * config.sibling_spacing,
                y=sign * tnode.depth * config.level_spacing,
                depth=tnode.depth,
                side="right" if tnode is top else side,
                parent=parent_index,
                id=src.id,
            )
            index_of[id(tnode)] = len(nodes)
            nodes.append(positioned)
            if parent_index is not None:
                edges.append(Edge(parent=nodes[parent_index], child=positioned))

    logger.debug("Layout: %d nodes (%d right, %d left root branches)", len(nodes), len(right_children), len(left_children))
    return LayoutResult(nodes=tuple(nodes), edges=tuple(edges))


def layout_tree(root: MindMapNode, config: LayoutConfig | None = None) -> LayoutResult:
    """Measure and position every node of the tree."""
    config = config or LayoutConfig()
    return layout_measured(measure_tree(root, config), config)
