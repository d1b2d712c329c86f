"""
Export a parsed outline tree to an XMind mind map; read one back for validation.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator

from ..outline import MindMapNode


def build_xmind(
    root: MindMapNode,
    out_path: Path | str,
    *,
    sheet_title: str = "Mind Map",
) -> Path:
    """
    Write root as the central topic and every descendant as a subtopic, in order.
    Empty labels are kept as "(untitled)" because XMind drops blank topics.
    """
    try:
        from py_xmind16 import Workbook
    except ImportError as e:
        raise ImportError("py-xmind16 is required for --xmind. Install with: pip install py-xmind16") from e

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()
    sheet = workbook.create_sheet(sheet_title)
    topic = sheet.get_root_topic()
    topic.title = root.name or "(untitled)"

    # Parents before children, siblings in source order.
    pending: list[tuple[Any, MindMapNode]] = [(topic, root)]
    while pending:
        parent_topic, node = pending.pop()
        subs = [(parent_topic.add_subtopic(child.name or "(untitled)"), child) for child in node.children]
        pending.extend(reversed(subs))

    workbook.save(str(out_path))
    return out_path


def _iter_xmind_links(xmind_path: Path | str) -> Iterator[tuple[str | None, str]]:
    """Yield (parent title or None, title) for every titled topic, parents first."""
    from py_xmind16 import Workbook

    workbook = Workbook.load(str(xmind_path))
    for index in range(workbook.sheet_count):
        top = workbook.get_sheet(index).root_topic
        if not top:
            continue
        pending: list[tuple[str | None, Any]] = [(None, top)]
        while pending:
            parent_title, topic = pending.pop()
            title = str(getattr(topic, "title", None) or "").strip()
            if not title:
                continue
            yield parent_title, title
            subs = getattr(topic, "subtopics", None) or []
            pending.extend((title, sub) for sub in reversed(subs))


def load_xmind_topic_titles(xmind_path: Path | str) -> list[str]:
    """All topic titles in document order; used to check an export."""
    return [title for _, title in _iter_xmind_links(xmind_path)]


def load_xmind_parent_child_pairs(xmind_path: Path | str) -> list[tuple[str, str]]:
    """(parent, child) title pairs for every link in the workbook."""
    return [(parent, title) for parent, title in _iter_xmind_links(xmind_path) if parent is not None]
