"""Section filtering and utilities."""

from __future__ import annotations

import re
from typing import Iterable, Literal

from mdchapter.schemas import Document, SectionNode


def normalize_section_title(title: str) -> str:
    """Normalize section titles for comparison."""
    title = title.strip().lower()
    title = re.sub(r"^(?:chapter\s+)?[\d.]+\s+", "", title)
    return re.sub(r"\s+", " ", title)


def count_sections(sections: Iterable[SectionNode]) -> int:
    """Count total sections in the tree."""
    total = 0
    for section in sections:
        total += 1
        total += count_sections(section.subsections)
    return total


def filter_sections(
    sections: Iterable[SectionNode],
    *,
    mode: Literal["include", "exclude"] = "exclude",
    selected: Iterable[str] | None = None,
) -> tuple[SectionNode, ...]:
    """Filter sections by title using include or exclude mode.

    In include mode a matching section is kept whole, and a non-matching
    section is kept only for its matching descendants (its own blocks are
    dropped). In exclude mode a matching section is dropped with everything
    it contains. Nodes are copied, never mutated.
    """
    selected_titles = {normalize_section_title(title) for title in (selected or []) if title.strip()}
    if not selected_titles:
        return tuple(sections)

    def _filter(nodes: Iterable[SectionNode]) -> tuple[SectionNode, ...]:
        result: list[SectionNode] = []
        for node in nodes:
            in_selected = normalize_section_title(node.title) in selected_titles
            if mode == "include":
                if in_selected:
                    result.append(node)
                else:
                    children = _filter(node.subsections)
                    if children:
                        result.append(node.model_copy(update={"children": children}))
            else:
                if in_selected:
                    continue
                kept: list = []
                for child in node.children:
                    if isinstance(child, SectionNode):
                        kept.extend(_filter([child]))
                    else:
                        kept.append(child)
                result.append(node.model_copy(update={"children": tuple(kept)}))
        return tuple(result)

    return _filter(sections)


def filter_document(
    document: Document,
    *,
    mode: Literal["include", "exclude"] = "exclude",
    selected: Iterable[str] | None = None,
) -> Document:
    """Return a copy of ``document`` with its sections filtered."""
    sections = filter_sections(document.sections, mode=mode, selected=selected)
    return document.model_copy(update={"sections": sections})
