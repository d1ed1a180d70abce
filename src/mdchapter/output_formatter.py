"""Format a parsed chapter into summary, tree, and content outputs."""

from __future__ import annotations

try:
    import tiktoken
except ImportError:  # pragma: no cover - optional dependency
    tiktoken = None

from mdchapter.renderer import RenderOptions, render
from mdchapter.schemas import CodeSample, Document, IngestionResult, SectionNode
from mdchapter.sections import count_sections


def format_chapter(
    document: Document,
    options: RenderOptions,
    *,
    estimate_tokens: bool = False,
) -> IngestionResult:
    """Create summary, section tree, and rendered content.

    A token estimate is added only when ``estimate_tokens`` is set.
    """
    tree = "Sections:\n" + _create_sections_tree(list(document.sections))
    content = render(document, options)

    blocks = list(document.iter_blocks())
    code_samples = sum(1 for block in blocks if isinstance(block, CodeSample))

    summary_lines = []
    if document.title:
        summary_lines.append(f"Title: {document.title}")
    summary_lines.append(f"Sections: {count_sections(document.sections)}")
    summary_lines.append(f"Blocks: {len(blocks)}")
    summary_lines.append(f"Code samples: {code_samples}")
    summary_lines.append(f"Format: {options.output_format}")

    token_estimate = _format_token_count(content) if estimate_tokens else None
    if token_estimate:
        summary_lines.append(f"Estimated tokens: {token_estimate}")

    summary = "\n".join(summary_lines)

    return IngestionResult(summary=summary, sections_tree=tree, content=content)


def _create_sections_tree(sections: list[SectionNode], indent: int = 0) -> str:
    lines: list[str] = []
    for section in sections:
        lines.append(" " * (indent * 4) + section.title)
        subsections = list(section.subsections)
        if subsections:
            lines.append(_create_sections_tree(subsections, indent + 1))
    return "\n".join(lines)


def _format_token_count(text: str) -> str | None:
    if not tiktoken:
        return None
    try:
        encoding = tiktoken.get_encoding("o200k_base")
        total_tokens = len(encoding.encode(text, disallowed_special=()))
    except Exception:
        return None

    if total_tokens >= 1_000_000:
        return f"{total_tokens / 1_000_000:.1f}M"
    if total_tokens >= 1_000:
        return f"{total_tokens / 1_000:.1f}k"
    return str(total_tokens)
