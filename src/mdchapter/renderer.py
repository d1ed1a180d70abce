"""Render a document tree to HTML, plain text or canonical markdown."""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterator

from mdchapter.config import MDCHAPTER_DEFAULT_FORMAT, SUPPORTED_FORMATS
from mdchapter.exceptions import ConversionError
from mdchapter.schemas import (
    Block,
    CodeSample,
    Document,
    Note,
    Paragraph,
    Quote,
    SectionNode,
)
from mdchapter.tokenizer import tokenize_inline

logger = logging.getLogger(__name__)

_SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
_SLUG_SPACE_RE = re.compile(r"[\s_-]+")


@dataclass(frozen=True)
class RenderOptions:
    """Options for rendering.

    Attributes:
        output_format: One of ``html``, ``text`` or ``markdown``.
        include_toc: If True, prepend a table of contents (html and text only).
    """

    output_format: str = MDCHAPTER_DEFAULT_FORMAT
    include_toc: bool = False

    def __post_init__(self) -> None:
        if self.output_format not in SUPPORTED_FORMATS:
            raise ConversionError(
                f"Unsupported output format {self.output_format!r}; "
                f"expected one of {', '.join(SUPPORTED_FORMATS)}"
            )


def render(document: Document, options: RenderOptions | None = None) -> str:
    """Render ``document`` depth-first in source order.

    Paragraph, note and quote text is escaped for the target format. Code
    sample bodies are emitted exactly as parsed.
    """
    opts = options or RenderOptions()
    renderer = _RENDERERS[opts.output_format]
    output = renderer(document, opts.include_toc)
    logger.debug("Rendered %s output (%d chars)", opts.output_format, len(output))
    return output


def slugify(title: str) -> str:
    """Turn a section title into an HTML anchor."""
    slug = _SLUG_STRIP_RE.sub("", title.lower()).strip()
    slug = _SLUG_SPACE_RE.sub("-", slug).strip("-")
    return slug or "section"


def _section_anchors(document: Document) -> list[str]:
    anchors: list[str] = []
    seen: dict[str, int] = {}
    for section in document.iter_sections():
        slug = slugify(section.title)
        count = seen.get(slug, 0)
        seen[slug] = count + 1
        anchors.append(slug if count == 0 else f"{slug}-{count + 1}")
    return anchors


# HTML


def _render_html(document: Document, include_toc: bool) -> str:
    anchors = _section_anchors(document)
    footnotes: dict[str, int] = {}
    parts: list[str] = []
    if include_toc and document.sections:
        parts.append('<nav class="toc">')
        parts.extend(_html_toc(list(document.sections), iter(anchors), footnotes))
        parts.append("</nav>")
    parts.extend(_html_block(block, footnotes) for block in document.preamble)
    anchor_iter = iter(anchors)
    for section in document.sections:
        parts.extend(_html_section(section, anchor_iter, footnotes))
    return "\n".join(parts)


def _html_toc(
    sections: list[SectionNode], anchors: Iterator[str], footnotes: dict[str, int]
) -> list[str]:
    lines = ["<ul>"]
    for section in sections:
        anchor = next(anchors)
        title = _inline_html(section.title, footnotes)
        subsections = list(section.subsections)
        if subsections:
            lines.append(f'<li><a href="#{anchor}">{title}</a>')
            lines.extend(_html_toc(subsections, anchors, footnotes))
            lines.append("</li>")
        else:
            lines.append(f'<li><a href="#{anchor}">{title}</a></li>')
    lines.append("</ul>")
    return lines


def _html_section(
    section: SectionNode, anchors: Iterator[str], footnotes: dict[str, int]
) -> list[str]:
    anchor = next(anchors)
    level = section.level
    parts = [
        "<section>",
        f'<h{level} id="{anchor}">{_inline_html(section.title, footnotes)}</h{level}>',
    ]
    for child in section.children:
        if isinstance(child, SectionNode):
            parts.extend(_html_section(child, anchors, footnotes))
        else:
            parts.append(_html_block(child, footnotes))
    parts.append("</section>")
    return parts


def _html_block(block: Block, footnotes: dict[str, int]) -> str:
    if isinstance(block, Paragraph):
        return f"<p>{_inline_html(block.text, footnotes)}</p>"
    if isinstance(block, CodeSample):
        language = html.escape(block.language_hint, quote=True)
        return f'<pre><code class="language-{language}">{block.body}</code></pre>'
    if isinstance(block, Note):
        label = html.escape(block.label, quote=False)
        return (
            f'<div class="admonition">'
            f'<p class="admonition-title">{label}</p>'
            f"<p>{_inline_html(block.text, footnotes)}</p></div>"
        )
    if isinstance(block, Quote):
        return f"<blockquote><p>{_inline_html(block.text, footnotes)}</p></blockquote>"
    raise TypeError(f"Unsupported block type: {type(block).__name__}")


def _inline_html(text: str, footnotes: dict[str, int]) -> str:
    parts: list[str] = []
    for span in tokenize_inline(text):
        if span.kind == "text":
            parts.append(html.escape(span.text, quote=False))
        elif span.kind == "code":
            parts.append(f"<code>{html.escape(span.text, quote=False)}</code>")
        elif span.kind == "strong":
            parts.append(f"<strong>{_inline_html(span.text, footnotes)}</strong>")
        elif span.kind == "em":
            parts.append(f"<em>{_inline_html(span.text, footnotes)}</em>")
        else:
            count = footnotes.get(span.text, 0) + 1
            footnotes[span.text] = count
            footnote = html.escape(span.text, quote=True)
            anchor = footnote if count == 1 else f"{footnote}-{count}"
            parts.append(f'<sup class="footnote-ref" id="fnref-{anchor}">{footnote}</sup>')
    return "".join(parts)


# Plain text


def _render_text(document: Document, include_toc: bool) -> str:
    blocks: list[str] = []
    if include_toc and document.sections:
        blocks.append("Contents\n" + _text_toc(list(document.sections)))
    blocks.extend(_text_block(block) for block in document.preamble)
    for section in document.sections:
        blocks.extend(_text_section(section))
    return "\n\n".join(blocks)


def _text_toc(sections: list[SectionNode], indent: int = 0) -> str:
    lines: list[str] = []
    for section in sections:
        lines.append("  " * indent + "- " + _inline_text(section.title))
        subsections = list(section.subsections)
        if subsections:
            lines.append(_text_toc(subsections, indent + 1))
    return "\n".join(lines)


def _text_section(section: SectionNode) -> list[str]:
    title = _inline_text(section.title)
    if section.level == 1:
        heading = f"{title}\n{'=' * max(len(title), 1)}"
    elif section.level == 2:
        heading = f"{title}\n{'-' * max(len(title), 1)}"
    else:
        heading = title
    blocks = [heading]
    for child in section.children:
        if isinstance(child, SectionNode):
            blocks.extend(_text_section(child))
        else:
            blocks.append(_text_block(child))
    return blocks


def _text_block(block: Block) -> str:
    if isinstance(block, Paragraph):
        return _inline_text(block.text)
    if isinstance(block, CodeSample):
        return block.body
    if isinstance(block, Note):
        text = _inline_text(block.text)
        return f"{block.label}: {text}" if text else f"{block.label}:"
    if isinstance(block, Quote):
        return "\n".join("    " + line for line in _inline_text(block.text).split("\n"))
    raise TypeError(f"Unsupported block type: {type(block).__name__}")


def _inline_text(text: str) -> str:
    parts: list[str] = []
    for span in tokenize_inline(text):
        if span.kind in {"strong", "em"}:
            parts.append(_inline_text(span.text))
        elif span.kind == "footnote":
            parts.append(f"[{span.text}]")
        else:
            parts.append(span.text)
    return "".join(parts)


# Markdown


def _render_markdown(document: Document, include_toc: bool) -> str:
    # Canonical source form: never carries a table of contents.
    blocks: list[str] = []
    blocks.extend(_markdown_block(block) for block in document.preamble)
    for section in document.sections:
        blocks.extend(_markdown_section(section))
    return "\n\n".join(blocks) + "\n" if blocks else ""


def _markdown_section(section: SectionNode) -> list[str]:
    marker = "#" * section.level
    blocks = [f"{marker} {section.title}" if section.title else marker]
    for child in section.children:
        if isinstance(child, SectionNode):
            blocks.extend(_markdown_section(child))
        else:
            blocks.append(_markdown_block(child))
    return blocks


def _markdown_block(block: Block) -> str:
    if isinstance(block, Paragraph):
        return block.text
    if isinstance(block, CodeSample):
        fence_char = "~" if "`" in block.language_hint else "`"
        longest = max(
            (len(run) for run in re.findall(re.escape(fence_char) + "+", block.body)),
            default=0,
        )
        fence = fence_char * max(3, longest + 1)
        return f"{fence}{block.language_hint}\n{block.body}\n{fence}"
    if isinstance(block, Note):
        return f"{block.label}: {block.text}" if block.text else f"{block.label}:"
    if isinstance(block, Quote):
        return "\n".join(f"> {line}" if line else ">" for line in block.text.split("\n"))
    raise TypeError(f"Unsupported block type: {type(block).__name__}")


_RENDERERS: dict[str, Callable[[Document, bool], str]] = {
    "html": _render_html,
    "text": _render_text,
    "markdown": _render_markdown,
}
