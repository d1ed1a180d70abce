"""Ingestion pipeline for chapter text -> rendered output."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from mdchapter.config import (
    MDCHAPTER_ADMONITION_LABELS,
    MDCHAPTER_ALLOW_PREAMBLE,
    MDCHAPTER_DEFAULT_CODE_LANGUAGE,
    MDCHAPTER_DEFAULT_FORMAT,
)
from mdchapter.output_formatter import format_chapter
from mdchapter.parser import parse_chapter
from mdchapter.renderer import RenderOptions
from mdchapter.schemas import IngestionResult
from mdchapter.sections import filter_document

logger = logging.getLogger(__name__)


@dataclass
class IngestionOptions:
    """Options for chapter ingestion.

    Attributes:
        output_format: Target format (``html``, ``text`` or ``markdown``).
        include_toc: If True, prepend a table of contents to the content.
        allow_preamble: If False, content before the first heading is an error.
        admonition_labels: Paragraph prefixes recognized as notes.
        default_language: Language hint for fences without an annotation.
        section_filter_mode: Mode for section filtering ("include" or "exclude").
        sections: List of section titles to include or exclude.
        estimate_tokens: If True, add a tiktoken estimate to the summary.
    """

    output_format: str = MDCHAPTER_DEFAULT_FORMAT
    include_toc: bool = False
    allow_preamble: bool = MDCHAPTER_ALLOW_PREAMBLE
    admonition_labels: list[str] = field(default_factory=lambda: list(MDCHAPTER_ADMONITION_LABELS))
    default_language: str = MDCHAPTER_DEFAULT_CODE_LANGUAGE
    section_filter_mode: Literal["include", "exclude"] = "exclude"
    sections: list[str] = field(default_factory=list)
    estimate_tokens: bool = False


def ingest_chapter(text: str, options: IngestionOptions | None = None) -> IngestionResult:
    """Parse, filter, and render a chapter.

    Args:
        text: The raw chapter source.
        options: Processing options. Uses defaults if None.

    Returns:
        The summary, section outline and rendered content.

    Raises:
        ConversionError: If the output format is not supported.
        ParseError: If the chapter text is malformed.
    """
    opts = options or IngestionOptions()
    render_options = RenderOptions(output_format=opts.output_format, include_toc=opts.include_toc)

    document = parse_chapter(
        text,
        allow_preamble=opts.allow_preamble,
        admonition_labels=opts.admonition_labels,
        default_language=opts.default_language,
    )
    if opts.sections:
        document = filter_document(document, mode=opts.section_filter_mode, selected=opts.sections)
        logger.debug(
            "Filtered sections (%s %s): %d top-level sections remain",
            opts.section_filter_mode,
            opts.sections,
            len(document.sections),
        )

    return format_chapter(document, render_options, estimate_tokens=opts.estimate_tokens)
