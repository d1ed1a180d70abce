"""mdchapter: parse book chapters into a document tree and render them."""

from mdchapter.exceptions import (
    ConversionError,
    MalformedFence,
    MdchapterError,
    OrphanBlock,
    ParseError,
    UnsupportedHeadingLevel,
)
from mdchapter.ingestion import IngestionOptions, ingest_chapter
from mdchapter.parser import parse_chapter
from mdchapter.renderer import RenderOptions, render
from mdchapter.schemas import (
    CodeSample,
    Document,
    IngestionResult,
    Note,
    Paragraph,
    Quote,
    SectionNode,
)

__all__ = [
    "CodeSample",
    "ConversionError",
    "Document",
    "IngestionOptions",
    "IngestionResult",
    "MalformedFence",
    "MdchapterError",
    "Note",
    "OrphanBlock",
    "Paragraph",
    "ParseError",
    "Quote",
    "RenderOptions",
    "SectionNode",
    "UnsupportedHeadingLevel",
    "ingest_chapter",
    "parse_chapter",
    "render",
]
