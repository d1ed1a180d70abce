"""Shared schemas for mdchapter."""

from mdchapter.schemas.blocks import Block, CodeSample, Heading, Note, Paragraph, Quote
from mdchapter.schemas.document import Document
from mdchapter.schemas.ingestion import IngestionResult
from mdchapter.schemas.sections import SectionNode

__all__ = [
    "Block",
    "CodeSample",
    "Document",
    "Heading",
    "IngestionResult",
    "Note",
    "Paragraph",
    "Quote",
    "SectionNode",
]
