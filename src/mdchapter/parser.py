"""Parse chapter text into a validated document tree."""

from __future__ import annotations

import logging
from typing import Iterable

from mdchapter.assembler import assemble
from mdchapter.classifier import classify_tokens
from mdchapter.config import (
    MDCHAPTER_ADMONITION_LABELS,
    MDCHAPTER_ALLOW_PREAMBLE,
    MDCHAPTER_DEFAULT_CODE_LANGUAGE,
)
from mdchapter.schemas import Document
from mdchapter.tokenizer import tokenize

logger = logging.getLogger(__name__)


def parse_chapter(
    text: str,
    *,
    allow_preamble: bool = MDCHAPTER_ALLOW_PREAMBLE,
    admonition_labels: Iterable[str] = MDCHAPTER_ADMONITION_LABELS,
    default_language: str = MDCHAPTER_DEFAULT_CODE_LANGUAGE,
) -> Document:
    """Tokenize, classify and assemble ``text`` into a Document.

    Args:
        text: The raw chapter source.
        allow_preamble: Keep blocks preceding the first heading instead of
            rejecting them.
        admonition_labels: Paragraph prefixes recognized as notes.
        default_language: Language hint for fences without an annotation.

    Returns:
        The immutable document tree.

    Raises:
        MalformedFence: If a code fence is unterminated or nested.
        UnsupportedHeadingLevel: If a heading is deeper than level six.
        OrphanBlock: If content precedes the first heading and
            ``allow_preamble`` is False.
    """
    items = classify_tokens(
        tokenize(text),
        admonition_labels=admonition_labels,
        default_language=default_language,
    )
    document = assemble(items, allow_preamble=allow_preamble)
    logger.debug(
        "Parsed chapter %r: %d top-level sections, %d preamble blocks",
        document.title,
        len(document.sections),
        len(document.preamble),
    )
    return document
