"""Assign semantic block kinds to raw tokens."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Iterator, Union

from mdchapter.config import (
    MAX_HEADING_LEVEL,
    MDCHAPTER_ADMONITION_LABELS,
    MDCHAPTER_DEFAULT_CODE_LANGUAGE,
)
from mdchapter.exceptions import UnsupportedHeadingLevel
from mdchapter.schemas import CodeSample, Heading, Note, Paragraph, Quote
from mdchapter.tokenizer import RawToken

ClassifiedItem = Union[Heading, Paragraph, CodeSample, Note, Quote]

_QUOTE_MARKER_RE = re.compile(r"^[ \t]{0,3}>[ ]?", re.MULTILINE)


def classify_token(
    token: RawToken,
    *,
    admonition_labels: Iterable[str] = MDCHAPTER_ADMONITION_LABELS,
    default_language: str = MDCHAPTER_DEFAULT_CODE_LANGUAGE,
) -> ClassifiedItem:
    """Map a raw token to a heading or one of the block variants.

    Raises:
        UnsupportedHeadingLevel: If a heading marker run is longer than six.
    """
    if token.kind == "heading":
        if token.marker_count > MAX_HEADING_LEVEL:
            raise UnsupportedHeadingLevel(
                f"Heading level {token.marker_count} exceeds maximum of {MAX_HEADING_LEVEL}",
                line=token.line,
                offset=token.offset,
            )
        return Heading(level=token.marker_count, title=token.text)

    if token.kind == "fence":
        words = token.info.split()
        language = words[0] if words else default_language
        return CodeSample(language_hint=language, body=token.text)

    note = _match_admonition(token.text, tuple(admonition_labels))
    if note is not None:
        return note
    if _is_blockquote(token.text):
        return Quote(text=_QUOTE_MARKER_RE.sub("", token.text))
    return Paragraph(text=token.text)


def classify_tokens(
    tokens: Iterable[RawToken],
    *,
    admonition_labels: Iterable[str] = MDCHAPTER_ADMONITION_LABELS,
    default_language: str = MDCHAPTER_DEFAULT_CODE_LANGUAGE,
) -> Iterator[tuple[ClassifiedItem, RawToken]]:
    """Lazily classify tokens, pairing each result with its source token."""
    labels = tuple(admonition_labels)
    for token in tokens:
        item = classify_token(
            token, admonition_labels=labels, default_language=default_language
        )
        yield item, token


@lru_cache(maxsize=32)
def _admonition_pattern(labels: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(label) for label in sorted(labels, key=len, reverse=True))
    return re.compile(
        rf"^(?P<wrap>\*\*|__)?(?P<label>{alternatives})(?P<inner>[:.])?"
        rf"(?(wrap)(?P=wrap))(?P<outer>[:.])?(?:[ \t]+|\n|$)"
    )


def _match_admonition(text: str, labels: tuple[str, ...]) -> Note | None:
    if not labels:
        return None
    match = _admonition_pattern(labels).match(text)
    if not match:
        return None
    # "Note that ..." is prose; a label needs punctuation or emphasis.
    if not (match.group("wrap") or match.group("inner") or match.group("outer")):
        return None
    return Note(label=match.group("label"), text=text[match.end() :].strip())


def _is_blockquote(text: str) -> bool:
    return all(_QUOTE_MARKER_RE.match(line) for line in text.split("\n"))
