"""Split raw chapter text into block-level and inline tokens."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Literal

from mdchapter.exceptions import MalformedFence


_HEADING_RE = re.compile(r"^(#+)(?:[ \t]+(.*?))?[ \t]*$")
_CLOSING_HASHES_RE = re.compile(r"(?:^|[ \t]+)#+$")
_FENCE_OPEN_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*(.*?)[ \t]*$")
_FENCE_CLOSE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*$")
_INLINE_RE = re.compile(
    r"(?P<ticks>`+)(?P<code>.+?)(?<!`)(?P=ticks)(?!`)"
    r"|\*\*(?P<strong>.+?)\*\*"
    r"|__(?P<strong_alt>.+?)__"
    r"|\*(?P<em>[^*\s](?:.*?[^*\s])?)\*"
    r"|\[\^(?P<footnote>[^\]\s]+)\]",
    re.DOTALL,
)

TokenKind = Literal["heading", "paragraph", "fence"]
InlineKind = Literal["text", "code", "strong", "em", "footnote"]


@dataclass(frozen=True)
class RawToken:
    """A block-level unit of source text.

    Attributes:
        kind: ``heading``, ``paragraph`` or ``fence``.
        text: Heading title, paragraph text, or the literal fence body.
        line: 1-based line number where the token starts.
        offset: 0-based character offset where the token starts.
        marker_count: Length of the ``#`` run for headings.
        info: Fence annotation following the opening delimiter.
    """

    kind: TokenKind
    text: str
    line: int
    offset: int
    marker_count: int = 0
    info: str = ""


@dataclass(frozen=True)
class InlineSpan:
    """A run of inline text with uniform markup."""

    kind: InlineKind
    text: str


@dataclass(frozen=True)
class _Line:
    number: int
    start: int
    end: int
    content: str


class BlockTokenizer:
    """Lazy, restartable sequence of block tokens over a text buffer.

    Each iteration starts from the beginning of the input, so the same
    instance can be consumed more than once.
    """

    def __init__(self, text: str) -> None:
        self._text = text

    def __iter__(self) -> Iterator[RawToken]:
        return _iter_tokens(self._text)


def tokenize(text: str) -> BlockTokenizer:
    """Return a restartable block tokenizer for ``text``."""
    return BlockTokenizer(text)


def tokenize_inline(text: str) -> list[InlineSpan]:
    """Split paragraph text into plain, code, emphasis and footnote spans."""
    spans: list[InlineSpan] = []
    position = 0
    for match in _INLINE_RE.finditer(text):
        if match.start() > position:
            spans.append(InlineSpan("text", text[position : match.start()]))
        if match.group("code") is not None:
            spans.append(InlineSpan("code", match.group("code").strip()))
        elif match.group("strong") is not None:
            spans.append(InlineSpan("strong", match.group("strong")))
        elif match.group("strong_alt") is not None:
            spans.append(InlineSpan("strong", match.group("strong_alt")))
        elif match.group("em") is not None:
            spans.append(InlineSpan("em", match.group("em")))
        else:
            spans.append(InlineSpan("footnote", match.group("footnote")))
        position = match.end()
    if position < len(text):
        spans.append(InlineSpan("text", text[position:]))
    return spans


def _iter_lines(text: str) -> Iterator[_Line]:
    position = 0
    number = 1
    length = len(text)
    while position < length:
        newline = text.find("\n", position)
        end = length if newline == -1 else newline + 1
        content = text[position:end].rstrip("\n").rstrip("\r")
        yield _Line(number=number, start=position, end=end, content=content)
        position = end
        number += 1


def _iter_tokens(text: str) -> Iterator[RawToken]:
    lines = _iter_lines(text)
    paragraph: list[_Line] = []

    for line in lines:
        if not line.content.strip():
            if paragraph:
                yield _paragraph_token(text, paragraph)
                paragraph = []
            continue

        opener = _match_fence_opener(line.content)
        if opener is not None:
            if paragraph:
                yield _paragraph_token(text, paragraph)
                paragraph = []
            marker, info = opener
            yield _read_fence(text, line, lines, marker=marker, info=info)
            continue

        heading = _HEADING_RE.match(line.content)
        if heading:
            if paragraph:
                yield _paragraph_token(text, paragraph)
                paragraph = []
            title = _strip_closing_hashes(heading.group(2) or "")
            yield RawToken(
                kind="heading",
                text=title,
                line=line.number,
                offset=line.start,
                marker_count=len(heading.group(1)),
            )
            continue

        paragraph.append(line)

    if paragraph:
        yield _paragraph_token(text, paragraph)


def _strip_closing_hashes(title: str) -> str:
    stripped = _CLOSING_HASHES_RE.sub("", title).strip()
    while stripped != title:
        title = stripped
        stripped = _CLOSING_HASHES_RE.sub("", title).strip()
    return stripped


def _match_fence_opener(content: str) -> tuple[str, str] | None:
    match = _FENCE_OPEN_RE.match(content)
    if not match:
        return None
    marker, info = match.group(1), match.group(2)
    # Backtick fences cannot carry backticks in their annotation (inline code).
    if marker[0] == "`" and "`" in info:
        return None
    return marker, info


def _read_fence(
    text: str,
    opener: _Line,
    lines: Iterator[_Line],
    *,
    marker: str,
    info: str,
) -> RawToken:
    """Consume lines up to the matching closer and return the fence token.

    Raises:
        MalformedFence: If the fence is never closed or a nested opener of
            the same fence appears inside it.
    """
    for line in lines:
        closer = _FENCE_CLOSE_RE.match(line.content)
        if closer and _same_fence(closer.group(1), marker):
            body = _strip_final_break(text[opener.end : line.start])
            return RawToken(
                kind="fence",
                text=body,
                line=opener.number,
                offset=opener.start,
                info=info,
            )
        nested = _match_fence_opener(line.content)
        if nested is not None and nested[1] and _same_fence(nested[0], marker):
            raise MalformedFence(
                "Code fence opened inside another code fence",
                line=line.number,
                offset=line.start,
            )
    raise MalformedFence(
        "Code fence is never closed",
        line=opener.number,
        offset=opener.start,
    )


def _same_fence(candidate: str, marker: str) -> bool:
    return candidate[0] == marker[0] and len(candidate) >= len(marker)


def _paragraph_token(text: str, lines: list[_Line]) -> RawToken:
    first, last = lines[0], lines[-1]
    return RawToken(
        kind="paragraph",
        text=_strip_final_break(text[first.start : last.end]),
        line=first.number,
        offset=first.start,
    )


def _strip_final_break(chunk: str) -> str:
    if chunk.endswith("\r\n"):
        return chunk[:-2]
    if chunk.endswith("\n"):
        return chunk[:-1]
    return chunk
