"""Tests for the end-to-end chapter parser."""

from __future__ import annotations

import pytest

from mdchapter import (
    CodeSample,
    Document,
    MalformedFence,
    Note,
    OrphanBlock,
    Paragraph,
    Quote,
    SectionNode,
    UnsupportedHeadingLevel,
    parse_chapter,
)


def test_parses_nested_sections_with_code() -> None:
    text = '# Title\n\nSome text.\n\n## Sub\n\n```json\n{"a":1}\n```\n'

    document = parse_chapter(text)

    assert document == Document(
        sections=(
            SectionNode(
                title="Title",
                level=1,
                children=(
                    Paragraph(text="Some text."),
                    SectionNode(
                        title="Sub",
                        level=2,
                        children=(CodeSample(language_hint="json", body='{"a":1}'),),
                    ),
                ),
            ),
        )
    )


def test_unclosed_fence_reports_opener_offset() -> None:
    with pytest.raises(MalformedFence) as exc_info:
        parse_chapter("# Title\n\n```json\n{\n")

    assert exc_info.value.line == 3
    assert exc_info.value.offset == 9


def test_rejects_heading_level_seven() -> None:
    with pytest.raises(UnsupportedHeadingLevel) as exc_info:
        parse_chapter("# Title\n\n####### Too deep\n")

    assert exc_info.value.line == 3


def test_rejects_preamble_when_disallowed() -> None:
    with pytest.raises(OrphanBlock) as exc_info:
        parse_chapter("Intro\n\n# Title\n", allow_preamble=False)

    assert (exc_info.value.line, exc_info.value.offset) == (1, 0)


def test_parse_is_deterministic(chapter_text: str) -> None:
    assert parse_chapter(chapter_text) == parse_chapter(chapter_text)


def test_child_levels_exceed_parent_levels(chapter_text: str) -> None:
    document = parse_chapter(chapter_text)

    for section in document.iter_sections():
        for child in section.subsections:
            assert child.level > section.level


def test_code_bodies_match_source_substrings(chapter_text: str) -> None:
    """Each body sits between its fence delimiters in the source."""
    document = parse_chapter(chapter_text)

    samples = [block for block in document.iter_blocks() if isinstance(block, CodeSample)]

    assert [sample.language_hint for sample in samples] == ["json", "text"]
    assert "```json\n" + samples[0].body + "\n```" in chapter_text
    assert "```\n" + samples[1].body + "\n```" in chapter_text
    assert samples[0].body.startswith("// Request\nPOST /v1/orders\n{\n  ")


def test_classifies_chapter_blocks(chapter_text: str) -> None:
    document = parse_chapter(chapter_text)

    assert document.preamble == (Paragraph(text="Preamble line before any heading."),)
    assert [section.title for section in document.iter_sections()] == [
        "Chapter 11. Strong Coupling and Related Problems",
        "Contexts",
        "The Layout",
        "Extensibility",
    ]
    layout = document.sections[0].subsections[0].subsections[0]
    assert layout.blocks == (
        Quote(text="Low-level entities must not define\nhigh-level ones."),
        Note(label="Note", text="the `recipe` field is optional[^1]."),
    )


def test_custom_labels_and_language() -> None:
    document = parse_chapter(
        "# T\n\nCaution: hot\n\n```\nx\n```",
        admonition_labels=["Caution"],
        default_language="plain",
    )

    assert document.sections[0].blocks == (
        Note(label="Caution", text="hot"),
        CodeSample(language_hint="plain", body="x"),
    )


def test_empty_input() -> None:
    assert parse_chapter("") == Document()
