"""Tests for the ingestion pipeline."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from mdchapter import (
    ConversionError,
    IngestionOptions,
    IngestionResult,
    OrphanBlock,
    ingest_chapter,
)


def test_ingest_chapter_text_output(chapter_text: str) -> None:
    encoder = MagicMock()
    with patch("mdchapter.output_formatter.tiktoken", encoder):
        result = ingest_chapter(chapter_text, IngestionOptions(output_format="text"))

    encoder.get_encoding.assert_not_called()

    assert isinstance(result, IngestionResult)
    assert result.summary == (
        "Title: Chapter 11. Strong Coupling and Related Problems\n"
        "Sections: 4\n"
        "Blocks: 8\n"
        "Code samples: 2\n"
        "Format: text"
    )
    assert result.sections_tree == (
        "Sections:\n"
        "Chapter 11. Strong Coupling and Related Problems\n"
        "    Contexts\n"
        "        The Layout\n"
        "    Extensibility"
    )
    assert result.content.startswith("Preamble line before any heading.")


def test_ingest_chapter_reports_token_estimate(chapter_text: str) -> None:
    class _Encoding:
        def encode(self, text: str, disallowed_special: tuple = ()) -> list[int]:
            return [0] * 1500

    class _Tiktoken:
        @staticmethod
        def get_encoding(name: str) -> _Encoding:
            return _Encoding()

    with patch("mdchapter.output_formatter.tiktoken", _Tiktoken):
        result = ingest_chapter(chapter_text, IngestionOptions(estimate_tokens=True))

    assert result.summary.endswith("Estimated tokens: 1.5k")


def test_ingest_chapter_title_is_first_level_one_section() -> None:
    result = ingest_chapter("## Foreword\n\nx\n\n# Chapter 11\n\ny\n")

    assert result.summary.startswith("Title: Chapter 11\n")


def test_ingest_chapter_without_level_one_section_has_no_title() -> None:
    result = ingest_chapter("## Foreword\n\nx\n")

    assert result.summary.startswith("Sections: 1\n")


def test_ingest_chapter_filters_sections(chapter_text: str) -> None:
    options = IngestionOptions(
        output_format="markdown",
        section_filter_mode="exclude",
        sections=["Extensibility"],
    )

    result = ingest_chapter(chapter_text, options)

    assert "## Extensibility" not in result.content
    assert "## Contexts" in result.content
    assert "Extensibility" not in result.sections_tree


def test_ingest_chapter_table_of_contents(chapter_text: str) -> None:
    options = IngestionOptions(output_format="text", include_toc=True)

    result = ingest_chapter(chapter_text, options)

    assert result.content.startswith("Contents\n- Chapter 11.")


def test_ingest_chapter_rejects_unknown_format(chapter_text: str) -> None:
    with pytest.raises(ConversionError):
        ingest_chapter(chapter_text, IngestionOptions(output_format="docx"))


def test_ingest_chapter_rejects_preamble(chapter_text: str) -> None:
    with pytest.raises(OrphanBlock):
        ingest_chapter(chapter_text, IngestionOptions(allow_preamble=False))
