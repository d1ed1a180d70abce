"""Tests for document tree models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from mdchapter.schemas import CodeSample, Document, Note, Paragraph, SectionNode


class TestSectionNode:
    """Tests for SectionNode validation."""

    def test_rejects_child_with_same_level(self) -> None:
        with pytest.raises(ValidationError, match="cannot nest"):
            SectionNode(
                title="A",
                level=2,
                children=(SectionNode(title="B", level=2),),
            )

    def test_rejects_level_above_six(self) -> None:
        with pytest.raises(ValidationError):
            SectionNode(title="A", level=7)

    def test_is_frozen(self) -> None:
        section = SectionNode(title="A", level=1)

        with pytest.raises(ValidationError):
            section.title = "B"  # type: ignore[misc]

    def test_children_are_discriminated(self) -> None:
        """Plain dicts are validated into the matching block variant."""
        section = SectionNode.model_validate(
            {
                "title": "A",
                "level": 1,
                "children": [
                    {"kind": "paragraph", "text": "p"},
                    {"kind": "code", "language_hint": "json", "body": "{}"},
                    {"kind": "note", "label": "NB", "text": "n"},
                    {"kind": "section", "title": "B", "level": 2},
                ],
            }
        )

        assert section.blocks == (
            Paragraph(text="p"),
            CodeSample(language_hint="json", body="{}"),
            Note(label="NB", text="n"),
        )
        assert section.subsections == (SectionNode(title="B", level=2),)


class TestDocument:
    """Tests for Document helpers."""

    def test_title_and_iteration(self) -> None:
        document = Document(
            preamble=(Paragraph(text="intro"),),
            sections=(
                SectionNode(
                    title="A",
                    level=1,
                    children=(
                        Paragraph(text="a"),
                        SectionNode(title="B", level=2, children=(Paragraph(text="b"),)),
                    ),
                ),
            ),
        )

        assert document.title == "A"
        assert [section.title for section in document.iter_sections()] == ["A", "B"]
        assert [block.text for block in document.iter_blocks()] == ["intro", "a", "b"]

    def test_title_skips_leading_deeper_sections(self) -> None:
        document = Document(
            sections=(
                SectionNode(title="Foreword", level=2),
                SectionNode(title="Chapter 11", level=1),
            )
        )

        assert document.title == "Chapter 11"

    def test_empty_document_has_no_title(self) -> None:
        assert Document().title is None
