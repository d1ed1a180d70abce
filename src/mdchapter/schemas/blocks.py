"""Block-level content models."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Paragraph(BaseModel):
    """A prose paragraph."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["paragraph"] = "paragraph"
    text: str


class CodeSample(BaseModel):
    """A fenced code sample.

    Attributes:
        language_hint: The fence annotation, or the configured default.
        body: The literal text between the fence delimiters, byte-for-byte.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["code"] = "code"
    language_hint: str = "text"
    body: str


class Note(BaseModel):
    """An admonition paragraph such as ``NB: ...``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["note"] = "note"
    label: str
    text: str


class Quote(BaseModel):
    """A blockquote paragraph with its ``>`` markers stripped."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["quote"] = "quote"
    text: str


class Heading(BaseModel):
    """A classified heading line; turned into a section by the assembler."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["heading"] = "heading"
    level: int = Field(..., ge=1)
    title: str


Block = Annotated[
    Union[Paragraph, CodeSample, Note, Quote],
    Field(discriminator="kind"),
]
