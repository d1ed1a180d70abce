"""Section tree models."""

from __future__ import annotations

from typing import Annotated, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mdchapter.schemas.blocks import CodeSample, Note, Paragraph, Quote


SectionChild = Annotated[
    Union[Paragraph, CodeSample, Note, Quote, "SectionNode"],
    Field(discriminator="kind"),
]


class SectionNode(BaseModel):
    """A heading and the content it owns, nested by heading level."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["section"] = "section"
    title: str
    level: int = Field(..., ge=1, le=6)
    children: tuple[SectionChild, ...] = ()

    @model_validator(mode="after")
    def check_nesting(self) -> "SectionNode":
        for child in self.children:
            if isinstance(child, SectionNode) and child.level <= self.level:
                raise ValueError(
                    f"section {child.title!r} (level {child.level}) cannot nest "
                    f"under {self.title!r} (level {self.level})"
                )
        return self

    @property
    def blocks(self) -> tuple[Paragraph | CodeSample | Note | Quote, ...]:
        """Direct non-section children in source order."""
        return tuple(child for child in self.children if not isinstance(child, SectionNode))

    @property
    def subsections(self) -> tuple["SectionNode", ...]:
        """Direct child sections in source order."""
        return tuple(child for child in self.children if isinstance(child, SectionNode))

    def iter_sections(self) -> Iterator["SectionNode"]:
        """Yield this section and all descendants depth-first."""
        yield self
        for child in self.subsections:
            yield from child.iter_sections()


SectionNode.model_rebuild()
