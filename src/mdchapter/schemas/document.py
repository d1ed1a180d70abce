"""Document root model."""

from __future__ import annotations

from typing import Iterator

from pydantic import BaseModel, ConfigDict

from mdchapter.schemas.blocks import Block
from mdchapter.schemas.sections import SectionNode


class Document(BaseModel):
    """A parsed chapter.

    Attributes:
        preamble: Blocks that precede the first heading.
        sections: Top-level sections in source order.
    """

    model_config = ConfigDict(frozen=True)

    preamble: tuple[Block, ...] = ()
    sections: tuple[SectionNode, ...] = ()

    @property
    def title(self) -> str | None:
        """Title of the first level-1 section, if any."""
        return next((section.title for section in self.sections if section.level == 1), None)

    def iter_sections(self) -> Iterator[SectionNode]:
        """Yield every section depth-first in source order."""
        for section in self.sections:
            yield from section.iter_sections()

    def iter_blocks(self) -> Iterator[Block]:
        """Yield every block depth-first in source order, preamble first."""
        yield from self.preamble
        for section in self.iter_sections():
            yield from section.blocks
