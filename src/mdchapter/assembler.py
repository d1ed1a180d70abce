"""Nest classified blocks under their headings to build a document tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

from mdchapter.config import MDCHAPTER_ALLOW_PREAMBLE
from mdchapter.exceptions import OrphanBlock
from mdchapter.schemas import Block, Document, Heading, SectionNode
from mdchapter.tokenizer import RawToken


@dataclass
class _OpenSection:
    level: int
    title: str
    children: list[Union[Block, "_OpenSection"]] = field(default_factory=list)

    def freeze(self) -> SectionNode:
        return SectionNode(
            title=self.title,
            level=self.level,
            children=tuple(
                child.freeze() if isinstance(child, _OpenSection) else child
                for child in self.children
            ),
        )


class DocumentBuilder:
    """Mutable builder holding the stack of currently open sections.

    A heading closes every open section whose level is not strictly lower
    than its own, so a shallower heading after deeper ones becomes a sibling
    of the nearest ancestor with a lower level.
    """

    def __init__(self, *, allow_preamble: bool = MDCHAPTER_ALLOW_PREAMBLE) -> None:
        self.allow_preamble = allow_preamble
        self._preamble: list[Block] = []
        self._roots: list[_OpenSection] = []
        self._stack: list[_OpenSection] = []

    @property
    def depth(self) -> int:
        """Number of currently open sections."""
        return len(self._stack)

    def add_heading(self, heading: Heading) -> None:
        while self._stack and self._stack[-1].level >= heading.level:
            self._stack.pop()
        section = _OpenSection(level=heading.level, title=heading.title)
        if self._stack:
            self._stack[-1].children.append(section)
        else:
            self._roots.append(section)
        self._stack.append(section)

    def add_block(self, block: Block, *, line: int = 0, offset: int = 0) -> None:
        """Append a block to the innermost open section.

        Raises:
            OrphanBlock: If no section is open and preamble is disallowed.
        """
        if self._stack:
            self._stack[-1].children.append(block)
            return
        if not self.allow_preamble:
            raise OrphanBlock(
                f"{block.kind.capitalize()} appears before the first heading",
                line=line,
                offset=offset,
            )
        self._preamble.append(block)

    def build(self) -> Document:
        """Return the immutable document for everything added so far."""
        return Document(
            preamble=tuple(self._preamble),
            sections=tuple(section.freeze() for section in self._roots),
        )


def assemble(
    items: Iterable[tuple[Union[Heading, Block], RawToken]],
    *,
    allow_preamble: bool = MDCHAPTER_ALLOW_PREAMBLE,
) -> Document:
    """Build a document from classified items paired with their tokens."""
    builder = DocumentBuilder(allow_preamble=allow_preamble)
    for item, token in items:
        if isinstance(item, Heading):
            builder.add_heading(item)
        else:
            builder.add_block(item, line=token.line, offset=token.offset)
    return builder.build()
