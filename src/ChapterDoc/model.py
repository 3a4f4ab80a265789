from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Tuple

from . import entities
from .validation import validate_blocks


@dataclass(frozen=True)
class Block:
    """Base class for block-level nodes."""

    block_type: ClassVar[str] = "block"


@dataclass(frozen=True)
class ChapterDocument:
    id: str
    title: str
    blocks: Tuple[Block, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "blocks", tuple(self.blocks))
        validate_blocks(self.blocks)


@dataclass(frozen=True)
class Heading(Block):
    block_type: ClassVar[str] = "heading"

    level: int
    text: str


@dataclass(frozen=True)
class Paragraph(Block):
    block_type: ClassVar[str] = "paragraph"

    text: str


@dataclass(frozen=True)
class CodeListing(Block):
    block_type: ClassVar[str] = "code"

    code: str
    language: str | None = None

    @property
    def raw(self) -> str:
        """Listing text with the fixed entities applied, as it appears in a page module."""
        return entities.encode_entities(self.code)


@dataclass(frozen=True)
class Callout(Block):
    block_type: ClassVar[str] = "callout"

    kind: str = field(default="remember", kw_only=True)
    items: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class Figure(Block):
    block_type: ClassVar[str] = "figure"

    caption: str
    reference: str


@dataclass(frozen=True)
class InlineElement:
    """Base class for inline nodes."""


@dataclass(frozen=True)
class InlineText(InlineElement):
    text: str
    bold: bool = False
    italic: bool = False
    code: bool = False


@dataclass(frozen=True)
class InlineLink(InlineElement):
    text: str
    url: str
