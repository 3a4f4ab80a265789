from __future__ import annotations

import logging
from typing import Tuple

from .model import Block, Callout, ChapterDocument, CodeListing, Figure, Heading, Paragraph

logger = logging.getLogger(__name__)

DISPLAYABLE_BLOCKS = (Heading, Paragraph, CodeListing, Callout, Figure)


def render(document: ChapterDocument) -> Tuple[Block, ...]:
    """Hand the chapter's blocks to a display layer in reading order.

    Blocks are immutable, so they are returned as-is; escaping for the final
    output format is left to the display layer.
    """
    rendered = tuple(_dispatch_block(block, index) for index, block in enumerate(document.blocks))
    logger.debug("Rendered chapter %s: %d blocks", document.id, len(rendered))
    return rendered


def _dispatch_block(block: Block, index: int) -> Block:
    if isinstance(block, DISPLAYABLE_BLOCKS):
        return block
    raise TypeError(f"Block {index} has no display form: {type(block).__name__}")
