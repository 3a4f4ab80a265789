from __future__ import annotations

from typing import Sequence

from .errors import ValidationError
from .settings import CALLOUT_KIND, MAX_HEADING_LEVEL, MIN_HEADING_LEVEL


def validate_blocks(blocks: Sequence) -> None:
    """Check document-level invariants, raising ValidationError on the first violation."""
    if not blocks:
        raise ValidationError("chapter has no blocks")

    lowest_seen: int | None = None
    for index, block in enumerate(blocks):
        block_type = getattr(block, "block_type", None)
        if block_type is None:
            raise ValidationError(f"not a block: {type(block).__name__}", index)
        if block_type == "heading":
            _check_heading(block, index, lowest_seen)
            lowest_seen = block.level if lowest_seen is None else min(lowest_seen, block.level)
        elif block_type == "callout":
            _check_callout(block, index)


def check_heading_level(level: int, index: int | None) -> None:
    if not MIN_HEADING_LEVEL <= level <= MAX_HEADING_LEVEL:
        raise ValidationError(
            f"heading level {level} outside {MIN_HEADING_LEVEL}..{MAX_HEADING_LEVEL}", index
        )


def _check_heading(block, index: int, lowest_seen: int | None) -> None:
    check_heading_level(block.level, index)
    if block.level == MIN_HEADING_LEVEL:
        return
    # Any earlier heading of a lower level is an acceptable parent; levels may be skipped.
    if lowest_seen is None or lowest_seen >= block.level:
        raise ValidationError(
            f"level-{block.level} heading {block.text!r} has no enclosing heading", index
        )


def _check_callout(block, index: int) -> None:
    if block.kind != CALLOUT_KIND:
        raise ValidationError(f"unknown callout kind {block.kind!r}", index)
    if not block.items:
        raise ValidationError("callout has no items", index)
    if any(not item.strip() for item in block.items):
        raise ValidationError("callout has an empty item", index)
