from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import List

from .entities import decode_entities, find_bare_delimiter, find_truncated_entity
from .errors import ValidationError
from .model import Block, Callout, ChapterDocument, CodeListing, Figure, Heading, Paragraph
from .settings import (
    CALLOUT_BULLETS,
    CALLOUT_KIND,
    CALLOUT_LABEL,
    CODE_CLOSE,
    CODE_OPEN_PATTERN,
    DEFAULT_CHAPTER_ID,
    FIGURE_PATTERN,
    HEADING_PATTERN,
    ITEM_HEADING_LEVEL,
    ITEM_HEADING_PATTERN,
    RUNNING_HEADER_PATTERN,
    ParseOptions,
)
from .utils import chapter_id_from_path, read_page_module, slugify
from .validation import check_heading_level

logger = logging.getLogger(__name__)


def parse(raw: str, options: ParseOptions | None = None) -> ChapterDocument:
    """Parse one page module into a validated ChapterDocument.

    Raises ValidationError when the content is empty, a code listing is
    malformed or unterminated, or headings are not properly nested.
    """
    options = options or ParseOptions()
    blocks = _parse_blocks(raw.splitlines(keepends=True), options)
    if not blocks:
        raise ValidationError("chapter has no blocks")

    title = _document_title(blocks)
    chapter_id = options.chapter_id or slugify(title) or DEFAULT_CHAPTER_ID
    document = ChapterDocument(id=chapter_id, title=title, blocks=tuple(blocks))
    logger.debug("Parsed chapter %s: %d blocks", document.id, len(document.blocks))
    return document


def parse_file(path: str | Path, options: ParseOptions | None = None) -> ChapterDocument:
    path = Path(path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Page module not found: {path}")
    logger.info("Reading %s", path)
    options = options or ParseOptions()
    if options.chapter_id is None:
        options = replace(options, chapter_id=chapter_id_from_path(path))
    return parse(read_page_module(path), options)


def _parse_blocks(lines: List[str], options: ParseOptions) -> List[Block]:
    blocks: List[Block] = []
    i = 0
    while i < len(lines):
        text = lines[i].strip()
        if not text:
            i += 1
            continue
        opener = CODE_OPEN_PATTERN.match(text)
        if opener:
            start = lines[i].index(opener.group(0)) + len(opener.group(0))
            listing, i = _parse_code_listing(lines, i, start, len(blocks), opener.group("lang"))
            blocks.append(listing)
        elif CODE_CLOSE in text:
            raise ValidationError("code listing end marker without a begin marker", len(blocks))
        elif _bullet_of(text) is not None:
            raise ValidationError(f"bullet outside a {CALLOUT_LABEL!r} list", len(blocks))
        elif HEADING_PATTERN.match(text):
            match = HEADING_PATTERN.match(text)
            level = int(match.group("level"))
            check_heading_level(level, len(blocks))
            blocks.append(Heading(level=level, text=decode_entities(match.group("text").strip())))
            i += 1
        elif text == CALLOUT_LABEL:
            callout, i = _parse_callout(lines, i + 1, len(blocks))
            blocks.append(callout)
        elif FIGURE_PATTERN.match(text):
            match = FIGURE_PATTERN.match(text)
            caption = decode_entities(match.group("alt") or "")
            blocks.append(Figure(caption=caption, reference=match.group("src")))
            i += 1
        elif options.item_headings and _is_item_heading(text):
            blocks.append(Heading(level=ITEM_HEADING_LEVEL, text=decode_entities(text)))
            i += 1
        else:
            blocks.append(Paragraph(text=decode_entities(text)))
            i += 1
    return blocks


def _parse_code_listing(
    lines: List[str], index: int, start: int, block_index: int, language: str | None
) -> tuple[CodeListing, int]:
    parts: list[str] = []
    chunk = lines[index][start:]
    i = index
    while True:
        end = chunk.find(CODE_CLOSE)
        body = chunk if end == -1 else chunk[:end]
        if CODE_OPEN_PATTERN.search(body):
            raise ValidationError("code listing is not terminated before the next listing", block_index)
        parts.append(body)
        if end != -1:
            break
        i += 1
        if i >= len(lines):
            raise ValidationError("code listing is not terminated", block_index)
        chunk = lines[i]

    remainder = chunk[end + len(CODE_CLOSE):]
    if remainder.strip():
        # Text sharing a line with the end marker is scanned as its own line.
        lines[i] = remainder
    else:
        i += 1

    raw = "".join(parts)
    offset = find_truncated_entity(raw)
    if offset is not None:
        raise ValidationError(f"truncated entity at offset {offset} in code listing", block_index)
    offset = find_bare_delimiter(raw)
    if offset is not None:
        raise ValidationError(
            f"unencoded delimiter {raw[offset]!r} at offset {offset} in code listing", block_index
        )
    return CodeListing(code=decode_entities(raw), language=language), i


def _parse_callout(lines: List[str], index: int, block_index: int) -> tuple[Callout, int]:
    items: list[str] = []
    i = index
    while i < len(lines):
        text = lines[i].strip()
        if not text:
            if items:
                break
            i += 1
            continue
        bullet = _bullet_of(text)
        if bullet is not None:
            items.append(decode_entities(text[len(bullet):].strip()))
        elif items and not _is_structural(text):
            # Items wrap onto following lines until a blank line or the next bullet.
            items[-1] = f"{items[-1]} {decode_entities(text)}"
        else:
            break
        i += 1
    if not items:
        raise ValidationError(f"{CALLOUT_LABEL!r} has no items", block_index)
    return Callout(items=tuple(items), kind=CALLOUT_KIND), i


def _bullet_of(text: str) -> str | None:
    return next((glyph for glyph in CALLOUT_BULLETS if text.startswith(glyph)), None)


def _is_structural(text: str) -> bool:
    return bool(
        CODE_OPEN_PATTERN.match(text)
        or CODE_CLOSE in text
        or HEADING_PATTERN.match(text)
        or FIGURE_PATTERN.match(text)
        or ITEM_HEADING_PATTERN.match(text)
        or text == CALLOUT_LABEL
    )


def _is_item_heading(text: str) -> bool:
    return bool(ITEM_HEADING_PATTERN.match(text)) and not RUNNING_HEADER_PATTERN.match(text)


def _document_title(blocks: List[Block]) -> str:
    headings = [block for block in blocks if isinstance(block, Heading)]
    for heading in headings:
        if heading.level == 1:
            return heading.text
    logger.warning("Chapter has no level-1 heading; falling back to the first heading")
    return headings[0].text if headings else ""
