from __future__ import annotations

import logging
from typing import Any, List

import yaml

from .errors import ValidationError
from .model import Block, Callout, ChapterDocument, CodeListing, Figure, Heading, Paragraph
from .settings import CALLOUT_KIND, DEFAULT_CHAPTER_ID
from .utils import slugify

logger = logging.getLogger(__name__)


def parse_yaml_chapter(text: str) -> ChapterDocument:
    """Parse a constrained YAML chapter into a ChapterDocument.

    Expected layout::

        id: variable-scope
        title: Variable Scope
        body:
          - heading: Variable Scope
            level: 1
          - Plain strings are paragraphs.
          - code: "var i, n, sum;"
            language: js
          - remember:
              - Avoid declaring global variables.
          - figure: images/scope-chain.png
            caption: The scope chain

    YAML strings are already literal, so no entity decoding is applied.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValidationError(f"invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ValidationError("YAML root must be a mapping with id, title and body.")

    body = data.get("body")
    if not isinstance(body, list):
        raise ValidationError("YAML chapter needs a 'body' list")

    blocks = _parse_body_sequence(body)
    title = str(data.get("title") or _first_heading_text(blocks))
    chapter_id = str(data.get("id") or slugify(title) or DEFAULT_CHAPTER_ID)
    document = ChapterDocument(id=chapter_id, title=title, blocks=tuple(blocks))
    logger.debug("Parsed YAML chapter %s: %d blocks", document.id, len(document.blocks))
    return document


def _parse_body_sequence(body: list) -> List[Block]:
    """Parse an ordered list of block descriptors."""
    blocks: List[Block] = []
    for index, entry in enumerate(body):
        if isinstance(entry, str):
            blocks.append(Paragraph(text=entry))
            continue
        if not isinstance(entry, dict):
            raise ValidationError(f"unsupported body entry of type {type(entry).__name__}", index)
        if "heading" in entry:
            blocks.append(Heading(level=_heading_level(entry.get("level", 1), index), text=str(entry["heading"])))
        elif "paragraph" in entry:
            blocks.append(Paragraph(text=str(entry["paragraph"])))
        elif "code" in entry:
            language = entry.get("language")
            blocks.append(CodeListing(code=str(entry["code"]), language=str(language) if language else None))
        elif "remember" in entry:
            blocks.append(Callout(items=_callout_items(entry["remember"], index), kind=CALLOUT_KIND))
        elif "figure" in entry:
            blocks.append(Figure(caption=str(entry.get("caption") or ""), reference=str(entry["figure"])))
        else:
            raise ValidationError(f"unrecognised body entry with keys {sorted(map(str, entry))}", index)
    return blocks


def _heading_level(value: Any, index: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"heading level {value!r} is not a number", index) from exc


def _callout_items(value, index: int) -> tuple[str, ...]:
    values = value if isinstance(value, (list, tuple)) else [value]
    if any(item is None for item in values):
        raise ValidationError("callout item is empty", index)
    return tuple(str(item) for item in values)


def _first_heading_text(blocks: List[Block]) -> str:
    for block in blocks:
        if isinstance(block, Heading):
            return block.text
    return ""
