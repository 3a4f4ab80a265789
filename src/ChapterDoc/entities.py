from __future__ import annotations

import re

from .settings import ENTITIES

_DECODE = {entity: char for char, entity in ENTITIES.items()}
_DECODE_PATTERN = re.compile("|".join(re.escape(entity) for entity in _DECODE))
_ENCODE_PATTERN = re.compile("[" + re.escape("".join(ENTITIES)) + "]")
_TRUNCATED_PATTERN = re.compile(r"&#\d+(?![\d;])")


def decode_entities(text: str) -> str:
    """Replace the fixed delimiter entities with the characters they stand for.

    Any other ``&`` sequence is literal text and is left alone.
    """
    return _DECODE_PATTERN.sub(lambda match: _DECODE[match.group(0)], text)


def encode_entities(text: str) -> str:
    """Inverse of :func:`decode_entities` for text without bare delimiters."""
    return _ENCODE_PATTERN.sub(lambda match: ENTITIES[match.group(0)], text)


def find_truncated_entity(raw: str) -> int | None:
    """Offset of a decimal entity such as ``&#123`` that is cut off before its ``;``."""
    match = _TRUNCATED_PATTERN.search(raw)
    return match.start() if match else None


def find_bare_delimiter(raw: str) -> int | None:
    """Offset of a delimiter character that should have been stored as an entity."""
    match = _ENCODE_PATTERN.search(raw)
    return match.start() if match else None
