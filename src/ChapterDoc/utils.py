from __future__ import annotations

import re
import unicodedata
from pathlib import Path


def read_page_module(path: Path) -> str:
    # newline="" keeps \r\n inside code listings intact
    with path.open(encoding="utf-8", newline="") as handle:
        return handle.read()


def slugify(text: str) -> str:
    """Lowercase ASCII slug used for chapter ids."""
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^\w\s-]", "", normalized.lower())
    return re.sub(r"[-\s_]+", "-", slug).strip("-")


def chapter_id_from_path(path: Path) -> str:
    return slugify(path.stem)
