from __future__ import annotations

import re
from dataclasses import dataclass

CODE_OPEN_PATTERN = re.compile(r'<pre><code(?:\s+class="language-(?P<lang>[\w+-]+)")?>')
CODE_CLOSE = "</code></pre>"

HEADING_PATTERN = re.compile(r"^<h(?P<level>\d)>(?P<text>.*)</h(?P=level)>$")
FIGURE_PATTERN = re.compile(
    r'^<img\s+src="(?P<src>[^"]*)"(?:\s+alt="(?P<alt>[^"]*)")?\s*/?>$'
)
ITEM_HEADING_PATTERN = re.compile(r"^Item \d+: \S.*$")
# Running page headers repeat an item title followed by a page number.
RUNNING_HEADER_PATTERN = re.compile(r"^Item \d+:.*\s\d+$")

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 3
ITEM_HEADING_LEVEL = 3

CALLOUT_LABEL = "Things to Remember"
CALLOUT_KIND = "remember"
CALLOUT_BULLETS = ("✦", "•")

# Characters that collide with page-module delimiters and the entity each is stored as.
ENTITIES = {
    "{": "&#123;",
    "}": "&#125;",
    "<": "&#60;",
    ">": "&#62;",
}

DEFAULT_CHAPTER_ID = "chapter"


@dataclass(frozen=True)
class ParseOptions:
    """Per-call parser behaviour."""

    chapter_id: str | None = None
    item_headings: bool = True
