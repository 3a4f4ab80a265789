from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Sequence

from markdown_it import MarkdownIt

from .model import InlineElement, InlineLink, InlineText, Paragraph


def parse_inline(text: str) -> List[InlineElement]:
    """Split paragraph text into styled spans.

    Block text is already entity-decoded, so HTML and entity rules are off and
    characters such as ``<`` or ``&#123;`` come through as plain text.
    """
    md = MarkdownIt("commonmark").disable(["html_inline", "entity"])
    tokens = md.parseInline(text)
    if not tokens:
        return []
    return _spans_from_tokens(tokens[0].children or [])


def paragraph_spans(paragraph: Paragraph) -> List[InlineElement]:
    return parse_inline(paragraph.text)


def plain_text(elements: Iterable[InlineElement]) -> str:
    parts: list[str] = []
    for element in elements:
        if isinstance(element, (InlineText, InlineLink)):
            parts.append(element.text)
    return "".join(parts)


# Opening/closing tokens and the style flag they switch.
_STYLE_TOGGLES = {
    "em_open": ("italic", True),
    "em_close": ("italic", False),
    "strong_open": ("bold", True),
    "strong_close": ("bold", False),
}


def _spans_from_tokens(tokens: Sequence) -> List[InlineElement]:
    spans: List[InlineElement] = []
    style = {"bold": False, "italic": False}
    link: InlineLink | None = None
    for tok in tokens:
        if tok.type in _STYLE_TOGGLES:
            flag, value = _STYLE_TOGGLES[tok.type]
            style[flag] = value
        elif tok.type == "link_open":
            link = InlineLink(text="", url=tok.attrGet("href") or "")
        elif tok.type == "link_close" and link is not None:
            spans.append(link if link.text else replace(link, text=link.url))
            link = None
        elif tok.type in {"text", "code_inline", "softbreak", "hardbreak", "image"}:
            content = " " if tok.type.endswith("break") else tok.content or ""
            if link is not None:
                link = replace(link, text=link.text + content)
            else:
                _append_text(spans, InlineText(content, code=tok.type == "code_inline", **style))
    return spans


def _append_text(spans: List[InlineElement], span: InlineText) -> None:
    previous = spans[-1] if spans else None
    if (
        isinstance(previous, InlineText)
        and (previous.bold, previous.italic, previous.code) == (span.bold, span.italic, span.code)
    ):
        spans[-1] = replace(previous, text=previous.text + span.text)
    else:
        spans.append(span)
