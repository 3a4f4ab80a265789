from ChapterDoc import page_parser
from ChapterDoc.entities import (
    decode_entities,
    encode_entities,
    find_bare_delimiter,
    find_truncated_entity,
)


def test_decode_fixed_entities_only():
    assert decode_entities("if (a &#60; b) &#123; x(); &#125;") == "if (a < b) { x(); }"
    assert decode_entities("a &#62; b") == "a > b"
    assert decode_entities("a && b &amp; &#38;") == "a && b &amp; &#38;"


def test_code_listing_round_trip_is_exact():
    raw = "\nif (!this.JSON) &#123;\nthis.JSON = &#123;\nparse: ...,\n&#125;;\n&#125;\n"
    document = page_parser.parse("<h1>JSON</h1>\n<pre><code>" + raw + "</code></pre>\n")
    listing = document.blocks[1]
    assert "{" in listing.code and "&#123;" not in listing.code
    assert encode_entities(listing.code) == raw
    assert listing.raw == raw


def test_truncated_entity_detection():
    assert find_truncated_entity("x &#123; y") is None
    assert find_truncated_entity("x &#123") == 2
    assert find_truncated_entity("x &# y") is None
    assert find_truncated_entity("s = '&#x41;'") is None
    assert find_truncated_entity("&#60 b") == 0


def test_bare_delimiter_detection():
    assert find_bare_delimiter("a &#60; b && c") is None
    assert find_bare_delimiter("a < b") == 2
