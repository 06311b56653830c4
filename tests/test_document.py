# topmark:header:start
#
#   project      : Headmatter
#   file         : test_document.py
#   file_relpath : tests/test_document.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `headmatter.document.Document` and header-block detection."""

from __future__ import annotations

from headmatter.collection import HeaderCollection
from headmatter.document import Document, has_header_block
from headmatter.header import Header
from tests.conftest import parametrize

SAMPLE: str = "Title: Hello\nPublished-On: 2025-01-01\n\nFirst paragraph.\n\nSecond one.\n"


def test_parse_empty_text() -> None:
    document: Document = Document.parse("")
    assert len(document.headers) == 0
    assert document.content == ""


def test_parse_header_only_input() -> None:
    document: Document = Document.parse("foo: bar")
    assert document.content == ""
    foo: Header | None = document.headers.get("foo")
    assert foo is not None
    assert foo.value == "bar"


def test_parse_splits_value_at_first_colon() -> None:
    foo: Header | None = Document.parse("foo: bar:baz").headers.get("foo")
    assert foo is not None
    assert foo.value == "bar:baz"


def test_parse_crlf_header_block() -> None:
    document: Document = Document.parse("A-Header: one\r\nB-Header: two\r\n\r\nbody")
    b_header: Header | None = document.headers.get("b_header")
    assert b_header is not None
    assert b_header.value == "two"
    assert document.content == "body"


def test_parse_keeps_everything_after_first_separator() -> None:
    document: Document = Document.parse(SAMPLE)
    assert document.headers.to_dict() == {"title": "Hello", "published_on": "2025-01-01"}
    assert document.content == "First paragraph.\n\nSecond one.\n"


def test_parse_body_lines_with_colons_stay_in_body() -> None:
    document: Document = Document.parse("A: 1\n\nnote: this is body text\n")
    assert document.headers.keys() == ["a"]
    assert document.content == "note: this is body text\n"


@parametrize(
    "text",
    [
        "Just a body.\n\nWith paragraphs.",
        "Dear: Sir\nThis line has no separator\n\nbody",
        "plain text without any separator",
        "   \n\n   ",
    ],
)
def test_parse_without_header_block_keeps_text_as_body(text: str) -> None:
    document: Document = Document.parse(text)
    assert len(document.headers) == 0
    assert document.content == text
    assert not has_header_block(text)


@parametrize(
    "text, expected",
    [
        ("A: 1\n\nbody", True),
        ("A: 1\nB: 2", True),
        ("A: 1\r\n\r\nbody", True),
        ("", False),
        ("body only", False),
        ("A: 1\nbody\n\nmore", False),
    ],
)
def test_has_header_block(text: str, expected: bool) -> None:
    assert has_header_block(text) is expected
    assert Document.has_header_block(text) is expected


def test_parse_key_transform_is_used_for_keys() -> None:
    document: Document = Document.parse("A-B: 1\n\nbody", key_transform=str.lower)
    assert document.headers.keys() == ["a-b"]


def test_compose_round_trips_canonical_text() -> None:
    text = "A-Header: one\nB-Header: two\n\nbody\n"
    assert Document.parse(text).compose() == text


def test_compose_header_only_and_body_only() -> None:
    assert Document.parse("A: 1\nB: 2").compose() == "A: 1\nB: 2"
    assert Document.parse("just body").compose() == "just body"
    assert Document("body").compose() == "body"


def test_compose_normalizes_separator_whitespace_and_line_breaks() -> None:
    document: Document = Document.parse("A  :  1\r\nB:2\r\n\r\nbody\r\n")
    assert document.compose() == "A: 1\nB: 2\n\nbody\r\n"


def test_compose_dynamic_and_overrides() -> None:
    document: Document = Document.parse("content-md5: abc\nSUBJECT: hi\n\nbody")
    assert document.compose(dynamic=True) == "Content-Md: abc\nSubject: hi\n\nbody"
    assert (
        document.compose(overrides={"content_md": "Content-MD5"})
        == "Content-MD5: abc\nSUBJECT: hi\n\nbody"
    )
    # overrides are ignored when rendering dynamically
    assert document.compose(dynamic=True, overrides={"subject": "X"}).startswith("Content-Md")


def test_text_operations_touch_only_the_body() -> None:
    document: Document = Document.parse(SAMPLE)
    headers_before: str = document.headers.to_text()

    document.upper()
    assert document.content == "FIRST PARAGRAPH.\n\nSECOND ONE.\n"
    document.lower()
    document.strip()
    assert document.content == "first paragraph.\n\nsecond one."
    document.replace("paragraph", "para")
    document.prepend("> ")
    document.append("!")
    assert document.content == "> first para.\n\nsecond one.!"
    document.swapcase()
    assert document.content.startswith("> FIRST")
    document.apply(lambda s: s.split("\n")[0])
    assert document.content == "> FIRST PARA."
    document.reverse()
    assert document.content == ".ARAP TSRIF >"

    assert document.headers.to_text() == headers_before


def test_text_protocol_reads_the_body() -> None:
    document: Document = Document.parse("A: 1\n\nhello world")
    assert str(document) == "hello world"
    assert document.to_text() == "hello world"
    assert len(document) == len("hello world")
    assert "world" in document
    assert "A: 1" not in document
    assert 3 not in document


def test_add_returns_new_document_with_same_headers() -> None:
    document: Document = Document.parse("A: 1\n\nhello")
    combined = document + " world"
    assert combined.content == "hello world"
    assert combined.headers == document.headers
    assert combined.headers is not document.headers
    assert combined.headers["a"] is not document.headers["a"]
    assert document.content == "hello"

    combined.headers["a"].value = "changed"
    combined.headers.add("b", "2")
    assert document.headers.to_dict() == {"a": "1"}

    assert (document + Document("!")).content == "hello!"


def test_update_headers_renames_in_place() -> None:
    document: Document = Document.parse("A-Header-Value: 1\nOther: 2\n\nbody")
    target: Header = document.headers["a_header_value"]

    changed: HeaderCollection = document.update_headers(
        {"a_header_value": {"raw": "X", "key": "y"}}
    )

    renamed: Header | None = document.headers.get("y")
    assert renamed is target
    assert renamed.raw == "X"
    assert document.headers.get("a_header_value") is None
    assert len(changed) == 1
    assert next(iter(changed)) is target
    assert document.compose() == "X: 1\nOther: 2\n\nbody"


def test_update_headers_partial_and_unknown_entries() -> None:
    document: Document = Document.parse("A: 1\nB: 2")
    changed: HeaderCollection = document.update_headers({"a": {"raw": "AA"}, "zzz": {"key": "q"}})
    assert [h.raw for h in changed] == ["AA"]
    assert document.headers.keys() == ["a", "b"]

    assert len(document.update_headers({})) == 0


def test_document_equality() -> None:
    assert Document.parse("A: 1\nB: 2\n\nx") == Document.parse("B: 2\nA: 1\n\nx")
    assert Document.parse("A: 1\n\nx") != Document.parse("A: 1\n\ny")
    assert Document.parse("A: 1\n\nx") != Document.parse("A: 2\n\nx")
    assert Document("x") != "x"


def test_default_document_is_empty() -> None:
    document = Document()
    assert document.content == ""
    assert len(document.headers) == 0
    assert repr(document) == "Document(content='', headers=HeaderCollection({}))"


@parametrize("separator", ["\x0c", "\u2028"])
def test_parse_keeps_unicode_line_separators_in_header_values(separator: str) -> None:
    text: str = f"Title: a{separator}b\n\nbody"
    assert has_header_block(text)
    document: Document = Document.parse(text)
    assert document.headers["title"].value == f"a{separator}b"
    assert document.content == "body"
