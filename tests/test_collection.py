# topmark:header:start
#
#   project      : Headmatter
#   file         : test_collection.py
#   file_relpath : tests/test_collection.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `headmatter.collection.HeaderCollection`."""

from __future__ import annotations

import logging

import pytest

from headmatter.collection import HeaderCollection
from headmatter.header import Header
from headmatter.transforms import NameTransforms, default_transforms


def _collection() -> HeaderCollection:
    return HeaderCollection.parse("Content-Type: text/plain\nContent-MD5: abc\nSubject: hello")


def test_parse_keeps_order() -> None:
    headers: HeaderCollection = _collection()
    assert headers.keys() == ["content_type", "content_md", "subject"]
    assert [h.raw for h in headers] == ["Content-Type", "Content-MD5", "Subject"]
    assert len(headers) == 3


def test_parse_handles_crlf_and_blank_lines() -> None:
    headers = HeaderCollection.parse("A: 1\r\n\r\nB: 2\r\n")
    assert headers.to_dict() == {"a": "1", "b": "2"}


def test_parse_skips_malformed_lines(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="headmatter.collection"):
        headers = HeaderCollection.parse("A: 1\nnot a header\nB: 2")
    assert headers.keys() == ["a", "b"]
    assert "Skipping header line 2" in caplog.text


@pytest.mark.parametrize("separator", ["\x0b", "\x0c", "\x1c", "\x85", "\u2028", "\u2029"])
def test_parse_keeps_unicode_line_separators_in_values(
    separator: str, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="headmatter.collection"):
        headers = HeaderCollection.parse(f"A: x{separator}y\nB: 2")
    assert headers.to_dict() == {"a": f"x{separator}y", "b": "2"}
    assert "Skipping" not in caplog.text


def test_parse_empty_text() -> None:
    assert len(HeaderCollection.parse("")) == 0
    assert HeaderCollection.parse("") == HeaderCollection()


def test_parse_key_transform_applies_to_keys_only() -> None:
    headers = HeaderCollection.parse("Content-Type: x", key_transform=str.lower)
    assert headers.keys() == ["content-type"]
    assert headers.key_transform is None
    assert headers["content-type"].key_transform is None


def test_get_returns_first_match() -> None:
    headers = HeaderCollection.parse("Tag: one\ntag: two")
    first: Header | None = headers.get("tag")
    assert first is not None
    assert first.value == "one"
    assert headers.get("missing") is None
    assert headers.to_dict() == {"tag": "one"}


def test_mapping_style_access() -> None:
    headers: HeaderCollection = _collection()
    assert headers["subject"].value == "hello"
    assert "subject" in headers
    assert "missing" not in headers
    with pytest.raises(KeyError):
        headers["missing"]  # pylint: disable=pointless-statement

    headers["subject"] = "changed"
    assert headers["subject"].value == "changed"


def test_set_updates_existing_header_in_place() -> None:
    headers: HeaderCollection = _collection()
    before: Header = headers["subject"]
    after: Header = headers.set("subject", "bye")
    assert after is before
    assert after.value == "bye"
    assert len(headers) == 3


def test_set_creates_missing_header_with_computed_raw() -> None:
    headers: HeaderCollection = _collection()
    created: Header = headers.set("published_on", "2025-01-01")
    assert created.raw == "Published-On"
    assert headers.keys()[-1] == "published_on"
    assert headers.to_text().splitlines()[-1] == "Published-On: 2025-01-01"


def test_add_appends_even_for_existing_key() -> None:
    headers = HeaderCollection()
    headers.add("tag", "one")
    headers.add("tag", "two", raw="TAG")
    assert headers.keys() == ["tag", "tag"]
    assert headers.to_text() == "Tag: one\nTAG: two"


def test_remove_first_match() -> None:
    headers = HeaderCollection.parse("Tag: one\nTag: two")
    removed: Header | None = headers.remove("tag")
    assert removed is not None
    assert removed.value == "one"
    assert headers["tag"].value == "two"
    assert headers.remove("missing") is None


def test_collection_override_is_pushed_into_members() -> None:
    headers: HeaderCollection = _collection()
    assert not headers.is_reversible()

    def raw_for(key: object) -> str:
        if key == "content_md":
            return "Content-MD5"
        return "-".join(part.capitalize() for part in str(key).split("_"))

    headers.raw_transform = raw_for
    assert all(h.raw_transform is raw_for for h in headers)
    assert headers.is_reversible()

    headers.raw_transform = None
    assert all(h.raw_transform is None for h in headers)
    assert headers.effective_raw_transform("a_b") == "A-B"


def test_new_and_appended_headers_inherit_overrides() -> None:
    headers = HeaderCollection(raw_transform=str.upper, key_transform=str.lower)
    created: Header = headers.add("x_y", "1")
    assert created.raw == "X_Y"
    assert created.raw_transform is str.upper
    assert created.key_transform is str.lower

    outsider = Header("z", "Z", "2")
    headers.append(outsider)
    assert outsider.raw_transform is str.upper


def test_collection_override_beats_process_default() -> None:
    headers = HeaderCollection([Header("a_b", "A-B", "1")], raw_transform=str.upper)
    with default_transforms(NameTransforms(to_raw=lambda k: "default")):
        assert headers.to_text_dynamic() == "A_B: 1"
        assert HeaderCollection([Header("a_b", "A-B", "1")]).to_text_dynamic() == "default: 1"


def test_to_text_without_overrides_joins_member_text() -> None:
    headers: HeaderCollection = _collection()
    assert headers.to_text() == "\n".join(h.to_text() for h in headers)
    assert str(headers) == headers.to_text()


def test_to_text_overrides_do_not_mutate() -> None:
    headers: HeaderCollection = _collection()
    before: str = headers.to_text()
    rendered: str = headers.to_text({"content_type": "CT", "missing": "Nope"})
    assert rendered.splitlines()[0] == "CT: text/plain"
    assert "Nope" not in rendered
    assert headers.to_text() == before
    assert headers["content_type"].raw == "Content-Type"


def test_to_text_transform_fallback() -> None:
    headers: HeaderCollection = _collection()
    rendered: str = headers.to_text({"subject": "Subj"}, transform=str.upper)
    assert rendered == "CONTENT_TYPE: text/plain\nCONTENT_MD: abc\nSubj: hello"


def test_to_text_dynamic_renormalizes_names() -> None:
    headers = HeaderCollection.parse("content-type: x\nSUBJECT: y")
    assert headers.to_text_dynamic() == "Content-Type: x\nSubject: y"
    assert headers.to_text_dynamic(str.upper) == "CONTENT_TYPE: x\nSUBJECT: y"
    assert headers.raw_transform is None


def test_irreversible_lists_offenders_in_order() -> None:
    headers = HeaderCollection.parse("Content-MD5: a\nSubject: b\nX-Id-2: c")
    assert [h.raw for h in headers.irreversible()] == ["Content-MD5", "X-Id-2"]
    assert not headers.is_reversible()
    assert HeaderCollection().is_reversible()


def test_equality_is_order_independent_and_symmetric() -> None:
    foo = Header("foo", "foo", "1")
    bar = Header("bar", "bar", "2")
    a = HeaderCollection([foo, bar])
    b = HeaderCollection([Header("bar", "bar", "2"), Header("foo", "foo", "1")])
    subset = HeaderCollection([Header("foo", "foo", "1")])

    assert a == b
    assert b == a
    assert a != subset
    assert subset != a
    assert a != HeaderCollection([foo, Header("bar", "bar", "3")])
    assert a != "foo: 1\nbar: 2"


def test_collection_is_not_hashable() -> None:
    with pytest.raises(TypeError):
        hash(HeaderCollection())


def test_repr_lists_keys_and_values() -> None:
    headers = HeaderCollection.parse("A: 1")
    assert repr(headers) == "HeaderCollection({'a': '1'})"


def test_to_text_dynamic_uses_member_override_set_after_collection() -> None:
    headers = HeaderCollection.parse("A-B: 1\nC-D: 2", key_transform=None)
    headers.raw_transform = str.upper
    headers["c_d"].raw_transform = lambda key: f"x-{key}"
    assert headers.to_text_dynamic() == "A_B: 1\nx-c_d: 2"


def test_copy_detaches_headers_and_keeps_overrides() -> None:
    headers = HeaderCollection.parse("A-B: 1")
    headers.raw_transform = str.upper
    duplicate: HeaderCollection = headers.copy()

    assert duplicate == headers
    assert duplicate.raw_transform is str.upper
    assert duplicate["a_b"] is not headers["a_b"]

    duplicate["a_b"].value = "changed"
    duplicate.add("c", "3")
    assert headers.to_dict() == {"a_b": "1"}
