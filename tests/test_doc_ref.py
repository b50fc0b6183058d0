"""Tests for document reference parsing."""

from yuque_mcp.doc_ref import LiteralDocRef, ParsedDocRef, parse_doc_ref


def test_full_url_is_parsed():
    ref = parse_doc_ref("https://acme.yuque.com/eng/platform/abc123")
    assert ref == ParsedDocRef(
        space_subdomain="acme",
        group_login="eng",
        book_slug="platform",
        doc_id="abc123",
    )
    assert ref.kind == "parsed"


def test_last_three_segments_are_used():
    ref = parse_doc_ref("https://acme.yuque.com/org-wiki/eng/platform/abc123/?view=doc")
    assert isinstance(ref, ParsedDocRef)
    assert (ref.group_login, ref.book_slug, ref.doc_id) == ("eng", "platform", "abc123")


def test_plain_id_is_literal():
    ref = parse_doc_ref("123456")
    assert ref == LiteralDocRef(doc_id="123456")
    assert ref.kind == "literal"


def test_short_url_falls_back_to_literal():
    value = "https://acme.yuque.com/eng"
    assert parse_doc_ref(value) == LiteralDocRef(doc_id=value)


def test_malformed_url_falls_back_to_literal():
    value = "http://[not-a-host/eng/platform/abc"
    ref = parse_doc_ref(value)
    assert ref.kind == "literal"
    assert ref.doc_id == value


def test_url_without_host_falls_back_to_literal():
    value = "https:///eng/platform/abc"
    assert parse_doc_ref(value) == LiteralDocRef(doc_id=value)
