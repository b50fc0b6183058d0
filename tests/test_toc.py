"""Tests for TOC node parsing and group lookup."""

from yuque_mcp.toc import (
    NodeType,
    append_document_payload,
    append_group_payload,
    find_group,
    last_uuid,
    normalize_nodes,
    parse_toc,
)

TOC = [
    {"uuid": "d1", "type": "DOC", "title": "Sprint 1", "doc_id": 11},
    {"uuid": "g1", "type": "TITLE", "title": "Sprint 1", "visible": 1},
    {"uuid": "g2", "type": "TITLE", "title": "Sprint 1"},
    {"uuid": "g3", "type": "TITLE", "title": "sprint 2"},
]


def test_parse_toc_keeps_order_and_extra_fields():
    nodes = parse_toc(TOC)
    assert [n.uuid for n in nodes] == ["d1", "g1", "g2", "g3"]
    assert nodes[0].model_extra["doc_id"] == 11
    assert nodes[1].is_group
    assert not nodes[0].is_group


def test_find_group_first_match_skips_documents():
    node = find_group(parse_toc(TOC), "Sprint 1")
    assert node.uuid == "g1"


def test_find_group_is_case_sensitive():
    assert find_group(parse_toc(TOC), "Sprint 2") is None
    assert find_group(parse_toc(TOC), "sprint 2").uuid == "g3"


def test_find_group_in_empty_toc():
    assert find_group(parse_toc(None), "Anything") is None
    assert find_group(parse_toc([]), "Anything") is None


def test_normalize_nodes_shapes():
    assert normalize_nodes(None) == []
    assert [n.uuid for n in normalize_nodes({"uuid": "a"})] == ["a"]
    assert [n.uuid for n in normalize_nodes([{"uuid": "a"}, "junk", {"uuid": "b"}])] == ["a", "b"]


def test_last_uuid_from_object_or_array():
    assert last_uuid({"uuid": "new", "type": "TITLE"}) == "new"
    assert last_uuid([{"uuid": "old"}, {"uuid": "new"}]) == "new"
    assert last_uuid([]) is None
    assert last_uuid({"type": "TITLE"}) is None
    assert last_uuid(None) is None


def test_append_payloads():
    assert append_group_payload("Sprint 1") == {
        "action": "appendNode",
        "action_mode": "child",
        "type": NodeType.GROUP.value,
        "title": "Sprint 1",
        "visible": 1,
    }
    payload = append_document_payload("g1", 42)
    assert payload["target_uuid"] == "g1"
    assert payload["type"] == "DOC"
    assert payload["doc_ids"] == [42]
