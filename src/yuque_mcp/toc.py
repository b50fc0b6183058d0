"""Table-of-contents nodes as returned by the Yuque toc endpoint."""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict


class NodeType(str, Enum):
    """Wire values for TOC node types."""
    GROUP = "TITLE"      # folder-like heading, no body
    DOCUMENT = "DOC"     # leaf referencing a document


class TocNode(BaseModel):
    """One entry in a knowledge base's TOC.

    Only the fields used here are declared; anything else the service sends
    (doc_id, url, level, parent_uuid, ...) is kept as extra data.
    """
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    uuid: Optional[str] = None
    type: Optional[str] = None
    title: Optional[str] = None
    visible: Optional[int] = None

    @property
    def is_group(self) -> bool:
        return self.type == NodeType.GROUP.value


def normalize_nodes(data: Any) -> List[TocNode]:
    """Turn a toc payload into a list of nodes.

    The service answers with an array, a single object, or nothing at all
    depending on the call. Entries that are not objects are dropped.
    """
    if data is None:
        return []
    items = data if isinstance(data, list) else [data]
    return [TocNode.model_validate(item) for item in items if isinstance(item, dict)]


def parse_toc(data: Any) -> List[TocNode]:
    """Parse a full TOC listing, keeping service order."""
    return normalize_nodes(data)


def find_group(nodes: List[TocNode], title: str) -> Optional[TocNode]:
    """First group node whose title matches exactly (case-sensitive)."""
    for node in nodes:
        if node.is_group and node.title == title:
            return node
    return None


def last_uuid(data: Any) -> Optional[str]:
    """uuid of the last node in an append response, if there is one."""
    nodes = normalize_nodes(data)
    if not nodes:
        return None
    return nodes[-1].uuid or None


def append_group_payload(title: str) -> dict:
    """PUT body that appends a top-level group node."""
    return {
        "action": "appendNode",
        "action_mode": "child",
        "type": NodeType.GROUP.value,
        "title": title,
        "visible": 1,
    }


def append_document_payload(target_uuid: str, doc_id: Any) -> dict:
    """PUT body that attaches an existing document under a group node."""
    return {
        "action": "appendNode",
        "action_mode": "child",
        "target_uuid": target_uuid,
        "type": NodeType.DOCUMENT.value,
        "doc_ids": [doc_id],
        "visible": 1,
    }
