"""Multi-step TOC workflows: find-or-create a group, insert a document.

None of these are transactional. Each step is awaited only after the
previous one succeeded, and a failure part way through is reported with an
error type that says how far things got.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from yuque_mcp.client import YuqueClient
from yuque_mcp.errors import (
    DocumentCreationError,
    GroupCreationError,
    PartialAttachmentError,
    RemoteError,
)
from yuque_mcp.toc import (
    append_document_payload,
    append_group_payload,
    find_group,
    last_uuid,
    parse_toc,
)

logger = logging.getLogger(__name__)


@dataclass
class GroupResolution:
    uuid: str
    created: bool


@dataclass
class DocumentInsertion:
    doc_id: Any
    group_uuid: str
    group_created: bool


async def create_group(client: YuqueClient, name: str) -> Optional[str]:
    """Append a top-level group node and return its uuid when the response has one."""
    data = await client.put("toc", append_group_payload(name))
    return last_uuid(data)


async def resolve_or_create_group(client: YuqueClient, name: str) -> GroupResolution:
    """Find the group titled ``name`` in the TOC, creating it if absent.

    Matching is exact and case-sensitive; with duplicate titles the first
    one in TOC order wins. New groups always go at the top level.

    Raises:
        RemoteError: if reading the TOC or appending the group fails.
        GroupCreationError: if the append returned no uuid.
    """
    nodes = parse_toc(await client.get("toc"))
    existing = find_group(nodes, name)
    if existing is not None and existing.uuid:
        logger.debug(f"Found group '{name}' ({existing.uuid})")
        return GroupResolution(uuid=existing.uuid, created=False)

    uuid = await create_group(client, name)
    if not uuid:
        raise GroupCreationError(name)
    logger.info(f"Created group '{name}' ({uuid})")
    return GroupResolution(uuid=uuid, created=True)


async def create_doc_in_group(
    client: YuqueClient,
    group_name: str,
    doc_title: str,
    doc_body: str,
) -> DocumentInsertion:
    """Create a markdown document and attach it under the named group.

    A group created on the way is left in place if a later step fails.

    Raises:
        RemoteError: if resolving the group or creating the document fails.
        GroupCreationError: if a new group came back without a uuid.
        DocumentCreationError: if the created document has no id.
        PartialAttachmentError: if the document exists but attaching it failed.
    """
    group = await resolve_or_create_group(client, group_name)

    doc = await client.post("docs", {
        "title": doc_title,
        "body": doc_body,
        "format": "markdown",
        "public": 0,
    })
    doc_id = doc.get("id") if isinstance(doc, dict) else None
    if not doc_id:
        raise DocumentCreationError(doc_title)

    try:
        await client.put("toc", append_document_payload(group.uuid, doc_id))
    except RemoteError as e:
        logger.warning(f"Document {doc_id} created but not attached to '{group_name}': {e}")
        raise PartialAttachmentError(doc_id, doc_title, group_name, e) from e

    return DocumentInsertion(doc_id=doc_id, group_uuid=group.uuid, group_created=group.created)
