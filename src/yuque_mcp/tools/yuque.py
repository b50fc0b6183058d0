"""Yuque knowledge base tools: documents, groups and the table of contents."""

import json
import logging
from typing import Any, List, Optional

import httpx
from fastmcp import FastMCP

from yuque_mcp.client import YuqueClient
from yuque_mcp.config import RepoConfig, YuqueSettings, resolve_config
from yuque_mcp.doc_ref import ParsedDocRef, parse_doc_ref
from yuque_mcp.errors import ConfigMissingError, YuqueError
from yuque_mcp.workflows import create_doc_in_group, create_group

logger = logging.getLogger(__name__)


def as_records(data: Any) -> List[dict]:
    """Objects in a ``data`` payload that may be an array, an object or null."""
    if data is None:
        return []
    items = data if isinstance(data, list) else [data]
    return [item for item in items if isinstance(item, dict)]


def format_doc_list(docs: list) -> str:
    """One line per document, in the order the API returned them."""
    if not docs:
        return "Document list is empty."
    lines = ["Documents:"]
    for doc in docs:
        lines.append(f"- {doc.get('title') or 'Untitled'} (ID: {doc.get('id', '')})")
    return "\n".join(lines) + "\n"


def _count(value) -> str:
    return "N/A" if value is None else str(value)


def format_doc_detail(doc: dict) -> str:
    return (
        "Document details:\n"
        f"Title: {doc.get('title') or ''}\n"
        f"ID: {doc.get('id') or ''}\n"
        f"Description: {doc.get('description') or ''}\n"
        f"Created: {doc.get('created_at') or ''}\n"
        f"Updated: {doc.get('updated_at') or ''}\n"
        f"Reads: {_count(doc.get('read_count'))}\n"
        f"Likes: {_count(doc.get('likes_count'))}\n"
        f"Comments: {_count(doc.get('comments_count'))}\n"
        f"Content:\n{doc.get('body') or ''}"
    )


async def get_status(
    settings: YuqueSettings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> dict:
    """Probe the default knowledge base for readiness checks."""
    config = resolve_config(settings)
    missing = config.missing()
    if missing:
        return {"status": "unconfigured", "missing": missing}
    try:
        nodes = await YuqueClient(config, transport).get("toc")
        return {"status": "healthy", "toc_nodes": len(as_records(nodes))}
    except YuqueError as e:
        return {"status": "unhealthy", "error": str(e)}


def register_tools(
    mcp: FastMCP,
    settings: YuqueSettings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
):
    """Register Yuque tools with the MCP server."""

    def client_for(config: RepoConfig) -> YuqueClient:
        return YuqueClient(config.require(), transport)

    # =========================================================================
    # Documents
    # =========================================================================

    @mcp.tool(name="get_yuque_doc_list", annotations={"readOnlyHint": True})
    async def get_yuque_doc_list(
        group_login: Optional[str] = None,
        book_slug: Optional[str] = None,
        offset: int = 0,
        limit: int = 100
    ) -> str:
        """
        Lists the documents in a Yuque knowledge base. Supports paging.

        Args:
            group_login: Login of the team or user owning the knowledge base
            book_slug: Path slug of the knowledge base
            offset: Number of documents to skip (default: 0)
            limit: Maximum documents to return (default: 100)

        Returns:
            One line per document with its title and ID
        """
        try:
            client = client_for(resolve_config(settings, group_login, book_slug))
            logger.info(f"Listing documents in {client.config.group_login}/{client.config.book_slug}")
            docs = await client.get("docs", params={
                "offset": offset,
                "limit": limit,
                "optional_properties": "hits,tags,latest_version_id",
            })
            return format_doc_list(as_records(docs))
        except YuqueError as e:
            return f"Failed to list documents: {e}"

    @mcp.tool(name="get_yuque_doc_detail", annotations={"readOnlyHint": True})
    async def get_yuque_doc_detail(
        doc_id: str,
        group_login: Optional[str] = None,
        book_slug: Optional[str] = None,
        page_size: int = 100,
        page: int = 1
    ) -> str:
        """
        Gets the details and markdown body of one Yuque document.

        The document can be given as its numeric ID, its slug, or a full
        document URL such as https://acme.yuque.com/eng/platform/abc123, in
        which case the space, team and knowledge base are taken from the URL
        unless passed explicitly.

        Args:
            doc_id: Document ID, slug or full document URL
            group_login: Login of the team or user owning the knowledge base
            book_slug: Path slug of the knowledge base
            page_size: Page size passed through to the API (default: 100)
            page: Page number passed through to the API (default: 1)

        Returns:
            Title, ID, description, timestamps, counters and body
        """
        ref = parse_doc_ref(doc_id)
        if isinstance(ref, ParsedDocRef):
            config = resolve_config(
                settings,
                group_login or ref.group_login,
                book_slug or ref.book_slug,
                space_subdomain=ref.space_subdomain,
            )
        else:
            config = resolve_config(settings, group_login, book_slug)

        try:
            if not ref.doc_id:
                raise ConfigMissingError(config.missing() + ["doc_id"])
            client = client_for(config)
            logger.info(f"Fetching document {ref.doc_id} ({ref.kind} reference)")
            data = await client.get(f"docs/{ref.doc_id}", params={"page_size": page_size, "page": page})
            docs = as_records(data)
            if not docs or not docs[0]:
                return "Document not found."
            return format_doc_detail(docs[0])
        except YuqueError as e:
            return f"Failed to get document details: {e}"

    @mcp.tool(name="create_yuque_doc_in_group")
    async def create_yuque_doc_in_group(
        group_name: str,
        doc_title: str,
        doc_body: str,
        group_login: Optional[str] = None,
        book_slug: Optional[str] = None
    ) -> str:
        """
        Creates a markdown document under a group in a Yuque knowledge base.

        If no group with exactly this name exists at the top of the table of
        contents, it is created first. If the document is created but cannot
        be attached to the group, the result says so and gives the new
        document ID.

        Args:
            group_name: Name of the group (TOC heading) to put the document under
            doc_title: Title of the new document
            doc_body: Markdown content of the new document
            group_login: Login of the team or user owning the knowledge base
            book_slug: Path slug of the knowledge base

        Returns:
            Confirmation naming the document and the group, or what failed
        """
        try:
            client = client_for(resolve_config(settings, group_login, book_slug))
            logger.info(f"Creating document '{doc_title}' in group '{group_name}'")
            await create_doc_in_group(client, group_name, doc_title, doc_body)
            return f"Document '{doc_title}' created and added to group '{group_name}'."
        except YuqueError as e:
            return f"Operation failed: {e}"

    # =========================================================================
    # Table of contents
    # =========================================================================

    @mcp.tool(name="create_yuque_group")
    async def create_yuque_group(
        name: str,
        group_login: Optional[str] = None,
        book_slug: Optional[str] = None
    ) -> str:
        """
        Creates a group (TOC heading) at the top level of a Yuque knowledge base.

        Args:
            name: Name of the group to create
            group_login: Login of the team or user owning the knowledge base
            book_slug: Path slug of the knowledge base

        Returns:
            Confirmation message
        """
        try:
            client = client_for(resolve_config(settings, group_login, book_slug))
            logger.info(f"Creating group '{name}'")
            uuid = await create_group(client, name)
        except YuqueError as e:
            return f"Failed to create group: {e}"

        if uuid:
            return f"Group node '{name}' created (UUID: {uuid})."
        return f"Group node '{name}' created."

    @mcp.tool(name="get_yuque_repo_toc", annotations={"readOnlyHint": True})
    async def get_yuque_repo_toc(
        group_login: Optional[str] = None,
        book_slug: Optional[str] = None
    ) -> str:
        """
        Gets the full table of contents of a Yuque knowledge base as JSON.

        Args:
            group_login: Login of the team or user owning the knowledge base
            book_slug: Path slug of the knowledge base

        Returns:
            The TOC nodes as pretty-printed JSON
        """
        try:
            client = client_for(resolve_config(settings, group_login, book_slug))
            logger.info(f"Fetching TOC of {client.config.group_login}/{client.config.book_slug}")
            toc = await client.get("toc")
            return "TOC retrieved:\n" + json.dumps(toc, indent=2, ensure_ascii=False)
        except YuqueError as e:
            return f"Failed to get TOC: {e}"
