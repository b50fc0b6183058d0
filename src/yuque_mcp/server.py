#!/usr/bin/env python3
"""Yuque MCP Server - Main entry point."""

import os
import sys
import logging
from typing import Optional

import httpx
import uvicorn
from dotenv import load_dotenv
from fastmcp import FastMCP
from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Route, Mount

from yuque_mcp import __version__
from yuque_mcp.config import YuqueSettings
from yuque_mcp.tools import yuque

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

SERVICE_NAME = "yuque-mcp"


def setup_logging(level: str = "INFO") -> None:
    """Configure logging to stderr; stdout belongs to the stdio transport."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def create_mcp_server(
    settings: YuqueSettings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastMCP:
    """Create the FastMCP server with all Yuque tools registered.

    Args:
        settings: Process defaults resolved at startup
        transport: Optional httpx transport for every Yuque API call

    Returns:
        Configured FastMCP instance
    """
    mcp = FastMCP(
        name=SERVICE_NAME,
        instructions="""MCP server for a Yuque knowledge base.

    Tools:
    - get_yuque_doc_list : list documents (offset/limit paging)
    - get_yuque_doc_detail : read one document by ID, slug or URL
    - get_yuque_repo_toc : dump the table of contents
    - create_yuque_group : add a top-level TOC group
    - create_yuque_doc_in_group : create a document under a group, creating the group if needed

    group_login and book_slug default to the server configuration.
    """,
    )
    yuque.register_tools(mcp, settings, transport)
    return mcp


def create_app(
    mcp: FastMCP,
    settings: YuqueSettings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Starlette:
    """Starlette app serving streamable HTTP MCP plus health endpoints."""

    async def health(request):
        """Health check endpoint."""
        return JSONResponse({
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": __version__,
        })

    async def ready(request):
        """Readiness probe against the default knowledge base."""
        status = await yuque.get_status(settings, transport)
        is_ready = status.get("status") == "healthy"
        return JSONResponse(
            {"ready": is_ready, "yuque": status},
            status_code=200 if is_ready else 503,
        )

    mcp_app = mcp.http_app(stateless_http=True)

    routes = [
        Route("/health", health, methods=["GET"]),
        Route("/ready", ready, methods=["GET"]),
        Mount("/", app=mcp_app),
    ]

    return Starlette(routes=routes, lifespan=mcp_app.lifespan)


settings = YuqueSettings.from_env()
mcp = create_mcp_server(settings)


def main():
    """Run the server on stdio, or on HTTP when MCP_TRANSPORT=http."""
    setup_logging(os.environ.get("LOG_LEVEL", "INFO"))
    transport = os.environ.get("MCP_TRANSPORT", "stdio").lower()

    try:
        if transport == "http":
            port = int(os.environ.get("PORT", "8000"))
            host = os.environ.get("HOST", "0.0.0.0")
            logger.info(f"Starting {SERVICE_NAME} on {host}:{port}")
            uvicorn.run(create_app(mcp, settings), host=host, port=port)
        elif transport == "stdio":
            logger.info(f"{SERVICE_NAME} running on stdio")
            mcp.run(transport="stdio")
        else:
            raise ValueError(f"Unsupported MCP_TRANSPORT: {transport}")
    except Exception:
        logger.exception("Server error")
        sys.exit(1)


if __name__ == "__main__":
    main()
