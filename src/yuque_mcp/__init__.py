"""Yuque MCP - Knowledge base document and TOC tools for the Yuque API."""

__version__ = "1.0.0"
