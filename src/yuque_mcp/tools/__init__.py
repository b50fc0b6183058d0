"""Yuque MCP tools package."""

from . import yuque

__all__ = ["yuque"]
