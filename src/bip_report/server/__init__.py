"""MCP server and results page for BI Publisher reports."""

from .main import main

__all__ = ["main"]
