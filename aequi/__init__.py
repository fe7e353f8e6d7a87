"""Bookkeeping toolkit: receipt file handling, an MCP tool server and invoice rendering."""

__version__ = "2026.3.13"
__all__ = ["mcp", "ocr", "pdf"]