"""Tool groups registered with the MCP tool registry."""

__all__ = ["accounts", "imports", "invoices", "receipts", "reconciliation", "rules"]