"""Model Context Protocol server exposing ledger operations as tools."""

__all__ = ["audit", "permissions", "protocol", "registry", "server", "sse", "tools"]