"""MCP request handling and the line-delimited JSON-RPC stdio server."""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any, Optional, TextIO

from aequi.mcp import audit
from aequi.mcp.permissions import Permissions
from aequi.mcp.protocol import JsonRpcRequest, JsonRpcResponse
from aequi.mcp.registry import ToolRegistry, _compact_json
from aequi.mcp.tools import accounts, imports, invoices, receipts, reconciliation, rules

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "aequi-mcp"
SERVER_VERSION = "2026.3.13"


def default_registry() -> ToolRegistry:
    """Return a registry holding every built-in tool."""
    registry = ToolRegistry()
    for module in (accounts, receipts, invoices, rules, imports, reconciliation):
        module.register(registry)
    return registry


async def handle_request(
    request: JsonRpcRequest, registry: ToolRegistry, store: Any, permissions: Permissions
) -> JsonRpcResponse:
    """Dispatch one JSON-RPC request and build its response."""
    method = request.method
    if method == "initialize":
        return JsonRpcResponse.success(
            request.id,
            {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {"tools": {"listChanged": False}},
                "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
            },
        )
    if method == "notifications/initialized":
        return JsonRpcResponse.success(request.id, {})
    if method == "tools/list":
        tools = [d.to_dict() for d in registry.list_definitions()]
        return JsonRpcResponse.success(request.id, {"tools": tools})
    if method == "tools/call":
        params = request.params if isinstance(request.params, dict) else {}
        name = params.get("name")
        tool_name = name if isinstance(name, str) else ""
        arguments = params["arguments"] if "arguments" in params else {}

        input_text = _compact_json(arguments)
        result = await registry.call(tool_name, arguments, store, permissions)
        outcome = "error" if result.is_error else "success"
        await audit.log_tool_call(store, tool_name, input_text, outcome)
        return JsonRpcResponse.success(request.id, result.to_dict())
    return JsonRpcResponse.error(request.id, -32601, f"Method not found: {method}")


def _parse_request(line: str) -> JsonRpcRequest:
    return JsonRpcRequest.from_dict(json.loads(line))


async def run_stdio_server(
    store: Any,
    permissions: Permissions,
    reader: Optional[TextIO] = None,
    writer: Optional[TextIO] = None,
) -> None:
    """Serve one JSON-RPC request per line from ``reader`` until end of input.

    Each response is written to ``writer`` as a single line of JSON.
    ``reader`` and ``writer`` default to standard input and output.
    """
    reader = sys.stdin if reader is None else reader
    writer = sys.stdout if writer is None else writer
    registry = default_registry()

    while True:
        line = await asyncio.to_thread(reader.readline)
        if not line:
            break
        trimmed = line.strip()
        if not trimmed:
            continue
        try:
            request = _parse_request(trimmed)
        except ValueError as exc:
            response = JsonRpcResponse.error(None, -32700, f"Parse error: {exc}")
        else:
            response = await handle_request(request, registry, store, permissions)
        writer.write(
            json.dumps(response.to_dict(), separators=(",", ":"), ensure_ascii=False) + "\n"
        )
        writer.flush()