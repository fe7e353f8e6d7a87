"""Registry of MCP tools and permission-checked dispatch."""

from __future__ import annotations

import dataclasses
import datetime as _dt
import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from aequi.mcp.permissions import Permissions
from aequi.mcp.protocol import ToolDefinition, ToolResult

ToolHandler = Callable[[Any, "dict[str, Any]"], Awaitable[ToolResult]]

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


@dataclass
class _ToolEntry:
    definition: ToolDefinition
    is_write: bool
    handler: ToolHandler


class ToolRegistry:
    """Holds tool definitions with their handlers, in registration order."""

    def __init__(self) -> None:
        self._tools: list[_ToolEntry] = []

    def register(self, definition: ToolDefinition, is_write: bool, handler: ToolHandler) -> None:
        """Add a tool; ``handler(store, params)`` is awaited when the tool is called."""
        self._tools.append(_ToolEntry(definition, is_write, handler))

    def list_definitions(self) -> list[ToolDefinition]:
        return [entry.definition for entry in self._tools]

    async def call(
        self, name: str, params: Any, store: Any, permissions: Permissions
    ) -> ToolResult:
        """Run the named tool if it exists and the permissions allow it."""
        entry = next((t for t in self._tools if t.definition.name == name), None)
        if entry is None:
            return ToolResult.error(f"Unknown tool: {name}")
        if not permissions.is_allowed(name, entry.is_write):
            return ToolResult.error(f"Tool {name} is not allowed")
        # Lookups on a non-object argument value find nothing.
        arguments = params if isinstance(params, dict) else {}
        return await entry.handler(store, arguments)


# ── Argument and output helpers shared by the tool modules ───────────────────


def _str_arg(params: dict[str, Any], key: str, default: Optional[str] = None) -> Optional[str]:
    value = params.get(key)
    return value if isinstance(value, str) else default


def _int_arg(params: dict[str, Any], key: str, default: Optional[int] = None) -> Optional[int]:
    value = params.get(key)
    if isinstance(value, int) and not isinstance(value, bool) and _I64_MIN <= value <= _I64_MAX:
        return value
    return default


def _bool_arg(params: dict[str, Any], key: str, default: bool) -> bool:
    value = params.get(key)
    return value if isinstance(value, bool) else default


def _encode(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (_dt.date, _dt.time)):
        return value.isoformat()
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


def _pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=_encode)


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)