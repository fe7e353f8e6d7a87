"""Bank reconciliation tools."""

from __future__ import annotations

from typing import Any

from aequi.mcp.protocol import ToolDefinition, ToolResult
from aequi.mcp.registry import ToolRegistry, _compact_json, _int_arg, _pretty_json, _str_arg


async def _create_session(store: Any, params: dict[str, Any]) -> ToolResult:
    account_id = _int_arg(params, "account_id", 0)
    start = _str_arg(params, "start_date", "")
    end = _str_arg(params, "end_date", "")
    balance = _int_arg(params, "statement_balance_cents", 0)
    try:
        session_id = await store.create_reconciliation_session(account_id, start, end, balance)
    except Exception as exc:
        return ToolResult.error(str(exc))
    return ToolResult.text(_compact_json({"session_id": session_id}))


async def _get_items(store: Any, params: dict[str, Any]) -> ToolResult:
    session_id = _int_arg(params, "session_id", 0)
    try:
        items = await store.get_reconciliation_items(session_id)
    except Exception as exc:
        return ToolResult.error(str(exc))
    return ToolResult.text(_pretty_json(items))


async def _resolve_item(store: Any, params: dict[str, Any]) -> ToolResult:
    item_id = _int_arg(params, "item_id", 0)
    notes = _str_arg(params, "notes", "")
    try:
        await store.resolve_reconciliation_item(item_id, notes)
    except Exception as exc:
        return ToolResult.error(str(exc))
    return ToolResult.text("Item resolved")


def register(registry: ToolRegistry) -> None:
    """Add the reconciliation tools to ``registry``."""
    registry.register(
        ToolDefinition(
            name="aequi_create_reconciliation_session",
            description="Create a reconciliation session for an account",
            input_schema={
                "type": "object",
                "properties": {
                    "account_id": {"type": "integer"},
                    "start_date": {"type": "string"},
                    "end_date": {"type": "string"},
                    "statement_balance_cents": {"type": "integer"},
                },
                "required": [
                    "account_id",
                    "start_date",
                    "end_date",
                    "statement_balance_cents",
                ],
            },
        ),
        True,
        _create_session,
    )
    registry.register(
        ToolDefinition(
            name="aequi_get_reconciliation_items",
            description="Get items in a reconciliation session",
            input_schema={
                "type": "object",
                "properties": {"session_id": {"type": "integer"}},
                "required": ["session_id"],
            },
        ),
        False,
        _get_items,
    )
    registry.register(
        ToolDefinition(
            name="aequi_resolve_item",
            description="Resolve a reconciliation item",
            input_schema={
                "type": "object",
                "properties": {
                    "item_id": {"type": "integer"},
                    "notes": {"type": "string"},
                },
                "required": ["item_id", "notes"],
            },
        ),
        True,
        _resolve_item,
    )