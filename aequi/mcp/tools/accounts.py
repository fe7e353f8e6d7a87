"""Chart-of-accounts tools."""

from __future__ import annotations

from typing import Any

from aequi.mcp.protocol import ToolDefinition, ToolResult
from aequi.mcp.registry import ToolRegistry, _pretty_json, _str_arg


async def _list_accounts(store: Any, params: dict[str, Any]) -> ToolResult:
    try:
        accounts = await store.get_all_accounts()
    except Exception as exc:
        return ToolResult.error(str(exc))
    return ToolResult.text(_pretty_json(accounts))


async def _get_account(store: Any, params: dict[str, Any]) -> ToolResult:
    code = _str_arg(params, "code", "")
    try:
        account = await store.get_account_by_code(code)
    except Exception as exc:
        return ToolResult.error(str(exc))
    if account is None:
        return ToolResult.error(f"Account {code} not found")
    return ToolResult.text(_pretty_json(account))


def register(registry: ToolRegistry) -> None:
    """Add the account tools to ``registry``."""
    registry.register(
        ToolDefinition(
            name="aequi_list_accounts",
            description="List all active accounts in the chart of accounts",
            input_schema={"type": "object", "properties": {}},
        ),
        False,
        _list_accounts,
    )
    registry.register(
        ToolDefinition(
            name="aequi_get_account",
            description="Get an account by its code",
            input_schema={
                "type": "object",
                "properties": {"code": {"type": "string"}},
                "required": ["code"],
            },
        ),
        False,
        _get_account,
    )