from typing import Any

import pytest

from aequi.mcp.permissions import Permissions
from aequi.mcp.protocol import ToolDefinition, ToolResult
from aequi.mcp.registry import ToolRegistry


def _definition(name: str) -> ToolDefinition:
    return ToolDefinition(
        name=name,
        description=f"Tool {name}",
        input_schema={"type": "object", "properties": {}},
    )


def _registry() -> tuple[ToolRegistry, list[Any]]:
    seen: list[Any] = []

    async def echo(store: Any, params: dict[str, Any]) -> ToolResult:
        seen.append((store, params))
        return ToolResult.text(f"echo {params.get('value')}")

    registry = ToolRegistry()
    registry.register(_definition("aequi_list_accounts"), False, echo)
    registry.register(_definition("aequi_create_transaction"), True, echo)
    return registry, seen


def test_new_registry_is_empty():
    assert ToolRegistry().list_definitions() == []


def test_list_definitions_in_registration_order():
    registry, _ = _registry()
    names = [d.name for d in registry.list_definitions()]
    assert names == ["aequi_list_accounts", "aequi_create_transaction"]


@pytest.mark.asyncio
async def test_unknown_tool_returns_error():
    registry, seen = _registry()
    result = await registry.call("nonexistent", {}, object(), Permissions())
    assert result.is_error is True
    assert result.content[0].text == "Unknown tool: nonexistent"
    assert seen == []


@pytest.mark.asyncio
async def test_read_only_blocks_write_tool():
    registry, seen = _registry()
    perms = Permissions(read_only=True)
    result = await registry.call("aequi_create_transaction", {}, object(), perms)
    assert result.is_error is True
    assert "not allowed" in result.content[0].text
    assert seen == []


@pytest.mark.asyncio
async def test_read_only_allows_read_tool():
    registry, _ = _registry()
    perms = Permissions(read_only=True)
    result = await registry.call("aequi_list_accounts", {"value": 3}, object(), perms)
    assert result.is_error is None
    assert result.content[0].text == "echo 3"


@pytest.mark.asyncio
async def test_disabled_tool_blocked():
    registry, _ = _registry()
    perms = Permissions(disabled_tools={"aequi_list_accounts"})
    result = await registry.call("aequi_list_accounts", {}, object(), perms)
    assert result.is_error is True
    assert result.content[0].text == "Tool aequi_list_accounts is not allowed"


@pytest.mark.asyncio
async def test_call_passes_store_and_params():
    registry, seen = _registry()
    store = object()
    await registry.call("aequi_list_accounts", {"value": "x"}, store, Permissions())
    assert seen == [(store, {"value": "x"})]


@pytest.mark.asyncio
async def test_non_object_params_become_empty():
    registry, seen = _registry()
    result = await registry.call("aequi_list_accounts", [1, 2], None, Permissions())
    assert result.content[0].text == "echo None"
    assert seen[0][1] == {}