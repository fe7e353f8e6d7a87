import json

import pytest

from aequi.mcp.permissions import Permissions
from aequi.mcp.registry import ToolRegistry
from aequi.mcp.tools import accounts


class FakeStore:
    def __init__(self) -> None:
        self.accounts = [
            {"id": 1, "code": "1000", "name": "Checking", "account_type": "Asset"},
            {"id": 2, "code": "4000", "name": "Service Revenue", "account_type": "Income"},
        ]

    async def get_all_accounts(self):
        return list(self.accounts)

    async def get_account_by_code(self, code):
        return next((a for a in self.accounts if a["code"] == code), None)


class BrokenStore:
    async def get_all_accounts(self):
        raise RuntimeError("no such table: accounts")

    async def get_account_by_code(self, code):
        raise RuntimeError("no such table: accounts")


@pytest.fixture
def registry():
    reg = ToolRegistry()
    accounts.register(reg)
    return reg


def test_registers_two_read_tools(registry):
    names = [d.name for d in registry.list_definitions()]
    assert names == ["aequi_list_accounts", "aequi_get_account"]
    assert registry.list_definitions()[1].input_schema["required"] == ["code"]


@pytest.mark.asyncio
async def test_list_accounts_returns_default_accounts(registry):
    result = await registry.call("aequi_list_accounts", {}, FakeStore(), Permissions())
    assert result.is_error is None
    text = result.content[0].text
    assert "Checking" in text
    assert "1000" in text
    assert json.loads(text)[1]["code"] == "4000"


@pytest.mark.asyncio
async def test_list_accounts_allowed_when_read_only(registry):
    result = await registry.call(
        "aequi_list_accounts", {}, FakeStore(), Permissions(read_only=True)
    )
    assert result.is_error is None


@pytest.mark.asyncio
async def test_get_account_by_code(registry):
    result = await registry.call(
        "aequi_get_account", {"code": "1000"}, FakeStore(), Permissions()
    )
    assert result.is_error is None
    assert "Checking" in result.content[0].text


@pytest.mark.asyncio
async def test_get_account_not_found(registry):
    result = await registry.call(
        "aequi_get_account", {"code": "9999"}, FakeStore(), Permissions()
    )
    assert result.is_error is True
    assert result.content[0].text == "Account 9999 not found"


@pytest.mark.asyncio
async def test_get_account_missing_code(registry):
    result = await registry.call("aequi_get_account", {}, FakeStore(), Permissions())
    assert result.content[0].text == "Account  not found"


@pytest.mark.asyncio
async def test_storage_error_reported(registry):
    result = await registry.call("aequi_list_accounts", {}, BrokenStore(), Permissions())
    assert result.is_error is True
    assert result.content[0].text == "no such table: accounts"