import json

import pytest

from aequi.mcp.permissions import Permissions
from aequi.mcp.registry import ToolRegistry
from aequi.mcp.tools import imports


class FakeStore:
    def __init__(self) -> None:
        self.profiles: list[dict] = []
        self.review_rows = {"batch-1": [{"id": 7, "description": "GITHUB INC"}]}
        self.requested_batches: list[str] = []

    async def get_import_profiles(self):
        return list(self.profiles)

    async def save_import_profile(self, profile):
        saved = dict(profile, id=len(self.profiles) + 1)
        self.profiles.append(saved)
        return saved["id"]

    async def get_imported_transactions_for_review(self, batch_id):
        self.requested_batches.append(batch_id)
        return self.review_rows.get(batch_id, [])


@pytest.fixture
def registry():
    reg = ToolRegistry()
    imports.register(reg)
    return reg


def test_registered_tools(registry):
    names = [d.name for d in registry.list_definitions()]
    assert names == [
        "aequi_get_import_profiles",
        "aequi_save_import_profile",
        "aequi_get_pending_imports",
    ]


@pytest.mark.asyncio
async def test_import_profiles_empty(registry):
    result = await registry.call("aequi_get_import_profiles", {}, FakeStore(), Permissions())
    assert result.is_error is None
    assert json.loads(result.content[0].text) == []


@pytest.mark.asyncio
async def test_save_and_list_import_profile(registry):
    store = FakeStore()
    result = await registry.call(
        "aequi_save_import_profile",
        {
            "name": "Chase Checking",
            "has_header": True,
            "date_column": 0,
            "description_column": 1,
            "amount_column": 2,
            "date_format": "%m/%d/%Y",
        },
        store,
        Permissions(),
    )
    assert result.is_error is None
    assert "profile_id" in result.content[0].text
    assert result.content[0].text == '{"profile_id":1}'

    listed = await registry.call("aequi_get_import_profiles", {}, store, Permissions())
    assert "Chase Checking" in listed.content[0].text


@pytest.mark.asyncio
async def test_save_profile_defaults(registry):
    store = FakeStore()
    await registry.call(
        "aequi_save_import_profile",
        {"name": "Minimal", "has_header": "yes", "amount_column": 2.5},
        store,
        Permissions(),
    )
    saved = store.profiles[0]
    assert saved["has_header"] is True
    assert saved["delimiter"] == ","
    assert saved["date_format"] == "%m/%d/%Y"
    assert saved["amount_column"] is None
    assert saved["debit_column"] is None
    assert saved["created_at"] == ""


@pytest.mark.asyncio
async def test_save_profile_blocked_when_read_only(registry):
    store = FakeStore()
    result = await registry.call(
        "aequi_save_import_profile", {"name": "X"}, store, Permissions(read_only=True)
    )
    assert result.is_error is True
    assert store.profiles == []


@pytest.mark.asyncio
async def test_pending_imports_for_batch(registry):
    store = FakeStore()
    result = await registry.call(
        "aequi_get_pending_imports", {"batch_id": "batch-1"}, store, Permissions()
    )
    assert json.loads(result.content[0].text) == [{"id": 7, "description": "GITHUB INC"}]
    assert store.requested_batches == ["batch-1"]