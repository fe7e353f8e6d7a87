from dataclasses import dataclass
from typing import Optional

import pytest

from aequi.mcp.audit import log_tool_call


@dataclass
class AuditEntry:
    tool_name: str
    input_hash: Optional[str]
    outcome: str
    details: Optional[str]


class FakeStore:
    def __init__(self) -> None:
        self.entries: list[AuditEntry] = []

    async def insert_audit_log(self, tool, input_hash, outcome, details):
        self.entries.append(AuditEntry(tool, input_hash, outcome, details))

    async def get_audit_log(self, limit):
        return list(reversed(self.entries))[:limit]


class FailingStore:
    def __init__(self) -> None:
        self.attempts = 0

    async def insert_audit_log(self, tool, input_hash, outcome, details):
        self.attempts += 1
        raise RuntimeError("database is locked")


@pytest.mark.asyncio
async def test_audit_log_records_tool_call():
    store = FakeStore()
    await log_tool_call(store, "test_tool", "{}", "success")
    logs = await store.get_audit_log(10)
    assert logs
    assert logs[0].tool_name == "test_tool"
    assert logs[0].outcome == "success"


@pytest.mark.asyncio
async def test_audit_log_stores_input_hash_not_input():
    store = FakeStore()
    await log_tool_call(store, "t", "", "error")
    entry = store.entries[0]
    assert entry.input_hash == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    assert entry.details is None


@pytest.mark.asyncio
async def test_audit_hash_differs_per_input():
    store = FakeStore()
    await log_tool_call(store, "t", '{"a":1}', "success")
    await log_tool_call(store, "t", '{"a":2}', "success")
    first, second = store.entries
    assert len(first.input_hash) == 64
    assert first.input_hash != second.input_hash


@pytest.mark.asyncio
async def test_audit_failure_is_swallowed():
    store = FailingStore()
    result = await log_tool_call(store, "t", "{}", "success")
    assert result is None
    assert store.attempts == 1