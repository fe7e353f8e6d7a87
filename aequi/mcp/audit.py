"""Audit trail of tool calls."""

from __future__ import annotations

import contextlib
import hashlib
from typing import Any


async def log_tool_call(store: Any, tool: str, input_text: str, outcome: str) -> None:
    """Record a tool call with the SHA-256 of its input; storage failures are ignored."""
    input_hash = hashlib.sha256(input_text.encode("utf-8")).hexdigest()
    # Auditing must never make a tool call fail.
    with contextlib.suppress(Exception):
        await store.insert_audit_log(tool, input_hash, outcome, None)