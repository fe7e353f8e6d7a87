"""Categorization rule tools."""

from __future__ import annotations

import contextlib
from typing import Any

from aequi.mcp.protocol import ToolDefinition, ToolResult
from aequi.mcp.registry import ToolRegistry, _compact_json, _int_arg, _pretty_json, _str_arg


def _to_i32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range."""
    return ((value + 2**31) % 2**32) - 2**31


def _field(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record[name]
    return getattr(record, name)


async def _get_rules(store: Any, params: dict[str, Any]) -> ToolResult:
    try:
        rules = await store.get_categorization_rules()
    except Exception as exc:
        return ToolResult.error(str(exc))
    return ToolResult.text(_pretty_json(rules))


async def _save_rule(store: Any, params: dict[str, Any]) -> ToolResult:
    rule = {
        "id": 0,
        "name": _str_arg(params, "name", ""),
        "priority": _to_i32(_int_arg(params, "priority", 0)),
        "match_pattern": _str_arg(params, "match_pattern", ""),
        "match_type": _str_arg(params, "match_type", "contains"),
        "account_id": _int_arg(params, "account_id", 0),
        "created_at": "",
    }
    try:
        rule_id = await store.save_categorization_rule(rule)
    except Exception as exc:
        return ToolResult.error(str(exc))
    return ToolResult.text(_compact_json({"rule_id": rule_id}))


def _matches(description: str, rule: Any) -> bool:
    pattern = str(_field(rule, "match_pattern")).lower()
    if _field(rule, "match_type") == "exact":
        return description == pattern
    return pattern in description


async def _apply_rules(store: Any, params: dict[str, Any]) -> ToolResult:
    batch_id = _str_arg(params, "batch_id", "")
    try:
        rules = list(await store.get_categorization_rules())
    except Exception as exc:
        return ToolResult.error(str(exc))
    try:
        pending = list(await store.get_pending_imported_transactions(batch_id))
    except Exception as exc:
        return ToolResult.error(str(exc))

    matched = 0
    for tx in pending:
        description = str(_field(tx, "description")).lower()
        rule = next((r for r in rules if _matches(description, r)), None)
        if rule is None:
            continue
        with contextlib.suppress(Exception):
            await store.mark_imported_transaction_categorized(
                _field(tx, "id"), _field(rule, "id")
            )
        matched += 1

    return ToolResult.text(
        _compact_json(
            {"total_pending": len(pending), "matched": matched, "unmatched": len(pending) - matched}
        )
    )


def register(registry: ToolRegistry) -> None:
    """Add the categorization rule tools to ``registry``."""
    registry.register(
        ToolDefinition(
            name="aequi_get_categorization_rules",
            description="List all categorization rules",
            input_schema={"type": "object", "properties": {}},
        ),
        False,
        _get_rules,
    )
    registry.register(
        ToolDefinition(
            name="aequi_save_categorization_rule",
            description="Create a categorization rule",
            input_schema={
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "priority": {"type": "integer"},
                    "match_pattern": {"type": "string"},
                    "match_type": {
                        "type": "string",
                        "enum": ["contains", "exact", "regex", "fuzzy"],
                    },
                    "account_id": {"type": "integer"},
                },
                "required": ["name", "priority", "match_pattern", "match_type", "account_id"],
            },
        ),
        True,
        _save_rule,
    )
    registry.register(
        ToolDefinition(
            name="aequi_apply_rules",
            description=(
                "Apply categorization rules to uncategorized imported transactions in a batch"
            ),
            input_schema={
                "type": "object",
                "properties": {
                    "batch_id": {
                        "type": "string",
                        "description": "Import batch ID to apply rules to",
                    }
                },
                "required": ["batch_id"],
            },
        ),
        True,
        _apply_rules,
    )