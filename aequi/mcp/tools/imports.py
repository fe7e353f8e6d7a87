"""CSV import profile and pending-import tools."""

from __future__ import annotations

from typing import Any

from aequi.mcp.protocol import ToolDefinition, ToolResult
from aequi.mcp.registry import (
    ToolRegistry,
    _bool_arg,
    _compact_json,
    _int_arg,
    _pretty_json,
    _str_arg,
)

_COLUMNS = (
    "date_column",
    "description_column",
    "amount_column",
    "debit_column",
    "credit_column",
    "memo_column",
)


async def _get_import_profiles(store: Any, params: dict[str, Any]) -> ToolResult:
    try:
        profiles = await store.get_import_profiles()
    except Exception as exc:
        return ToolResult.error(str(exc))
    return ToolResult.text(_pretty_json(profiles))


async def _save_import_profile(store: Any, params: dict[str, Any]) -> ToolResult:
    profile: dict[str, Any] = {
        "id": 0,
        "name": _str_arg(params, "name", ""),
        "has_header": _bool_arg(params, "has_header", True),
        "delimiter": _str_arg(params, "delimiter", ","),
    }
    profile.update({column: _int_arg(params, column) for column in _COLUMNS})
    profile["date_format"] = _str_arg(params, "date_format", "%m/%d/%Y")
    profile["created_at"] = ""
    try:
        profile_id = await store.save_import_profile(profile)
    except Exception as exc:
        return ToolResult.error(str(exc))
    return ToolResult.text(_compact_json({"profile_id": profile_id}))


async def _get_pending_imports(store: Any, params: dict[str, Any]) -> ToolResult:
    batch_id = _str_arg(params, "batch_id", "")
    try:
        rows = await store.get_imported_transactions_for_review(batch_id)
    except Exception as exc:
        return ToolResult.error(str(exc))
    return ToolResult.text(_pretty_json(rows))


def _column(description: str) -> dict[str, str]:
    return {"type": "integer", "description": description}


def register(registry: ToolRegistry) -> None:
    """Add the import tools to ``registry``."""
    registry.register(
        ToolDefinition(
            name="aequi_get_import_profiles",
            description="List saved CSV import profiles (column mappings per institution)",
            input_schema={"type": "object", "properties": {}},
        ),
        False,
        _get_import_profiles,
    )
    registry.register(
        ToolDefinition(
            name="aequi_save_import_profile",
            description="Save a CSV import profile with column mappings",
            input_schema={
                "type": "object",
                "properties": {
                    "name": {
                        "type": "string",
                        "description": "Profile name (e.g., 'Chase Checking')",
                    },
                    "has_header": {"type": "boolean", "default": True},
                    "delimiter": {"type": "string", "default": ","},
                    "date_column": _column("0-based column index for date"),
                    "description_column": _column("0-based column index for description"),
                    "amount_column": _column(
                        "0-based column index for amount (single column)"
                    ),
                    "debit_column": _column(
                        "0-based column index for debit (separate columns)"
                    ),
                    "credit_column": _column(
                        "0-based column index for credit (separate columns)"
                    ),
                    "memo_column": _column("0-based column index for memo"),
                    "date_format": {"type": "string", "default": "%m/%d/%Y"},
                },
                "required": ["name"],
            },
        ),
        True,
        _save_import_profile,
    )
    registry.register(
        ToolDefinition(
            name="aequi_get_pending_imports",
            description="List imported transactions pending review for a batch",
            input_schema={
                "type": "object",
                "properties": {
                    "batch_id": {"type": "string", "description": "Import batch ID"}
                },
                "required": ["batch_id"],
            },
        ),
        False,
        _get_pending_imports,
    )