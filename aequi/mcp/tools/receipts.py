"""Receipt intake and review tools."""

from __future__ import annotations

import asyncio
import hashlib
from pathlib import PurePath
from typing import Any, Optional

from aequi.mcp.protocol import ToolDefinition, ToolResult
from aequi.mcp.registry import ToolRegistry, _compact_json, _int_arg, _pretty_json, _str_arg

_DEFAULT_EXT = "jpg"


def _read_file(path: str) -> bytes:
    with open(path, "rb") as handle:
        return handle.read()


def _extension(file_path: str) -> Optional[str]:
    """Return the text after the last dot of the file name, if it has one."""
    name = PurePath(file_path).name
    if not name or name == "..":
        return None
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return None
    return ext


async def _ingest_receipt(store: Any, params: dict[str, Any]) -> ToolResult:
    file_path = _str_arg(params, "file_path", "")
    vendor = _str_arg(params, "vendor")
    date = _str_arg(params, "date")
    total_cents = _int_arg(params, "total_cents")

    try:
        data = await asyncio.to_thread(_read_file, file_path)
    except OSError as exc:
        return ToolResult.error(f"Cannot read file: {exc}")

    file_hash = hashlib.sha256(data).hexdigest()

    try:
        existing = await store.check_receipt_duplicate(file_hash)
    except Exception:
        existing = None
    if existing is not None:
        return ToolResult.error(f"Duplicate receipt (existing id: {existing})")

    ext = _extension(file_path)
    if ext is None:
        ext = _DEFAULT_EXT

    try:
        receipt_id = await store.insert_receipt(
            file_hash,
            ext,
            file_path,
            None,
            vendor,
            date,
            total_cents,
            None,
            None,
            None,
            0.0,
        )
    except Exception as exc:
        return ToolResult.error(str(exc))
    return ToolResult.text(
        _compact_json(
            {"receipt_id": receipt_id, "file_hash": file_hash, "status": "pending_review"}
        )
    )


async def _get_pending_receipts(store: Any, params: dict[str, Any]) -> ToolResult:
    try:
        receipts = await store.get_receipts_pending_review()
    except Exception as exc:
        return ToolResult.error(str(exc))
    return ToolResult.text(_pretty_json(receipts))


async def _approve_receipt(store: Any, params: dict[str, Any]) -> ToolResult:
    receipt_id = _int_arg(params, "receipt_id", 0)
    transaction_id = _int_arg(params, "transaction_id")
    try:
        if transaction_id is not None:
            await store.link_receipt_to_transaction(receipt_id, transaction_id)
        else:
            await store.update_receipt_status(receipt_id, "approved")
    except Exception as exc:
        return ToolResult.error(str(exc))
    return ToolResult.text("Receipt approved")


async def _reject_receipt(store: Any, params: dict[str, Any]) -> ToolResult:
    receipt_id = _int_arg(params, "receipt_id", 0)
    try:
        await store.update_receipt_status(receipt_id, "rejected")
    except Exception as exc:
        return ToolResult.error(str(exc))
    return ToolResult.text("Receipt rejected")


def register(registry: ToolRegistry) -> None:
    """Add the receipt tools to ``registry``."""
    registry.register(
        ToolDefinition(
            name="aequi_ingest_receipt",
            description="Ingest a receipt image by file path for OCR processing",
            input_schema={
                "type": "object",
                "properties": {
                    "file_path": {
                        "type": "string",
                        "description": "Absolute path to the receipt image file",
                    },
                    "vendor": {"type": "string", "description": "Vendor name (if known)"},
                    "date": {
                        "type": "string",
                        "description": "Receipt date YYYY-MM-DD (if known)",
                    },
                    "total_cents": {
                        "type": "integer",
                        "description": "Total amount in cents (if known)",
                    },
                },
                "required": ["file_path"],
            },
        ),
        True,
        _ingest_receipt,
    )
    registry.register(
        ToolDefinition(
            name="aequi_get_pending_receipts",
            description="List receipts pending review",
            input_schema={"type": "object", "properties": {}},
        ),
        False,
        _get_pending_receipts,
    )
    registry.register(
        ToolDefinition(
            name="aequi_approve_receipt",
            description="Approve a receipt",
            input_schema={
                "type": "object",
                "properties": {
                    "receipt_id": {"type": "integer"},
                    "transaction_id": {"type": "integer"},
                },
                "required": ["receipt_id"],
            },
        ),
        True,
        _approve_receipt,
    )
    registry.register(
        ToolDefinition(
            name="aequi_reject_receipt",
            description="Reject a receipt",
            input_schema={
                "type": "object",
                "properties": {"receipt_id": {"type": "integer"}},
                "required": ["receipt_id"],
            },
        ),
        True,
        _reject_receipt,
    )