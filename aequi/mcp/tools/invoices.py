"""Invoice tools: unpaid listing, drafting and payment recording."""

from __future__ import annotations

from typing import Any

from aequi.mcp.protocol import ToolDefinition, ToolResult
from aequi.mcp.registry import ToolRegistry, _compact_json, _int_arg, _pretty_json, _str_arg

_UNPAID_STATUSES = ("Sent", "Viewed", "PartiallyPaid")


async def _invoices_with_status(store: Any, status: str) -> list[Any]:
    try:
        return list(await store.get_invoices_by_status(status))
    except Exception:
        return []


async def _list_unpaid_invoices(store: Any, params: dict[str, Any]) -> ToolResult:
    unpaid: list[Any] = []
    for status in _UNPAID_STATUSES:
        unpaid.extend(await _invoices_with_status(store, status))
    return ToolResult.text(_pretty_json(unpaid))


async def _draft_invoice(store: Any, params: dict[str, Any]) -> ToolResult:
    number = _str_arg(params, "invoice_number", "")
    contact_id = _int_arg(params, "contact_id", 0)
    issue = _str_arg(params, "issue_date", "")
    due = _str_arg(params, "due_date", "")
    notes = _str_arg(params, "notes")
    try:
        invoice_id = await store.insert_invoice(
            number, contact_id, "Draft", None, issue, due, None, None, notes, None
        )
    except Exception as exc:
        return ToolResult.error(str(exc))
    return ToolResult.text(_compact_json({"invoice_id": invoice_id, "status": "Draft"}))


async def _record_payment(store: Any, params: dict[str, Any]) -> ToolResult:
    invoice_id = _int_arg(params, "invoice_id", 0)
    amount = _int_arg(params, "amount_cents", 0)
    date = _str_arg(params, "date", "")
    method = _str_arg(params, "method")
    try:
        payment_id = await store.insert_payment(invoice_id, amount, date, method, None)
    except Exception as exc:
        return ToolResult.error(str(exc))
    return ToolResult.text(_compact_json({"payment_id": payment_id}))


def register(registry: ToolRegistry) -> None:
    """Add the invoice tools to ``registry``."""
    registry.register(
        ToolDefinition(
            name="aequi_list_unpaid_invoices",
            description="List all unpaid invoices",
            input_schema={"type": "object", "properties": {}},
        ),
        False,
        _list_unpaid_invoices,
    )
    registry.register(
        ToolDefinition(
            name="aequi_draft_invoice",
            description="Create a draft invoice",
            input_schema={
                "type": "object",
                "properties": {
                    "invoice_number": {"type": "string"},
                    "contact_id": {"type": "integer"},
                    "issue_date": {"type": "string"},
                    "due_date": {"type": "string"},
                    "notes": {"type": "string"},
                },
                "required": ["invoice_number", "contact_id", "issue_date", "due_date"],
            },
        ),
        True,
        _draft_invoice,
    )
    registry.register(
        ToolDefinition(
            name="aequi_record_payment",
            description="Record a payment against an invoice",
            input_schema={
                "type": "object",
                "properties": {
                    "invoice_id": {"type": "integer"},
                    "amount_cents": {"type": "integer"},
                    "date": {"type": "string"},
                    "method": {"type": "string"},
                },
                "required": ["invoice_id", "amount_cents", "date"],
            },
        ),
        True,
        _record_payment,
    )