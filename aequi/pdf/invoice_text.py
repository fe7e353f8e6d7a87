"""Plain-text rendering of invoices for e-mail bodies and text export.

The invoice is expected to provide ``invoice_number``, ``issue_date``,
``due_date``, ``lines``, ``tax_lines``, ``terms``, ``notes`` and the methods
``subtotal()``, ``discount_amount()``, ``tax_amount()`` and ``total()``. Each
line provides ``description``, ``quantity``, ``unit_rate`` and ``amount()``.
Each tax line provides ``label``. Money values are rendered with ``str()``,
and a money value that is zero must be falsy.

The contact is expected to provide ``name``, ``email`` and ``address``.
"""

from __future__ import annotations

from typing import Any

_RULE = "-" * 76


def _row(description: Any, qty: Any, rate: Any, amount: Any) -> str:
    return f"{str(description):<40} {str(qty):>8} {str(rate):>12} {str(amount):>12}\n"


def _total_row(label: str, amount: Any) -> str:
    return f"{label:>64} {str(amount):>12}\n"


def render_invoice_text(invoice: Any, contact: Any) -> str:
    """Render an invoice as a human-readable text document."""
    parts = [
        f"INVOICE {invoice.invoice_number}\n",
        f"Date: {invoice.issue_date}\n",
        f"Due:  {invoice.due_date}\n",
        f"\nBill To: {contact.name}\n",
    ]
    if contact.email is not None:
        parts.append(f"         {contact.email}\n")
    if contact.address is not None:
        parts.append(f"         {contact.address}\n")

    parts.append("\n")
    parts.append(_row("Description", "Qty", "Rate", "Amount"))
    parts.append(_RULE + "\n")
    parts.extend(
        _row(line.description, line.quantity, line.unit_rate, line.amount())
        for line in invoice.lines
    )
    parts.append(_RULE + "\n")

    parts.append(_total_row("Subtotal:", invoice.subtotal()))

    discount = invoice.discount_amount()
    if discount:
        parts.append(_total_row("Discount:", discount))

    tax = invoice.tax_amount()
    if tax:
        # Every tax line shows the combined tax amount.
        parts.extend(_total_row(f"{tl.label}:", tax) for tl in invoice.tax_lines)

    parts.append(_total_row("TOTAL:", invoice.total()))

    if invoice.terms is not None:
        parts.append(f"\nTerms: {invoice.terms}\n")
    if invoice.notes is not None:
        parts.append(f"\n{invoice.notes}\n")

    return "".join(parts)