"""Typst markup for invoices, ready to be compiled into a PDF.

The invoice and contact interfaces are the same as for the text renderer.
In addition ``invoice.discount`` may be None, an object with a ``percentage``
attribute (a percentage discount), or any other object (a flat discount),
and each tax line provides ``rate`` besides ``label``.
"""

from __future__ import annotations

from typing import Any

_ESCAPES = (
    ("\\", "\\\\"),
    ("#", "\\#"),
    ("$", "\\$"),
    ("*", "\\*"),
    ("_", "\\_"),
    ("@", "\\@"),
    ("<", "\\<"),
    (">", "\\>"),
)


def escape(text: str) -> str:
    """Escape characters that have a meaning in Typst markup."""
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return text


def _money(value: Any) -> str:
    return escape(str(value))


def _discount_label(discount: Any) -> str:
    percentage = getattr(discount, "percentage", None)
    if percentage is not None:
        return f"Discount ({percentage}%):"
    return "Discount:"


def invoice_to_typst(invoice: Any, contact: Any) -> str:
    """Return Typst source for a one-page invoice."""
    out: list[str] = [
        "#set page(margin: (x: 2cm, y: 2cm))\n",
        "#set text(size: 10pt)\n\n",
        '#align(right)[#text(size: 24pt, weight: "bold")[INVOICE]]\n\n',
        "#grid(\n",
        "  columns: (1fr, auto),\n",
        "  [\n",
        '    #text(weight: "bold")[Bill To:]\\\n',
        f"    {escape(contact.name)}\\\n",
    ]
    if contact.email is not None:
        out.append(f"    {escape(contact.email)}\\\n")
    if contact.address is not None:
        out.append(f"    {escape(contact.address)}\\\n")
    out += [
        "  ],\n",
        "  align(right)[\n",
        f'    #text(weight: "bold")[Invoice \\#:] {escape(invoice.invoice_number)}\\\n',
        f'    #text(weight: "bold")[Date:] {invoice.issue_date}\\\n',
        f'    #text(weight: "bold")[Due:] {invoice.due_date}\\\n',
        "  ],\n",
        ")\n\n",
        "#v(1em)\n",
        "#table(\n",
        "  columns: (1fr, auto, auto, auto),\n",
        "  align: (left, right, right, right),\n",
        "  stroke: none,\n",
        "  table.hline(),\n",
        "  table.header(\n",
        "    [*Description*], [*Qty*], [*Rate*], [*Amount*],\n",
        "  ),\n",
        "  table.hline(),\n",
    ]
    out.extend(
        f"  [{escape(line.description)}], [{line.quantity}], "
        f"[{_money(line.unit_rate)}], [{_money(line.amount())}],\n"
        for line in invoice.lines
    )
    out += [
        "  table.hline(),\n",
        ")\n\n",
        "#align(right)[\n",
        "#grid(\n",
        "  columns: (auto, 8em),\n",
        "  row-gutter: 0.5em,\n",
        "  align: (right, right),\n",
        f"  [Subtotal:], [{_money(invoice.subtotal())}],\n",
    ]

    discount = invoice.discount_amount()
    if discount:
        label = _discount_label(invoice.discount)
        out.append(f"  [{label}], [\u2212{_money(discount)}],\n")

    tax = invoice.tax_amount()
    if tax:
        out.extend(
            f"  [{escape(tl.label)} ({tl.rate}%):], [{_money(tax)}],\n"
            for tl in invoice.tax_lines
        )

    out += [
        f'  [#text(weight: "bold")[Total:]], '
        f'[#text(weight: "bold")[{_money(invoice.total())}]],\n',
        ")\n",
        "]\n\n",
    ]

    if invoice.terms is not None:
        out.append(f'#v(2em)\n#text(weight: "bold")[Terms:] {escape(invoice.terms)}\n')
    if invoice.notes is not None:
        out.append(f"\n#v(1em)\n{escape(invoice.notes)}\n")

    return "".join(out)