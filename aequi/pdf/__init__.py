"""Invoice rendering as plain text and Typst markup."""

__all__ = ["invoice_text", "typst_markup"]