# aequi

Bookkeeping building blocks for freelancers and small businesses:

- **`aequi.ocr`** hashes receipt files, lays them out in a content-addressed
  attachment store and normalizes receipt images before text recognition.
- **`aequi.mcp`** exposes ledger operations (accounts, receipts, invoices,
  categorization rules, CSV import profiles, reconciliation) as tools over the
  Model Context Protocol, through line-delimited JSON-RPC on stdio or over
  HTTP with server-sent events.
- **`aequi.pdf`** renders invoices as fixed-width plain text and as Typst markup.

## Installation

Install the package with pip from a checkout or a built wheel. The `test`
extra pulls in pytest and pytest-asyncio.

## Content-addressed attachments

```python
from pathlib import Path
from aequi.ocr.digest import sha256_bytes, sha256_file, to_hex, attachment_path

digest = to_hex(sha256_bytes(b"receipt image bytes"))
print(attachment_path(Path("attachments"), digest, "jpg"))
# attachments/<first two hex chars>/<full digest>.jpg
```

`sha256_file` reads a file in 8 KiB chunks and returns the raw 32-byte digest.

## Image preprocessing

```python
from aequi.ocr.preprocess import prepare_for_ocr, prepare_for_ocr_from_bytes, normalize

png_bytes = prepare_for_ocr("receipt.jpg")
```

Images larger than 2800 px on either side are scaled down (keeping the aspect
ratio), converted to grayscale and contrast-stretched to the full 0–255 range;
the result is returned as PNG bytes. Unreadable input raises `PreprocessError`.

## Tool permissions

```python
from aequi.mcp.permissions import Permissions

perms = Permissions(read_only=True, disabled_tools={"aequi_ingest_receipt"})
perms.is_allowed("aequi_list_accounts", False)       # True
perms.is_allowed("aequi_save_import_profile", True)  # False: writes blocked
perms.is_allowed("aequi_ingest_receipt", False)      # False: disabled
```

Tool results and JSON-RPC envelopes live in `aequi.mcp.protocol`:

```python
from aequi.mcp.protocol import JsonRpcResponse, ToolResult

ToolResult.text("hello").to_dict()
# {'content': [{'type': 'text', 'text': 'hello'}]}
JsonRpcResponse.error(1, -32601, "Method not found: bogus").to_dict()
# {'jsonrpc': '2.0', 'id': 1, 'error': {'code': -32601, 'message': 'Method not found: bogus'}}
```

## The MCP server

`aequi.mcp.server.default_registry()` returns a `ToolRegistry` holding the
built-in tools from `aequi.mcp.tools`: `accounts`, `receipts`, `invoices`,
`rules`, `imports` and `reconciliation`. `ToolRegistry.call` refuses unknown
tools and tools the permissions forbid, returning an error `ToolResult`.

`handle_request` answers `initialize`, `notifications/initialized`,
`tools/list` and `tools/call`; any other method gets error `-32601`. Every
tool call is written to the audit log (`aequi.mcp.audit.log_tool_call`) with a
SHA-256 hash of its arguments rather than the arguments themselves.

```python
import asyncio
from aequi.mcp.permissions import Permissions
from aequi.mcp.server import run_stdio_server

asyncio.run(run_stdio_server(store, Permissions()))
```

`run_stdio_server` reads one request per line (from standard input unless a
`reader` is given) and writes one JSON response per line; unparsable lines get
error `-32700`.

For HTTP, `aequi.mcp.sse.run_sse_server(store, permissions, port)` serves
`GET /sse`, which opens an event stream whose first `endpoint` event names
`/message?sessionId=<id>`, and `POST /message?sessionId=<id>`, which answers
with status 202 and the JSON-RPC response and also pushes it onto the
session's stream. An unknown session gets status 404 with error `-32000`.
`create_app(SseState(store=store))` builds the aiohttp application without
starting it.

### The store

The tools talk to a `store` object supplied by the caller. Its methods are
awaited and include `get_all_accounts`, `get_account_by_code`,
`check_receipt_duplicate`, `insert_receipt`, `get_receipts_pending_review`,
`link_receipt_to_transaction`, `update_receipt_status`,
`get_invoices_by_status`, `insert_invoice`, `insert_payment`,
`get_categorization_rules`, `save_categorization_rule`,
`get_pending_imported_transactions`, `mark_imported_transaction_categorized`,
`get_import_profiles`, `save_import_profile`,
`get_imported_transactions_for_review`, `create_reconciliation_session`,
`get_reconciliation_items`, `resolve_reconciliation_item` and
`insert_audit_log`. An exception raised by a store method becomes an error
result for that tool call.

## Invoices

`aequi.pdf.invoice_text.render_invoice_text(invoice, contact)` lays out an
invoice as a fixed-width text document for e-mail bodies.
`aequi.pdf.typst_markup.invoice_to_typst(invoice, contact)` produces Typst
source, escaping user text with `escape`:

```python
from aequi.pdf.typst_markup import escape

escape("$100 #1")   # '\\$100 \\#1'
```

Both take duck-typed invoice and contact objects; the module docstrings list
the attributes they read.

## What this package does not do

- It ships no storage backend: the MCP tools need a store object with the
  methods listed above, and none is included.
- It has no tools for creating or listing transactions, profit and loss, or
  tax estimates; only the tool groups listed above are registered.
- It does not recognize text in images or pull vendor, date and totals out of
  receipt text; `aequi.ocr` stops at hashing, storage layout and image
  preprocessing.
- It does not compile Typst markup into PDF.
- It installs no command; the servers are started from Python code.