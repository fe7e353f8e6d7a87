"""MCP over HTTP with server-sent events.

A client opens ``GET /sse`` and receives an ``endpoint`` event naming the URL
to post to. It then sends JSON-RPC requests with
``POST /message?sessionId=<id>``. Each response comes back in the POST reply
and also as a ``message`` event on the client's ``/sse`` stream.
"""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

from aiohttp import web

from aequi.mcp.permissions import Permissions
from aequi.mcp.protocol import JsonRpcRequest, JsonRpcResponse
from aequi.mcp.registry import ToolRegistry
from aequi.mcp.server import default_registry, handle_request

logger = logging.getLogger(__name__)

_SESSION_QUEUE_SIZE = 64
_UNKNOWN_SESSION = -32000

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "*",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Expose-Headers": "*",
}


@dataclass
class SseState:
    """Shared server state: storage, policy, tools and the open sessions.

    ``sessions`` maps a session id to the queue that feeds its event stream.
    ``keep_alive`` is the idle interval, in seconds, between keep-alive comments.
    """

    store: Any
    permissions: Permissions = field(default_factory=Permissions)
    registry: ToolRegistry = field(default_factory=default_registry)
    sessions: dict[str, "asyncio.Queue[JsonRpcResponse]"] = field(default_factory=dict)
    keep_alive: float = 15.0


_STATE_KEY = web.AppKey("sse_state", SseState)


def _event(name: str, data: str) -> bytes:
    lines = [f"event: {name}"]
    lines.extend(f"data: {part}" for part in data.split("\n"))
    return ("\n".join(lines) + "\n\n").encode("utf-8")


def _to_json(response: JsonRpcResponse) -> str:
    return json.dumps(response.to_dict(), separators=(",", ":"), ensure_ascii=False)


def _json_reply(response: JsonRpcResponse, status: int) -> web.Response:
    return web.Response(
        status=status, text=_to_json(response), content_type="application/json"
    )


async def _sse_handler(request: web.Request) -> web.StreamResponse:
    state = request.app[_STATE_KEY]
    session_id = str(uuid.uuid4())
    queue: asyncio.Queue[JsonRpcResponse] = asyncio.Queue(maxsize=_SESSION_QUEUE_SIZE)
    state.sessions[session_id] = queue

    stream = web.StreamResponse(
        status=200,
        headers={
            "Content-Type": "text/event-stream",
            "Cache-Control": "no-cache",
            **_CORS_HEADERS,
        },
    )
    await stream.prepare(request)
    try:
        await stream.write(_event("endpoint", f"/message?sessionId={session_id}"))
        while True:
            try:
                response = await asyncio.wait_for(queue.get(), timeout=state.keep_alive)
            except asyncio.TimeoutError:
                await stream.write(b":\n\n")
                continue
            await stream.write(_event("message", _to_json(response)))
    except ConnectionResetError:
        logger.debug("SSE client for session %s disconnected", session_id)
    return stream


def _is_json_content(content_type: str) -> bool:
    return content_type == "application/json" or (
        content_type.startswith("application/") and content_type.endswith("+json")
    )


async def _message_handler(request: web.Request) -> web.Response:
    state = request.app[_STATE_KEY]

    session_id = request.query.get("sessionId")
    if session_id is None:
        return web.Response(
            status=400,
            text="Failed to deserialize query string: missing field `sessionId`",
        )

    if not _is_json_content(request.content_type):
        return web.Response(
            status=415, text="Expected request with `Content-Type: application/json`"
        )
    try:
        payload = json.loads(await request.read())
    except ValueError as exc:
        return web.Response(status=400, text=f"Failed to parse the request body as JSON: {exc}")
    try:
        rpc_request = JsonRpcRequest.from_dict(payload)
    except ValueError as exc:
        return web.Response(
            status=422, text=f"Failed to deserialize the JSON body into the target type: {exc}"
        )

    queue = state.sessions.get(session_id)
    if queue is None:
        return _json_reply(
            JsonRpcResponse.error(rpc_request.id, _UNKNOWN_SESSION, "Unknown session"), 404
        )

    response = await handle_request(rpc_request, state.registry, state.store, state.permissions)

    # Delivery on the event stream is best-effort.
    try:
        queue.put_nowait(response)
    except asyncio.QueueFull:
        logger.debug("SSE queue for session %s is full; response dropped", session_id)

    return _json_reply(response, 202)


@web.middleware
async def _cors(request: web.Request, handler: Any) -> web.StreamResponse:
    if request.method == "OPTIONS" and "Access-Control-Request-Method" in request.headers:
        return web.Response(status=200, headers=_CORS_HEADERS)
    try:
        response = await handler(request)
    except web.HTTPException as exc:
        exc.headers["Access-Control-Allow-Origin"] = "*"
        raise
    if not response.prepared:
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Expose-Headers"] = "*"
    return response


def create_app(state: SseState) -> web.Application:
    """Build the web application serving ``/sse`` and ``/message``."""
    app = web.Application(middlewares=[_cors])
    app[_STATE_KEY] = state
    app.router.add_get("/sse", _sse_handler)
    app.router.add_post("/message", _message_handler)
    return app


async def run_sse_server(store: Any, permissions: Permissions, port: int) -> None:
    """Serve MCP over SSE on all interfaces at ``port`` until cancelled."""
    state = SseState(store=store, permissions=permissions)
    runner = web.AppRunner(create_app(state))
    await runner.setup()
    try:
        site = web.TCPSite(runner, "0.0.0.0", port)
        await site.start()
        logger.info("aequi-mcp SSE server listening on port %d", port)
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()