import pytest

from aequi.mcp.protocol import (
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ToolDefinition,
    ToolResult,
)


def test_json_rpc_success_response():
    resp = JsonRpcResponse.success(1, {"ok": True})
    assert resp.jsonrpc == "2.0"
    assert resp.result == {"ok": True}
    assert resp.error is None


def test_json_rpc_error_response():
    resp = JsonRpcResponse.error(1, -32600, "bad")
    assert resp.result is None
    assert resp.error.code == -32600
    assert resp.error.message == "bad"


def test_tool_result_text():
    r = ToolResult.text("hello")
    assert r.is_error is None
    assert r.content[0].text == "hello"


def test_tool_result_error():
    r = ToolResult.error("fail")
    assert r.is_error is True
    assert r.content[0].text == "fail"


def test_success_to_dict_skips_absent_members():
    assert JsonRpcResponse.success(None, {}).to_dict() == {"jsonrpc": "2.0", "result": {}}


def test_error_to_dict():
    assert JsonRpcResponse.error(7, -32601, "Method not found: x").to_dict() == {
        "jsonrpc": "2.0",
        "id": 7,
        "error": {"code": -32601, "message": "Method not found: x"},
    }


def test_response_round_trip():
    resp = JsonRpcResponse.error("abc", -32000, "Unknown session")
    back = JsonRpcResponse.from_dict(resp.to_dict())
    assert back == resp
    assert back.error == JsonRpcError(-32000, "Unknown session")


def test_response_from_dict_rejects_bad_error():
    with pytest.raises(ValueError):
        JsonRpcResponse.from_dict({"jsonrpc": "2.0", "error": {"code": "x"}})


def test_request_from_dict_defaults():
    req = JsonRpcRequest.from_dict({"jsonrpc": "2.0", "method": "tools/list"})
    assert (req.id, req.method, req.params) == (None, "tools/list", None)


def test_request_from_dict_full():
    req = JsonRpcRequest.from_dict(
        {"jsonrpc": "2.0", "id": 3, "method": "tools/call", "params": {"name": "t"}}
    )
    assert req.id == 3
    assert req.params == {"name": "t"}


@pytest.mark.parametrize(
    "data",
    [[], {"method": "x"}, {"jsonrpc": "2.0"}, {"jsonrpc": "2.0", "method": 5}],
)
def test_request_from_dict_rejects_malformed(data):
    with pytest.raises(ValueError):
        JsonRpcRequest.from_dict(data)


def test_tool_definition_to_dict():
    d = ToolDefinition("t", "desc", {"type": "object"}).to_dict()
    assert d == {"name": "t", "description": "desc", "inputSchema": {"type": "object"}}


def test_tool_result_to_dict():
    assert ToolResult.text("hi").to_dict() == {"content": [{"type": "text", "text": "hi"}]}
    assert ToolResult.error("no").to_dict() == {
        "content": [{"type": "text", "text": "no"}],
        "isError": True,
    }