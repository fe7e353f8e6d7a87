"""JSON-RPC 2.0 messages and MCP tool result shapes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class JsonRpcRequest:
    """An incoming JSON-RPC request or notification."""

    jsonrpc: str
    method: str
    id: Any = None
    params: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> "JsonRpcRequest":
        """Build a request from decoded JSON, raising ValueError if malformed."""
        if not isinstance(data, dict):
            raise ValueError("request must be a JSON object")
        jsonrpc = data.get("jsonrpc")
        if not isinstance(jsonrpc, str):
            raise ValueError("missing or invalid field `jsonrpc`")
        method = data.get("method")
        if not isinstance(method, str):
            raise ValueError("missing or invalid field `method`")
        return cls(
            jsonrpc=jsonrpc,
            method=method,
            id=data.get("id"),
            params=data.get("params"),
        )


@dataclass
class JsonRpcError:
    """The error member of a JSON-RPC response."""

    code: int
    message: str


class JsonRpcResponse:
    """A JSON-RPC response carrying either a result or an error."""

    def __init__(
        self,
        jsonrpc: str = "2.0",
        id: Any = None,
        result: Any = None,
        error: Optional[JsonRpcError] = None,
    ) -> None:
        self.jsonrpc = jsonrpc
        self.id = id
        self.result = result
        self.error = error

    @classmethod
    def success(cls, id: Any, result: Any) -> "JsonRpcResponse":
        return cls(id=id, result=result)

    @classmethod
    def error(cls, id: Any, code: int, message: str) -> "JsonRpcResponse":  # noqa: F811
        return cls(id=id, error=JsonRpcError(code, message))

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form, leaving out absent members."""
        out: dict[str, Any] = {"jsonrpc": self.jsonrpc}
        if self.id is not None:
            out["id"] = self.id
        if self.result is not None:
            out["result"] = self.result
        if self.error is not None:
            out["error"] = {"code": self.error.code, "message": self.error.message}
        return out

    @classmethod
    def from_dict(cls, data: Any) -> "JsonRpcResponse":
        """Build a response from decoded JSON, raising ValueError if malformed."""
        if not isinstance(data, dict) or not isinstance(data.get("jsonrpc"), str):
            raise ValueError("response must be an object with a string `jsonrpc`")
        error = None
        raw_error = data.get("error")
        if raw_error is not None:
            if (
                not isinstance(raw_error, dict)
                or not isinstance(raw_error.get("code"), int)
                or not isinstance(raw_error.get("message"), str)
            ):
                raise ValueError("invalid `error` member")
            error = JsonRpcError(raw_error["code"], raw_error["message"])
        return cls(
            jsonrpc=data["jsonrpc"],
            id=data.get("id"),
            result=data.get("result"),
            error=error,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonRpcResponse):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"JsonRpcResponse(jsonrpc={self.jsonrpc!r}, id={self.id!r}, "
            f"result={self.result!r}, error={self.error!r})"
        )


@dataclass
class ToolDefinition:
    """A tool as advertised by ``tools/list``."""

    name: str
    description: str
    input_schema: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass
class ToolContent:
    """One content block of a tool result."""

    text: str
    content_type: str = "text"


@dataclass
class ToolResult:
    """The outcome of a tool call."""

    content: list[ToolContent] = field(default_factory=list)
    is_error: Optional[bool] = None

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(content=[ToolContent(text)])

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(content=[ToolContent(message)], is_error=True)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "content": [{"type": c.content_type, "text": c.text} for c in self.content]
        }
        if self.is_error is not None:
            out["isError"] = self.is_error
        return out