"""JSON-RPC 2.0 request/response models and dispatch outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

JSONRPC_VERSION = "2.0"

# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


@dataclass(slots=True)
class RpcError:
    """JSON-RPC error object."""

    code: int
    message: str
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            result["data"] = self.data
        return result


@dataclass(slots=True)
class RpcRequest:
    """Decoded request frame. ``has_id`` is False for notifications."""

    method: str
    params: dict[str, Any] = field(default_factory=dict)
    id: Any = None
    has_id: bool = False

    @property
    def is_notification(self) -> bool:
        return not self.has_id


# --- dispatch outcomes ---


@dataclass(slots=True, frozen=True)
class NoReply:
    """Nothing is written back."""


NO_REPLY = NoReply()


@dataclass(slots=True)
class Reply:
    """Successful result. Tool failures are also Replies (see ToolResult)."""

    result: Any = None


@dataclass(slots=True)
class ProtocolError:
    """The call itself was malformed; becomes a JSON-RPC error response.

    ``force_reply`` sends the error even when the request carried no id.
    """

    error: RpcError
    force_reply: bool = False


DispatchOutcome = NoReply | Reply | ProtocolError


@dataclass(slots=True)
class ToolResult:
    """MCP tool result: text content blocks, optionally flagged as failed."""

    content: list[dict[str, Any]]
    is_error: bool = False

    @classmethod
    def text(cls, text: str, *, is_error: bool = False) -> "ToolResult":
        return cls(content=[{"type": "text", "text": text}], is_error=is_error)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"content": self.content}
        if self.is_error:
            payload["isError"] = True
        return payload
