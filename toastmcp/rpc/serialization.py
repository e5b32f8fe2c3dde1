"""Decoding request payloads and encoding response envelopes."""

from __future__ import annotations

import json
from typing import Any

from toastmcp.rpc.protocol import (
    INVALID_REQUEST,
    JSONRPC_VERSION,
    PARSE_ERROR,
    DispatchOutcome,
    ProtocolError,
    Reply,
    RpcError,
    RpcRequest,
)


class RequestDecodeError(Exception):
    """Payload is not a usable JSON-RPC request."""

    def __init__(self, error: RpcError, request_id: Any = None, has_id: bool = False):
        super().__init__(error.message)
        self.error = error
        self.request_id = request_id
        self.has_id = has_id


def safe_dict(value: Any) -> dict[str, Any]:
    """Return the value when dict-like, otherwise an empty dict."""
    return value if isinstance(value, dict) else {}


def decode_request(payload: str) -> RpcRequest:
    """
    Parse one JSON-RPC request.

    Raises:
        RequestDecodeError: Invalid JSON (parse error, id unknown) or a
            well-formed value that is not a request (invalid request).
    """
    try:
        row = json.loads(payload)
    except json.JSONDecodeError as e:
        raise RequestDecodeError(RpcError(PARSE_ERROR, f"Invalid JSON-RPC payload: {e}"), None, True) from e

    if not isinstance(row, dict):
        raise RequestDecodeError(
            RpcError(INVALID_REQUEST, f"Request must be a JSON object, got {type(row).__name__}"), None, True
        )

    has_id = "id" in row
    request_id = row.get("id")
    method = row.get("method")
    if not isinstance(method, str) or not method:
        raise RequestDecodeError(RpcError(INVALID_REQUEST, "Request is missing a method"), request_id, has_id)

    return RpcRequest(method=method, params=safe_dict(row.get("params")), id=request_id, has_id=has_id)


def jsonrpc_result(request_id: Any, result: Any) -> dict[str, Any]:
    """Build a JSON-RPC 2.0 success response."""
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def jsonrpc_error(request_id: Any, error: RpcError) -> dict[str, Any]:
    """Build a JSON-RPC 2.0 error response."""
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error.to_dict()}


def encode_response(request: RpcRequest, outcome: DispatchOutcome) -> dict[str, Any] | None:
    """
    Turn a dispatch outcome into a response envelope.

    Returns:
        The envelope, or None when no reply is due (notifications and
        NoReply outcomes).
    """
    if isinstance(outcome, Reply):
        return jsonrpc_result(request.id, outcome.result) if request.has_id else None
    if isinstance(outcome, ProtocolError):
        if request.has_id:
            return jsonrpc_error(request.id, outcome.error)
        if outcome.force_reply:
            return jsonrpc_error(None, outcome.error)
    return None
