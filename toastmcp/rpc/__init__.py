"""JSON-RPC layer: protocol types, decoding and method dispatch."""

from toastmcp.rpc.dispatcher import Dispatcher
from toastmcp.rpc.protocol import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    NO_REPLY,
    PARSE_ERROR,
    NoReply,
    ProtocolError,
    Reply,
    RpcError,
    RpcRequest,
    ToolResult,
)
from toastmcp.rpc.serialization import RequestDecodeError, decode_request, encode_response

__all__ = [
    "Dispatcher",
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "NO_REPLY",
    "PARSE_ERROR",
    "NoReply",
    "ProtocolError",
    "Reply",
    "RpcError",
    "RpcRequest",
    "ToolResult",
    "RequestDecodeError",
    "decode_request",
    "encode_response",
]
