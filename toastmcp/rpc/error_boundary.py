"""Common RPC error-boundary helpers for server dispatch."""

from __future__ import annotations

from typing import Any, Callable

from toastmcp.rpc.protocol import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    NO_REPLY,
    DispatchOutcome,
    ProtocolError,
    Reply,
    RpcError,
    ToolResult,
)
from toastmcp.utils.exceptions import classify_exception, format_tool_error, sanitize_error_message


def invalid_params(message: str, data: Any = None) -> ProtocolError:
    return ProtocolError(RpcError(INVALID_PARAMS, message, data))


def invalid_request(message: str, *, force_reply: bool = False) -> ProtocolError:
    return ProtocolError(RpcError(INVALID_REQUEST, message), force_reply=force_reply)


def unknown_method_result(*, method: str, has_id: bool) -> DispatchOutcome:
    """Method-not-found for calls, silence for notifications."""
    if not has_id:
        return NO_REPLY
    return ProtocolError(RpcError(METHOD_NOT_FOUND, f"Method not found: {method}"))


def tool_failure_result(
    *,
    tool: str,
    exc: Exception,
    log_warning: Callable[..., None],
) -> Reply:
    """The tool ran but its action failed: a successful reply flagged isError."""
    code, _ = classify_exception(exc)
    message = format_tool_error(exc)
    log_warning("Tool {} failed with {}: {}", tool, code, message)
    return Reply(ToolResult.text(f"Notification failed: {message}", is_error=True).to_dict())


def unhandled_exception_result(
    *,
    method: str,
    exc: Exception,
    log_exception: Callable[..., None],
) -> ProtocolError:
    """Map unexpected exceptions to standardized INTERNAL_ERROR responses."""
    code, category = classify_exception(exc)
    sanitized = sanitize_error_message(str(exc))
    log_exception("RPC method {} failed with [{}]: {}", method, code, sanitized)
    return ProtocolError(
        RpcError(
            INTERNAL_ERROR,
            f"Internal error in {method}: {sanitized}",
            {"error_code": code, "category": category.value},
        )
    )
