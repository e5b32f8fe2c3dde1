"""RPC handlers for session lifecycle: initialize and ping."""

from __future__ import annotations

from typing import Any

from toastmcp.rpc.protocol import DispatchOutcome, Reply

SERVER_CAPABILITIES: dict[str, Any] = {"tools": {}, "resources": {}}


def try_handle_lifecycle_method(
    *,
    method: str,
    params: dict[str, Any],
    server_name: str,
    server_version: str,
    default_protocol_version: str,
) -> DispatchOutcome | None:
    """Handle initialize/ping. Return None when method is unrelated."""
    if method == "initialize":
        requested = params.get("protocolVersion")
        protocol_version = requested if isinstance(requested, str) else default_protocol_version
        return Reply(
            {
                "protocolVersion": protocol_version,
                "capabilities": SERVER_CAPABILITIES,
                "serverInfo": {"name": server_name, "version": server_version},
            }
        )

    if method == "ping":
        return Reply(None)

    return None
