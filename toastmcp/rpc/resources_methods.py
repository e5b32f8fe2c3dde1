"""RPC handlers for the static asset-catalogue resource."""

from __future__ import annotations

import json
from typing import Any, Callable

from toastmcp.rpc.error_boundary import invalid_params
from toastmcp.rpc.protocol import DispatchOutcome, Reply

ASSETS_URI = "toastmcp://assets"
ASSETS_MIME_TYPE = "application/json"

ASSETS_RESOURCE: dict[str, Any] = {
    "uri": ASSETS_URI,
    "name": "ToastMCP assets",
    "description": "Lists available icon and sound ids.",
    "mimeType": ASSETS_MIME_TYPE,
}

TEMPLATE_METHODS = ("resource-templates/list", "resources/templates/list")


def try_handle_resources_method(
    *,
    method: str,
    params: dict[str, Any],
    catalogue: Callable[[], dict[str, list[str]]],
) -> DispatchOutcome | None:
    """Handle resources/*. Return None when method is unrelated."""
    if method == "resources/list":
        return Reply({"resources": [ASSETS_RESOURCE]})

    if method in TEMPLATE_METHODS:
        return Reply({"resourceTemplates": []})

    if method == "resources/read":
        uri = params.get("uri")
        uri = uri if isinstance(uri, str) else ""
        if uri != ASSETS_URI:
            return invalid_params(f"Unknown resource: {uri}")
        return Reply(
            {
                "contents": [
                    {
                        "uri": ASSETS_URI,
                        "mimeType": ASSETS_MIME_TYPE,
                        "text": json.dumps(catalogue(), separators=(",", ":")),
                    }
                ]
            }
        )

    return None
