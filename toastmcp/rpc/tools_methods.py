"""RPC handlers for tools/list and tools/call."""

from __future__ import annotations

import json
from typing import Any, Callable

from loguru import logger
from pydantic import ValidationError

from toastmcp.notify.invoker import NotificationInvoker, NotifyInput
from toastmcp.rpc.error_boundary import invalid_params, invalid_request, tool_failure_result
from toastmcp.rpc.protocol import DispatchOutcome, Reply, ToolResult
from toastmcp.utils.exceptions import ToastMcpError

NOTIFY_TOOL = "notify"
LIST_ASSETS_TOOL = "list_assets"


def _asset_schema(ids: list[str], folder: str) -> dict[str, Any]:
    if not ids:
        return {
            "type": "string",
            "description": (
                f"Required. {folder.capitalize()[:-1]} id from {folder}/ folder (without extension). "
                f"Do not guess; add {folder} or call tools/list for the current enum."
            ),
        }
    return {
        "type": "string",
        "enum": ids,
        "description": "Required. Must be one of the enum values (no guessing).",
    }


def build_tool_definitions(icon_ids: list[str], sound_ids: list[str]) -> list[dict[str, Any]]:
    """Tool descriptors; the notify enums reflect the ids passed in."""
    notify = {
        "name": NOTIFY_TOOL,
        "description": (
            "Send a system toast + sound. Use only the provided icon/sound ids (no guessing); "
            "call tools/list to see the current enums."
        ),
        "inputSchema": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "title": {
                    "type": "string",
                    "description": "Very short description of the current project (5 words or less).",
                },
                "message": {"type": "string"},
                "sound": _asset_schema(sound_ids, "sounds"),
                "icon": _asset_schema(icon_ids, "icons"),
            },
            "required": ["title", "message", "sound", "icon"],
        },
    }
    list_assets = {
        "name": LIST_ASSETS_TOOL,
        "description": "List available icon and sound ids for ToastMCP.",
        "inputSchema": {"type": "object", "additionalProperties": False, "properties": {}},
    }
    return [notify, list_assets]


def format_validation_error(exc: ValidationError) -> str:
    """One line per failing field: ``title: Field required``."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts) or str(exc)


def try_handle_tools_method(
    *,
    method: str,
    params: dict[str, Any],
    has_id: bool,
    catalogue: Callable[[], dict[str, list[str]]],
    invoker: NotificationInvoker,
) -> DispatchOutcome | None:
    """Handle tools/*. Return None when method is unrelated."""
    if method == "tools/list":
        assets = catalogue()
        return Reply({"tools": build_tool_definitions(assets["icons"], assets["sounds"])})

    if method != "tools/call":
        return None

    if not has_id:
        return invalid_request("Missing id for tools/call", force_reply=True)

    name = params.get("name")
    name = name if isinstance(name, str) else ""

    if name == LIST_ASSETS_TOOL:
        text = json.dumps(catalogue(), separators=(",", ":"))
        return Reply(ToolResult.text(text).to_dict())

    if name != NOTIFY_TOOL:
        return invalid_params(f"Unknown tool: {name}")

    try:
        args = NotifyInput.model_validate(params.get("arguments"))
    except ValidationError as e:
        return invalid_params(f"Invalid arguments: {format_validation_error(e)}")

    try:
        invoker.notify(args)
    except ToastMcpError as e:
        return tool_failure_result(tool=name, exc=e, log_warning=logger.warning)
    return Reply(ToolResult.text("Notification sent.").to_dict())
