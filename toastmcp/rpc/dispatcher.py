"""Routes decoded requests to method handlers.

Outcomes are explicit: ``NoReply`` (notifications, unknown notifications),
``ProtocolError`` (the call itself is malformed) and ``Reply`` (including
tool results whose action failed, flagged ``isError``).
"""

from __future__ import annotations

from loguru import logger

from toastmcp import __version__
from toastmcp.assets.registry import AssetRegistry
from toastmcp.notify.invoker import NotificationInvoker
from toastmcp.rpc.dispatch_pipeline import run_handler_pipeline
from toastmcp.rpc.error_boundary import unhandled_exception_result, unknown_method_result
from toastmcp.rpc.lifecycle_methods import try_handle_lifecycle_method
from toastmcp.rpc.protocol import NO_REPLY, DispatchOutcome, ProtocolError, RpcRequest
from toastmcp.rpc.resources_methods import try_handle_resources_method
from toastmcp.rpc.tools_methods import try_handle_tools_method

DEFAULT_PROTOCOL_VERSION = "2024-11-05"


class Dispatcher:
    """Maps one RpcRequest to one DispatchOutcome."""

    def __init__(
        self,
        registry: AssetRegistry,
        invoker: NotificationInvoker,
        *,
        server_name: str = "toastmcp",
        server_version: str = __version__,
        protocol_version: str = DEFAULT_PROTOCOL_VERSION,
    ):
        self.registry = registry
        self.invoker = invoker
        self.server_name = server_name
        self.server_version = server_version
        self.protocol_version = protocol_version

    def dispatch(self, request: RpcRequest) -> DispatchOutcome:
        method = request.method
        params = request.params
        try:
            outcome = run_handler_pipeline(
                [
                    lambda: try_handle_lifecycle_method(
                        method=method,
                        params=params,
                        server_name=self.server_name,
                        server_version=self.server_version,
                        default_protocol_version=self.protocol_version,
                    ),
                    lambda: try_handle_tools_method(
                        method=method,
                        params=params,
                        has_id=request.has_id,
                        catalogue=self.registry.catalogue,
                        invoker=self.invoker,
                    ),
                    lambda: try_handle_resources_method(
                        method=method,
                        params=params,
                        catalogue=self.registry.catalogue,
                    ),
                ]
            )
        except Exception as e:
            return unhandled_exception_result(method=method, exc=e, log_exception=logger.exception)

        if outcome is None:
            logger.debug("Unknown method {} (notification={})", method, request.is_notification)
            return unknown_method_result(method=method, has_id=request.has_id)

        if request.is_notification and not (isinstance(outcome, ProtocolError) and outcome.force_reply):
            return NO_REPLY
        return outcome
