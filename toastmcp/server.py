"""Stdio server loop: read one message, dispatch it, write at most one reply.

Fully synchronous. End of input is the only shutdown signal; framing errors
end the loop because the stream can no longer be resynchronized.
"""

from __future__ import annotations

import sys
from typing import BinaryIO

from loguru import logger

from toastmcp.assets.registry import AssetRegistry
from toastmcp.audio.cache import AudioCache
from toastmcp.config.schema import Config
from toastmcp.notify.invoker import NotificationInvoker
from toastmcp.notify.presenter import DesktopPresenter, Presenter
from toastmcp.rpc.dispatcher import Dispatcher
from toastmcp.rpc.serialization import RequestDecodeError, decode_request, encode_response, jsonrpc_error
from toastmcp.transport.framing import IncomingMessage, read_message, write_message


def build_dispatcher(config: Config, presenter: Presenter | None = None) -> Dispatcher:
    """Wire registry, cache, invoker and presenter from config."""
    registry = AssetRegistry(config.asset_search_dirs)
    cache = AudioCache(config.audio_cache_dir)
    invoker = NotificationInvoker(
        registry=registry,
        cache=cache,
        presenter=presenter or DesktopPresenter(),
        volume=config.audio.volume,
    )
    return Dispatcher(
        registry,
        invoker,
        server_name=config.server.name,
        protocol_version=config.server.protocol_version,
    )


class StdioServer:
    """Serves one client over a pair of binary streams."""

    def __init__(self, dispatcher: Dispatcher, reader: BinaryIO | None = None, writer: BinaryIO | None = None):
        self.dispatcher = dispatcher
        self.reader = reader if reader is not None else sys.stdin.buffer
        self.writer = writer if writer is not None else sys.stdout.buffer

    def handle_message(self, message: IncomingMessage) -> dict | None:
        """Dispatch one framed payload; return the reply envelope, if any."""
        try:
            request = decode_request(message.payload)
        except RequestDecodeError as e:
            logger.warning("Rejected request: {}", e.error.message)
            return jsonrpc_error(e.request_id, e.error) if e.has_id else None

        logger.debug("-> {} id={} ({})", request.method, request.id, message.framing.value)
        outcome = self.dispatcher.dispatch(request)
        response = encode_response(request, outcome)
        if response is not None and "error" in response:
            logger.info("<- {} error {}", request.method, response["error"]["code"])
        return response

    def serve_forever(self) -> int:
        """
        Run until end of input.

        Returns:
            Number of messages handled.

        Raises:
            FramingError / TruncatedPayloadError / PayloadEncodingError:
                The input stream is corrupt.
        """
        handled = 0
        while True:
            message = read_message(self.reader)
            if message is None:
                logger.info("Input closed after {} message(s), shutting down", handled)
                return handled
            handled += 1
            response = self.handle_message(message)
            if response is not None:
                write_message(self.writer, response, message.framing)
