"""Stdio transport: framing detection, reading and writing."""

from toastmcp.transport.framing import (
    Framing,
    IncomingMessage,
    encode_message,
    read_message,
    write_message,
)

__all__ = ["Framing", "IncomingMessage", "encode_message", "read_message", "write_message"]
