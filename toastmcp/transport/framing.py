"""Message framing for the stdio transport.

Two wire formats are accepted and detected per message:

- LINE_DELIMITED: one JSON-RPC object per line (``{...,"jsonrpc":...}\\n``).
- HEADER_DELIMITED: ``Content-Length: N`` headers, a blank line, then exactly
  N payload bytes with no trailing newline.

The framing detected on read travels with the message so the reply is
written back the same way.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, BinaryIO

from loguru import logger

from toastmcp.utils.exceptions import FramingError, PayloadEncodingError, TruncatedPayloadError

_CONTENT_LENGTH = "content-length"
_READ_CHUNK_SIZE = 65536


class Framing(Enum):
    """Wire format of one message."""
    HEADER_DELIMITED = "header"
    LINE_DELIMITED = "line"


@dataclass(slots=True)
class IncomingMessage:
    """One decoded payload plus the framing it arrived in."""

    payload: str
    framing: Framing


def _decode(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise PayloadEncodingError(str(e)) from e


def _is_json_line(line: bytes) -> bool:
    return line.startswith(b"{") and b'"jsonrpc"' in line


def _parse_content_length(value: str, line: str) -> int:
    digits = value.strip()
    if not (digits.isascii() and digits.isdigit()):
        raise FramingError(f"Invalid Content-Length header: {digits!r}", line=line)
    return int(digits)


def _read_exact(stream: BinaryIO, length: int) -> bytes:
    chunks: list[bytes] = []
    remaining = length
    while remaining > 0:
        chunk = stream.read(min(remaining, _READ_CHUNK_SIZE))
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    data = b"".join(chunks)
    if len(data) != length:
        raise TruncatedPayloadError(expected=length, received=len(data))
    return data


def read_message(stream: BinaryIO) -> IncomingMessage | None:
    """
    Read exactly one message from a binary stream.

    Returns:
        The message, or None when the stream ends before any content.

    Raises:
        FramingError: Malformed header block or missing Content-Length.
        TruncatedPayloadError: Stream ended inside the declared payload.
        PayloadEncodingError: Payload is not UTF-8.
    """
    content_length: int | None = None
    header_lines = 0

    while True:
        raw = stream.readline()
        if not raw:
            if header_lines:
                raise FramingError(f"Stream ended inside a header block after {header_lines} header line(s)")
            return None

        line = raw.rstrip(b"\r\n")
        if _is_json_line(line):
            if header_lines:
                raise FramingError("JSON payload line inside a header block", line=line.decode("latin-1"))
            return IncomingMessage(payload=_decode(line), framing=Framing.LINE_DELIMITED)

        if not line:
            if header_lines:
                break
            continue

        text = line.decode("latin-1")
        name, sep, value = text.partition(":")
        if not sep or not name.strip():
            raise FramingError(f"Malformed header line: {text!r}", line=text)
        header_lines += 1
        if name.strip().lower() == _CONTENT_LENGTH:
            content_length = _parse_content_length(value, text)
        else:
            logger.debug("Ignoring header {}", name.strip())

    if content_length is None:
        raise FramingError("Missing Content-Length header")

    payload = _read_exact(stream, content_length)
    return IncomingMessage(payload=_decode(payload), framing=Framing.HEADER_DELIMITED)


def encode_message(message: dict[str, Any], framing: Framing) -> bytes:
    """Serialize a JSON-RPC envelope in the given framing."""
    payload = json.dumps(message, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    if framing is Framing.HEADER_DELIMITED:
        return b"Content-Length: " + str(len(payload)).encode("ascii") + b"\r\n\r\n" + payload
    return payload + b"\n"


def write_message(stream: BinaryIO, message: dict[str, Any], framing: Framing) -> None:
    """Write one message and flush."""
    stream.write(encode_message(message, framing))
    stream.flush()
