"""End-to-end tests for the stdio server loop over in-memory streams."""

import io
import json

import pytest

from toastmcp.config.schema import Config
from toastmcp.rpc.dispatcher import Dispatcher
from toastmcp.rpc.protocol import RpcRequest
from toastmcp.server import StdioServer, build_dispatcher
from toastmcp.transport.framing import Framing, read_message
from toastmcp.utils.exceptions import FramingError


def _header_frame(payload: str) -> bytes:
    body = payload.encode("utf-8")
    return b"Content-Length: " + str(len(body)).encode() + b"\r\n\r\n" + body


def _serve(dispatcher: Dispatcher, data: bytes) -> tuple[int, bytes]:
    out = io.BytesIO()
    handled = StdioServer(dispatcher, reader=io.BytesIO(data), writer=out).serve_forever()
    return handled, out.getvalue()


def test_header_ping_round_trip(dispatcher: Dispatcher) -> None:
    request = b'Content-Length: 40\r\n\r\n{"jsonrpc":"2.0","id":1,"method":"ping"}'
    handled, output = _serve(dispatcher, request)

    body = b'{"jsonrpc":"2.0","id":1,"result":null}'
    assert handled == 1
    assert output == b"Content-Length: " + str(len(body)).encode() + b"\r\n\r\n" + body


def test_line_ping_round_trip(dispatcher: Dispatcher) -> None:
    _, output = _serve(dispatcher, b'{"jsonrpc":"2.0","id":1,"method":"ping"}\n')
    assert output == b'{"jsonrpc":"2.0","id":1,"result":null}\n'


def test_mixed_framings_reply_in_kind_and_notifications_are_silent(dispatcher: Dispatcher) -> None:
    data = (
        _header_frame('{"jsonrpc":"2.0","id":1,"method":"initialize","params":{}}')
        + b'{"jsonrpc":"2.0","method":"notifications/initialized"}\n'
        + b'{"jsonrpc":"2.0","id":2,"method":"ping"}\n'
        + _header_frame('{"jsonrpc":"2.0","id":3,"method":"nope"}')
    )
    handled, output = _serve(dispatcher, data)
    assert handled == 4

    reader = io.BytesIO(output)
    replies = []
    while (message := read_message(reader)) is not None:
        replies.append((message.framing, json.loads(message.payload)))

    assert [(f, r["id"]) for f, r in replies] == [
        (Framing.HEADER_DELIMITED, 1),
        (Framing.LINE_DELIMITED, 2),
        (Framing.HEADER_DELIMITED, 3),
    ]
    assert replies[2][1]["error"]["code"] == -32601


def test_invalid_json_gets_parse_error_with_null_id(dispatcher: Dispatcher) -> None:
    _, output = _serve(dispatcher, _header_frame("{broken"))
    reply = json.loads(output.split(b"\r\n\r\n", 1)[1])
    assert reply["id"] is None
    assert reply["error"]["code"] == -32700


def test_invalid_request_without_id_is_silent(dispatcher: Dispatcher) -> None:
    _, output = _serve(dispatcher, b'{"jsonrpc":"2.0","params":{}}\n')
    assert output == b""


def test_framing_error_stops_the_loop_after_earlier_replies(dispatcher: Dispatcher) -> None:
    data = b'{"jsonrpc":"2.0","id":1,"method":"ping"}\n' + b"Content-Type: x\r\n\r\n"
    out = io.BytesIO()
    server = StdioServer(dispatcher, reader=io.BytesIO(data), writer=out)
    with pytest.raises(FramingError):
        server.serve_forever()
    assert out.getvalue() == b'{"jsonrpc":"2.0","id":1,"result":null}\n'


def test_build_dispatcher_uses_config(tmp_path, presenter) -> None:
    config = Config.model_validate(
        {
            "assets": {"search_dirs": [str(tmp_path)]},
            "audio": {"cache_dir": str(tmp_path / "cache")},
            "server": {"name": "toasty", "protocol_version": "2099-01-01"},
        }
    )
    dispatcher = build_dispatcher(config, presenter=presenter)

    assert dispatcher.registry.search_dirs == [tmp_path]
    assert dispatcher.invoker.cache.cache_dir == tmp_path / "cache"
    assert dispatcher.invoker.presenter is presenter
    result = dispatcher.dispatch(RpcRequest("initialize", {}, 1, True)).result
    assert result["serverInfo"]["name"] == "toasty"
    assert result["protocolVersion"] == "2099-01-01"
