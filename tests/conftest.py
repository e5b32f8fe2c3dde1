"""Pytest hooks and fixtures."""

from __future__ import annotations

import struct
from pathlib import Path

import pytest

from toastmcp.assets.registry import AssetRegistry
from toastmcp.audio.cache import AudioCache
from toastmcp.notify.invoker import NotificationInvoker
from toastmcp.rpc.dispatcher import Dispatcher
from toastmcp.utils.exceptions import PlaybackError, PresentationError


def build_wav(
    samples: list[int],
    *,
    audio_format: int = 1,
    bits: int = 16,
    channels: int = 1,
    extra_chunks: tuple[tuple[bytes, bytes], ...] = (),
) -> bytes:
    """Assemble a RIFF/WAVE buffer; extra chunks go between fmt and data."""
    data = struct.pack(f"<{len(samples)}h", *samples)
    block_align = channels * bits // 8
    fmt = struct.pack("<HHIIHH", audio_format, channels, 8000, 8000 * block_align, block_align, bits)
    chunks = b"fmt " + struct.pack("<I", len(fmt)) + fmt
    for tag, body in extra_chunks:
        chunks += tag + struct.pack("<I", len(body)) + body + (b"\x00" if len(body) % 2 else b"")
    chunks += b"data" + struct.pack("<I", len(data)) + data
    body = b"WAVE" + chunks
    return b"RIFF" + struct.pack("<I", len(body)) + body


class FakePresenter:
    """Records collaborator calls; can be told to fail either one."""

    def __init__(self, fail_present: bool = False, fail_play: bool = False):
        self.fail_present = fail_present
        self.fail_play = fail_play
        self.calls: list[tuple] = []

    def present_notification(self, title, message, icon_path=None, inline_audio_id=None):
        self.calls.append(("present", title, message, icon_path, inline_audio_id))
        if self.fail_present:
            raise PresentationError("toast subsystem unavailable", backend="fake")

    def play_audio(self, path):
        self.calls.append(("play", path))
        if self.fail_play:
            raise PlaybackError(str(path), "device busy")


@pytest.fixture
def wav_bytes():
    return build_wav


@pytest.fixture
def presenter() -> FakePresenter:
    return FakePresenter()


@pytest.fixture
def make_presenter():
    return FakePresenter


@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    """Program directory with empty icons/ and sounds/ folders."""
    root = tmp_path / "app"
    (root / "icons").mkdir(parents=True)
    (root / "sounds").mkdir(parents=True)
    return root


@pytest.fixture
def registry(app_dir: Path, tmp_path: Path) -> AssetRegistry:
    return AssetRegistry([app_dir, tmp_path / "bundled"])


@pytest.fixture
def audio_cache(tmp_path: Path) -> AudioCache:
    return AudioCache(tmp_path / "cache")


@pytest.fixture
def invoker(registry: AssetRegistry, audio_cache: AudioCache, presenter: FakePresenter) -> NotificationInvoker:
    return NotificationInvoker(registry=registry, cache=audio_cache, presenter=presenter, volume=0.5)


@pytest.fixture
def dispatcher(registry: AssetRegistry, invoker: NotificationInvoker) -> Dispatcher:
    return Dispatcher(registry, invoker, server_version="9.9.9")

