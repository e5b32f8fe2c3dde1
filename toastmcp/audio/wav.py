"""Minimal RIFF/WAVE chunk walker and 16-bit PCM volume scaling."""

from __future__ import annotations

import struct
from dataclasses import dataclass

WAVE_FORMAT_PCM = 1
PCM16_MIN = -32768
PCM16_MAX = 32767

_RIFF_HEADER_SIZE = 12
_CHUNK_HEADER_SIZE = 8
_FMT_MIN_SIZE = 16


@dataclass(slots=True)
class WavLayout:
    """Where the interesting parts of a WAV buffer live."""

    audio_format: int
    channels: int
    bits_per_sample: int
    data_offset: int
    data_size: int

    @property
    def is_pcm16(self) -> bool:
        return self.audio_format == WAVE_FORMAT_PCM and self.bits_per_sample == 16


def parse_wav_layout(buf: bytes | bytearray) -> WavLayout | None:
    """
    Locate the ``fmt `` and ``data`` chunks of a RIFF/WAVE buffer.

    Chunk bodies are padded to an even length. A chunk that claims more bytes
    than the buffer holds ends the walk.

    Returns:
        The layout, or None when the header is not RIFF/WAVE or either chunk
        is missing.
    """
    if len(buf) < _RIFF_HEADER_SIZE or buf[0:4] != b"RIFF" or buf[8:12] != b"WAVE":
        return None

    fmt: tuple[int, int, int] | None = None
    data: tuple[int, int] | None = None
    cursor = _RIFF_HEADER_SIZE

    while cursor + _CHUNK_HEADER_SIZE <= len(buf):
        chunk_id = bytes(buf[cursor:cursor + 4])
        (chunk_size,) = struct.unpack_from("<I", buf, cursor + 4)
        chunk_start = cursor + _CHUNK_HEADER_SIZE
        chunk_end = chunk_start + chunk_size
        if chunk_end > len(buf):
            break

        if chunk_id == b"fmt " and chunk_size >= _FMT_MIN_SIZE:
            audio_format, channels = struct.unpack_from("<HH", buf, chunk_start)
            (bits_per_sample,) = struct.unpack_from("<H", buf, chunk_start + 14)
            fmt = (audio_format, channels, bits_per_sample)
        elif chunk_id == b"data":
            data = (chunk_start, chunk_size)

        cursor = chunk_end + (chunk_size % 2)

    if fmt is None or data is None:
        return None
    return WavLayout(
        audio_format=fmt[0],
        channels=fmt[1],
        bits_per_sample=fmt[2],
        data_offset=data[0],
        data_size=data[1],
    )


def round_half_away(value: float) -> int:
    """Round to nearest, ties away from zero."""
    if value >= 0:
        return int(value + 0.5)
    return -int(-value + 0.5)


def scale_sample(sample: int, volume: float) -> int:
    return max(PCM16_MIN, min(PCM16_MAX, round_half_away(sample * volume)))


def scale_pcm16_in_place(buf: bytearray, offset: int, size: int, volume: float) -> int:
    """
    Multiply every little-endian int16 sample in ``buf[offset:offset+size]``.

    A trailing odd byte is left untouched.

    Returns:
        Number of samples written.
    """
    end = min(offset + size, len(buf))
    count = max(0, (end - offset) // 2)
    if count == 0:
        return 0
    fmt = f"<{count}h"
    samples = struct.unpack_from(fmt, buf, offset)
    struct.pack_into(fmt, buf, offset, *(scale_sample(s, volume) for s in samples))
    return count
