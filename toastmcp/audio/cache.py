"""On-disk cache of volume-scaled WAV files.

An entry is keyed by the source stem and the volume as a whole percentage
(``chime_vol70.wav``) and is reused while it is at least as new as its
source. Writers do not lock: concurrent processes rebuilding the same entry
simply overwrite each other.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from toastmcp.audio.wav import parse_wav_layout, scale_pcm16_in_place
from toastmcp.utils.exceptions import AudioCacheError


def volume_bucket(volume: float) -> int:
    return int(round(volume * 100))


def cache_file_name(source: Path, volume: float) -> str:
    stem = source.stem or "sound"
    return f"{stem}_vol{volume_bucket(volume)}.wav"


def _is_fresh(cached: Path, source: Path) -> bool:
    try:
        return cached.stat().st_mtime >= source.stat().st_mtime
    except OSError:
        return False


class AudioCache:
    """Produces attenuated copies of WAV files, memoized in ``cache_dir``."""

    def __init__(self, cache_dir: Path):
        self.cache_dir = Path(cache_dir)

    def path_for(self, source: Path, volume: float) -> Path:
        return self.cache_dir / cache_file_name(Path(source), volume)

    def prepare(self, source: Path, volume: float) -> Path:
        """
        Return a file whose level is ``source`` scaled by ``volume``.

        Falls back to ``source`` itself when the volume is outside [0, 1] or
        the file is not a 16-bit PCM WAV that can be parsed.

        Raises:
            AudioCacheError: The cache directory or file could not be written.
        """
        source = Path(source)
        if not 0.0 <= volume <= 1.0:
            return source

        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise AudioCacheError(str(self.cache_dir), str(e)) from e

        cached = self.path_for(source, volume)
        if cached.exists() and _is_fresh(cached, source):
            logger.debug("Audio cache hit {}", cached.name)
            return cached

        try:
            buf = bytearray(source.read_bytes())
        except OSError as e:
            raise AudioCacheError(str(source), f"read failed: {e}") from e
        layout = parse_wav_layout(buf)
        if layout is None:
            logger.debug("{} is not a parseable WAV, playing unmodified", source.name)
            return source
        if not layout.is_pcm16:
            logger.debug(
                "{} uses format={} bits={}, playing unmodified",
                source.name,
                layout.audio_format,
                layout.bits_per_sample,
            )
            return source

        scale_pcm16_in_place(buf, layout.data_offset, layout.data_size, volume)

        try:
            cached.write_bytes(buf)
        except OSError as e:
            raise AudioCacheError(str(cached), f"write failed: {e}") from e
        logger.info("Cached {} at volume {}", cached.name, volume)
        return cached

    def clear(self) -> int:
        """Delete cached WAV files. Returns how many were removed."""
        if not self.cache_dir.is_dir():
            return 0
        removed = 0
        for entry in self.cache_dir.glob("*.wav"):
            entry.unlink()
            removed += 1
        return removed
