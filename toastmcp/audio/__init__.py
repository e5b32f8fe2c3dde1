"""WAV parsing and the volume-normalization cache."""

from toastmcp.audio.cache import AudioCache, cache_file_name
from toastmcp.audio.wav import WavLayout, parse_wav_layout, scale_pcm16_in_place

__all__ = ["AudioCache", "cache_file_name", "WavLayout", "parse_wav_layout", "scale_pcm16_in_place"]
