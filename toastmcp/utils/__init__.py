"""Utility functions for toastmcp."""

from toastmcp.utils.helpers import ensure_dir, get_bundled_dir, get_data_path, get_program_dir
from toastmcp.utils.exceptions import (
    ToastMcpError,
    FramingError,
    TruncatedPayloadError,
    PayloadEncodingError,
    AssetNotFoundError,
    PresentationError,
    PlaybackError,
    AudioCacheError,
    ErrorCategory,
    classify_exception,
    sanitize_error_message,
    format_tool_error,
)

__all__ = [
    "ensure_dir",
    "get_bundled_dir",
    "get_data_path",
    "get_program_dir",
    "ToastMcpError",
    "FramingError",
    "TruncatedPayloadError",
    "PayloadEncodingError",
    "AssetNotFoundError",
    "PresentationError",
    "PlaybackError",
    "AudioCacheError",
    "ErrorCategory",
    "classify_exception",
    "sanitize_error_message",
    "format_tool_error",
]
