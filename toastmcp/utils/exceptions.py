"""
Exception hierarchy and error handling utilities for toastmcp.

Provides:
- Custom exception classes with error codes
- Error categorization (transport-fatal, recoverable, not found)
- Safe error message formatting (no sensitive data leak)
"""

from __future__ import annotations

import json
import re
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    RECOVERABLE = "recoverable"
    FATAL = "fatal"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERMISSION = "permission"
    IO = "io"


class ToastMcpError(Exception):
    """Base exception for all toastmcp errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


# --- transport: the input stream is desynchronized, the server must stop ---


class FramingError(ToastMcpError):
    """Malformed header block or missing Content-Length."""

    def __init__(self, message: str, line: str | None = None):
        details = {"line": line} if line is not None else {}
        super().__init__(message, code="FRAMING_ERROR", category=ErrorCategory.FATAL, details=details)


class TruncatedPayloadError(ToastMcpError):
    """Stream ended before the declared Content-Length was read."""

    def __init__(self, expected: int, received: int):
        super().__init__(
            f"Truncated payload: expected {expected} bytes, got {received}",
            code="TRUNCATED_PAYLOAD",
            category=ErrorCategory.FATAL,
            details={"expected": expected, "received": received},
        )


class PayloadEncodingError(ToastMcpError):
    """Payload bytes are not valid UTF-8."""

    def __init__(self, reason: str):
        super().__init__(
            f"Payload is not valid UTF-8: {reason}",
            code="PAYLOAD_ENCODING",
            category=ErrorCategory.FATAL,
            details={"reason": reason},
        )


# --- tool execution: reported as an error-flagged tool result ---


class AssetNotFoundError(ToastMcpError):
    """Requested icon or sound id does not resolve to anything usable."""

    def __init__(self, kind: str, asset_id: str, searched: list[str] | None = None):
        super().__init__(
            f"{kind.capitalize()} not found: {asset_id}",
            code="ASSET_NOT_FOUND",
            category=ErrorCategory.NOT_FOUND,
            details={"kind": kind, "asset_id": asset_id, "searched": searched or []},
        )


class PresentationError(ToastMcpError):
    """The notification collaborator failed to show the toast."""

    def __init__(self, message: str, backend: str | None = None):
        super().__init__(
            f"Presentation failed: {message}",
            code="PRESENTATION_ERROR",
            category=ErrorCategory.RECOVERABLE,
            details={"backend": backend},
        )


class PlaybackError(ToastMcpError):
    """The audio collaborator failed to play a file."""

    def __init__(self, path: str, message: str):
        super().__init__(
            f"Playback of {path} failed: {message}",
            code="PLAYBACK_ERROR",
            category=ErrorCategory.RECOVERABLE,
            details={"path": path},
        )


class AudioCacheError(ToastMcpError):
    """Derived audio file could not be produced."""

    def __init__(self, path: str, message: str):
        super().__init__(
            f"Audio cache failure at {path}: {message}",
            code="AUDIO_CACHE_ERROR",
            category=ErrorCategory.IO,
            details={"path": path},
        )


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"sk-[a-zA-Z0-9]{20,}"),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove sensitive information from error messages."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def classify_exception(exc: Exception) -> tuple[str, ErrorCategory]:
    """
    Classify an exception and return (error_code, category).
    """
    if isinstance(exc, ToastMcpError):
        return exc.code, exc.category

    if isinstance(exc, FileNotFoundError):
        return "FILE_NOT_FOUND", ErrorCategory.NOT_FOUND

    if isinstance(exc, PermissionError):
        return "PERMISSION_DENIED", ErrorCategory.PERMISSION

    if isinstance(exc, OSError):
        return "IO_ERROR", ErrorCategory.IO

    if isinstance(exc, json.JSONDecodeError):
        return "JSON_PARSE_ERROR", ErrorCategory.VALIDATION

    if isinstance(exc, UnicodeDecodeError):
        return "ENCODING_ERROR", ErrorCategory.VALIDATION

    if isinstance(exc, ValueError):
        return "INVALID_VALUE", ErrorCategory.VALIDATION

    if isinstance(exc, (KeyError, TypeError)):
        return "INVALID_INPUT", ErrorCategory.VALIDATION

    return "INTERNAL_ERROR", ErrorCategory.FATAL


def format_tool_error(exc: Exception) -> str:
    """Format an exception as the human-readable part of a tool error result."""
    if isinstance(exc, ToastMcpError):
        return exc.message
    return sanitize_error_message(str(exc))
