"""Utilities for sequential RPC handler dispatch pipelines."""

from __future__ import annotations

from typing import Callable, Iterable

from toastmcp.rpc.protocol import DispatchOutcome

HandlerResult = DispatchOutcome | None
DispatchHandler = Callable[[], HandlerResult]


def run_handler_pipeline(handlers: Iterable[DispatchHandler]) -> HandlerResult:
    """Run handlers in order and return the first non-None result."""
    for handler in handlers:
        result = handler()
        if result is not None:
            return result
    return None
