"""
Tagged command results.

Every command hands back one mapping:
    success: {"ok": True, ...data}
    failure: {"ok": False, "error": str, "details": [str]}  (details optional)

The CLI prints it as a JSON line; an RPC transport can return it as-is.
"""

import functools
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Raised inside a command to abort with a failure result."""

    def __init__(self, error: str, details: list[str] | None = None):
        self.error = error
        self.details = details
        super().__init__(error)


def ok(**data: Any) -> dict[str, Any]:
    return {"ok": True, **data}


def fail(error: str, details: list[str] | None = None) -> dict[str, Any]:
    result: dict[str, Any] = {"ok": False, "error": error}
    if details:
        result["details"] = details
    return result


def command(fn: Callable[..., dict[str, Any]]) -> Callable[..., dict[str, Any]]:
    """Turn a CommandError raised by fn into a failure result."""

    @functools.wraps(fn)
    def wrapper(*args, **kwargs) -> dict[str, Any]:
        try:
            return fn(*args, **kwargs)
        except CommandError as e:
            logger.debug(f"[CMD] {fn.__name__} failed: {e.error}")
            return fail(e.error, e.details)

    return wrapper
