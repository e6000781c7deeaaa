"""
Structured error taxonomy for the diff engine.

Every engine error has:
  - A stable error code (prefixed by domain)
  - A human-readable message
  - An optional detail dict for machine consumers

The engine is pure computation, so the taxonomy is narrow: malformed
arguments are the only failure mode.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Stable error codes. Never reuse a retired code."""

    # Diff
    DIFF_INVALID_INPUT = "DIFF_001"


class AppError(Exception):
    """Base class for all engine errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.detail = detail or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "detail": self.detail,
            }
        }


# ── Typed convenience subclasses ──────────────────────────────────────── #


class InvalidInputError(AppError):
    def __init__(self, argument: str, message: str, received: Any) -> None:
        detail = {"argument": argument, "received": type(received).__name__}
        super().__init__(
            code=ErrorCode.DIFF_INVALID_INPUT,
            message=message,
            detail=detail,
        )
