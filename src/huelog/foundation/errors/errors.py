"""Structured errors for the render path.

Only sink failures are ever reported. Configuration gaps have deterministic
fallbacks and never produce an error value.
"""

from __future__ import annotations

import traceback
from enum import StrEnum
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field


class ErrorCode(StrEnum):
    """Error codes for render failures."""
    WRITE_FAILED = "WRITE_FAILED"
    UNKNOWN = "UNKNOWN"


class RenderError(BaseModel):
    """Structured description of a failed render.

    Attributes:
        message: Human-readable error message
        code: Machine-readable classification
        recoverable: Whether a later attempt at a higher level might succeed
        details: Optional traceback text
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        validate_default=True,
        json_schema_extra={
            "title": "Render Error",
            "examples": [{"message": "sink closed", "code": "WRITE_FAILED", "recoverable": False}],
        },
    )

    message: Annotated[str, Field(min_length=1, description="Human-readable error message")]
    code: ErrorCode = Field(default=ErrorCode.UNKNOWN, description="Machine-readable error classification")
    recoverable: bool = Field(default=True, description="Whether retry might succeed")
    details: str | None = Field(default=None, repr=False)

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        code: ErrorCode = ErrorCode.UNKNOWN,
        *,
        context: str = "",
        include_trace: bool = True,
    ) -> Self:
        """Create from a caught exception."""
        text = str(exc) or type(exc).__name__
        return cls(
            message=f"{context}: {text}" if context else text,
            code=code,
            # Closed or type-incompatible sinks stay that way; transient OS errors might clear.
            recoverable=not isinstance(exc, (ValueError, TypeError)),
            details="".join(traceback.format_exception(exc)) if include_trace else None,
        )

    def render(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.details:
            parts.append(f"\n{self.details.rstrip()}")
        return "".join(parts)

    __str__ = render


class RenderException(Exception):
    """Exception wrapping a RenderError for raising."""

    __slots__ = ("error",)

    def __init__(self, error: RenderError) -> None:
        self.error = error
        super().__init__(error.message)

    @classmethod
    def create(cls, message: str, code: ErrorCode = ErrorCode.UNKNOWN, *, recoverable: bool = True) -> Self:
        return cls(RenderError(message=message, code=code, recoverable=recoverable))
