"""Formatter process invocation models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class InvocationStatus(str, Enum):
    """How the formatter process ended"""

    SUCCESS = "success"
    DIAGNOSTIC = "diagnostic"  # formatter wrote to stderr
    NOT_FOUND = "not_found"
    PROCESS_ERROR = "process_error"  # non-zero exit, timeout, OS error


class InvocationResult(BaseModel):
    """Result of a single formatter run"""

    status: InvocationStatus
    executable: str
    stdout: str = ""
    stderr: str = ""
    return_code: int | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == InvocationStatus.SUCCESS
