"""Error descriptors, diagnostic records and the structured failure."""

from __future__ import annotations

import errno
import os
from dataclasses import dataclass

from src.rtcore.diagnostics.memory import MemorySnapshot


@dataclass(frozen=True)
class ErrorCode:
    """Platform descriptor for an error indicator value.

    Attributes:
        code: The numeric error code.
        code_text: Symbolic name of the code (e.g. "ENOENT").
        description: Human-readable description of the code.
    """

    code: int
    code_text: str
    description: str


def describe_error_code(code: int) -> str:
    """Platform text for an error code, or a generic one outside C int range."""
    try:
        return os.strerror(code)
    except (ValueError, OverflowError):
        return f"Unknown error {code}"


def lookup_error_code(code: int) -> ErrorCode:
    """Resolve an error code with the interpreter's errno tables.

    Unknown codes resolve to "UNKNOWN" with the platform's generic text.
    """
    code_text = errno.errorcode.get(code, "UNKNOWN")
    return ErrorCode(code=code, code_text=code_text, description=describe_error_code(code))


@dataclass(frozen=True)
class ErrorDiagnostic:
    """Transient report built when a real platform error is detected.

    Attributes:
        code: The platform error code that triggered the report.
        code_text: Symbolic name of the code.
        description: Human-readable description of the code.
        message: The fully composed multi-line diagnostic message.
        memory: Memory snapshot at detection time, when the platform has one.
    """

    code: int
    code_text: str
    description: str
    message: str
    memory: MemorySnapshot | None = None


class FailureError(RuntimeError):
    """The system failed in a way the current operation cannot recover from.

    Raised with a composed diagnostic, or to rethrow another exception as a
    failure (``raise FailureError(exc) from exc``).

    Attributes:
        diagnostic: The ErrorDiagnostic behind the failure, if any.
    """

    def __init__(self, reason: str | BaseException | ErrorDiagnostic) -> None:
        if isinstance(reason, ErrorDiagnostic):
            self.diagnostic: ErrorDiagnostic | None = reason
            super().__init__(reason.message)
        else:
            self.diagnostic = None
            super().__init__(str(reason))
