"""System error checkpoint.

After any operation that may record a platform error (file or resource
access performed elsewhere), the caller runs a checkpoint on the error
indicator. Benign codes that some platform calls set spuriously are ignored;
any other code is turned into a structured diagnostic with the caller's
message, the resolved code text and description, and a memory snapshot where
the platform offers one. The indicator is reset afterwards so a single error
is reported exactly once.

Two forms are provided:
    - diagnose_system_error(): returns the diagnostic (or None)
    - check_system_error(): raises FailureError carrying the diagnostic
"""

from __future__ import annotations

import errno
import logging
from collections.abc import Callable

from src.rtcore.diagnostics.errors import (
    ErrorCode,
    ErrorDiagnostic,
    FailureError,
    describe_error_code,
    lookup_error_code,
)
from src.rtcore.diagnostics.indicator import ErrorIndicator
from src.rtcore.diagnostics.memory import MemoryProbe, default_memory_probe

logger = logging.getLogger(__name__)

# Type alias for the platform error lookup
ErrorLookup = Callable[[int], ErrorCode]

# Set spuriously by benign platform calls:
# * Operation would block
# * Invalid argument
IGNORED_ERROR_CODES = frozenset({errno.EWOULDBLOCK, errno.EINVAL})


def _compose_message(message: str, error: ErrorCode) -> str:
    return (
        f"{message}\n"
        f"{error.code_text}\n"
        f"{error.description}\n"
        f"errno ({error.code}): {describe_error_code(error.code)}"
    )


def diagnose_system_error(
    message: str,
    indicator: ErrorIndicator,
    *,
    lookup: ErrorLookup = lookup_error_code,
    memory_probe: MemoryProbe | None = None,
) -> ErrorDiagnostic | None:
    """Inspect the error indicator and build a diagnostic for a real error.

    Args:
        message: Caller context to put at the top of the report.
        indicator: The error indicator to inspect.
        lookup: Resolves a code into its text and description.
        memory_probe: Memory capability. Defaults to the platform's probe.

    Returns:
        None if the indicator holds 0 or an ignored code (the indicator is
        left untouched). Otherwise the diagnostic; the indicator is reset to 0.
    """
    logger.debug("Called diagnose_system_error: %s", message)

    with indicator.lock:
        code = indicator.code
        if code == 0 or code in IGNORED_ERROR_CODES:
            return None

        error = lookup(code)
        logger.debug("Error code: %s", error.code_text)

        error_message = _compose_message(message, error)
        logger.error("System error: %s", error_message)

        probe = memory_probe if memory_probe is not None else default_memory_probe()
        memory = probe.snapshot()
        if memory is not None:
            logger.info("Available memory: %d MB", memory.total_mb)
            logger.info("Free memory: %d MB", memory.free_mb)
            error_message += (
                f"\nAvailable memory: {memory.total_mb} MB"
                f"\nFree memory: {memory.free_mb} MB"
            )

        indicator.reset()

    return ErrorDiagnostic(
        code=code,
        code_text=error.code_text,
        description=error.description,
        message=error_message,
        memory=memory,
    )


def check_system_error(
    message: str,
    indicator: ErrorIndicator,
    *,
    lookup: ErrorLookup = lookup_error_code,
    memory_probe: MemoryProbe | None = None,
) -> None:
    """Raise if the error indicator holds a real error.

    Args:
        message: Caller context to put at the top of the report.
        indicator: The error indicator to inspect.
        lookup: Resolves a code into its text and description.
        memory_probe: Memory capability. Defaults to the platform's probe.

    Raises:
        FailureError: Carrying the diagnostic, after resetting the indicator.
    """
    diagnostic = diagnose_system_error(
        message, indicator, lookup=lookup, memory_probe=memory_probe
    )
    if diagnostic is not None:
        raise FailureError(diagnostic)
