"""Platform error diagnostics.

Components:
    indicator: Explicit, lockable error indicator
    errors: Error code descriptors, diagnostic records, FailureError
    memory: Memory introspection capability per platform
    system: The system error checkpoint
"""

from .errors import (
    ErrorCode,
    ErrorDiagnostic,
    FailureError,
    describe_error_code,
    lookup_error_code,
)
from .indicator import ErrorIndicator
from .memory import (
    BYTES_IN_MEGABYTE,
    MemoryProbe,
    MemorySnapshot,
    SysconfMemoryProbe,
    UnavailableMemoryProbe,
    default_memory_probe,
    select_memory_probe,
)
from .system import (
    IGNORED_ERROR_CODES,
    check_system_error,
    diagnose_system_error,
)

__all__ = [
    # Indicator
    "ErrorIndicator",
    # Errors
    "ErrorCode",
    "ErrorDiagnostic",
    "FailureError",
    "describe_error_code",
    "lookup_error_code",
    # Memory
    "BYTES_IN_MEGABYTE",
    "MemoryProbe",
    "MemorySnapshot",
    "SysconfMemoryProbe",
    "UnavailableMemoryProbe",
    "default_memory_probe",
    "select_memory_probe",
    # Checkpoint
    "IGNORED_ERROR_CODES",
    "diagnose_system_error",
    "check_system_error",
]
