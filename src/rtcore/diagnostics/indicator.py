"""Explicit error indicator replacing the process-wide errno.

Operations that can hit a platform error record it on an ErrorIndicator that
is passed to them, instead of leaving it in hidden global state. The
indicator is read and reset in one place only, by the system error check.

Example:
    >>> from src.rtcore.diagnostics import ErrorIndicator, check_system_error
    >>> indicator = ErrorIndicator()
    >>> try:
    ...     open("/missing/scene.obj")
    ... except OSError as exc:
    ...     indicator.record_os_error(exc)
    >>> check_system_error("Failed to read scene", indicator)
"""

import threading


class ErrorIndicator:
    """Holds the pending platform error code; 0 means no error.

    Check-and-reset sequences must hold ``lock`` so that one thread cannot
    swallow or misattribute another thread's pending error.
    """

    def __init__(self, code: int = 0) -> None:
        self._code = code
        self.lock = threading.RLock()

    @property
    def code(self) -> int:
        """The pending error code."""
        return self._code

    def set(self, code: int) -> None:
        """Record a platform error code."""
        with self.lock:
            self._code = code

    def reset(self) -> None:
        """Clear the pending error."""
        with self.lock:
            self._code = 0

    def record_os_error(self, exc: OSError) -> None:
        """Record the errno carried by an OSError.

        Errors without an errno (e.g. raised by pure Python code) are ignored.
        """
        if exc.errno:
            self.set(exc.errno)

    def __repr__(self) -> str:
        return f"ErrorIndicator(code={self._code})"
