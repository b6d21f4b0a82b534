"""Physical memory introspection for diagnostic reports.

Memory figures are only available on Unix-like systems that expose
``sysconf`` page counts. Everywhere else the unavailable probe is used, so a
diagnostic simply omits the figures. The probe is picked once at import time.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

BYTES_IN_MEGABYTE = 1048576


@dataclass(frozen=True)
class MemorySnapshot:
    """Physical memory at one point in time.

    Attributes:
        total_mb: Total physical memory in megabytes.
        free_mb: Available physical memory in megabytes.
    """

    total_mb: int
    free_mb: int


class MemoryProbe(Protocol):
    """Capability that reports physical memory, or None when it cannot."""

    def snapshot(self) -> MemorySnapshot | None: ...


class SysconfMemoryProbe:
    """Reads physical and available pages with os.sysconf."""

    def snapshot(self) -> MemorySnapshot | None:
        try:
            page_size = os.sysconf("SC_PAGE_SIZE")
            total_pages = os.sysconf("SC_PHYS_PAGES")
            free_pages = os.sysconf("SC_AVPHYS_PAGES")
        except (ValueError, OSError) as e:
            logger.debug("Memory introspection unavailable: %s", e)
            return None

        return MemorySnapshot(
            total_mb=(total_pages * page_size) // BYTES_IN_MEGABYTE,
            free_mb=(free_pages * page_size) // BYTES_IN_MEGABYTE,
        )


class UnavailableMemoryProbe:
    """Probe for platforms without memory introspection (Windows, macOS)."""

    def snapshot(self) -> MemorySnapshot | None:
        return None


def select_memory_probe(platform: str = sys.platform) -> MemoryProbe:
    """Pick the memory probe for a platform name as found in sys.platform."""
    if platform.startswith("win") or platform == "darwin":
        return UnavailableMemoryProbe()
    return SysconfMemoryProbe()


_default_probe = select_memory_probe()


def default_memory_probe() -> MemoryProbe:
    """Get the probe selected for the running platform."""
    return _default_probe
