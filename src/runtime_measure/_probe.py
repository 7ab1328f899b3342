"""Process memory probes.

A probe reports the current resident memory of the process and its
lifetime high-water mark. ``select_memory_probe`` picks the most precise
source the host offers and never fails: a missing or unreadable source only
degrades precision.

Design by Contract:
- current_memory_bytes() >= 0
- peak_memory_bytes() >= 0 and never decreases on the same probe
- reset_transient_state() never raises
"""

import gc
import re
import sys
from abc import ABC, abstractmethod
from pathlib import Path

import psutil
from beartype import beartype
from loguru import logger

if sys.platform != "win32":
    import resource

PROC_STATUS_PATH = Path("/proc/self/status")

_VM_RSS = re.compile(r"VmRSS:\s+(\d+)\s+kB")


def _runtime_peak_bytes() -> int:
    if sys.platform == "win32":
        return int(psutil.Process().memory_info().peak_wset)

    peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is bytes on macOS, kilobytes on Linux and the BSDs
    return int(peak) if sys.platform == "darwin" else int(peak) * 1024


def _psutil_rss_bytes() -> int:
    return int(psutil.Process().memory_info().rss)


class MemoryProbe(ABC):
    """Capability for reading process memory.

    Subclasses supply ``current_memory_bytes``. The peak reading is shared:
    it comes from the runtime's high-water mark and is clamped so that it
    never drops below anything this probe has already reported.

    The peak is process-wide. It is not the peak of one measured call when
    other work runs concurrently in the same process.
    """

    def __init__(self) -> None:
        self._high_water: int = 0

    @abstractmethod
    def current_memory_bytes(self) -> int:
        """Memory currently attributed to the process, in bytes."""

    def peak_memory_bytes(self) -> int:
        """Largest process memory footprint observed so far, in bytes."""
        observed = max(_runtime_peak_bytes(), self.current_memory_bytes())
        self._high_water = max(self._high_water, observed)

        assert self._high_water >= 0, f"Peak memory cannot be negative: {self._high_water}"
        return self._high_water

    def reset_transient_state(self) -> None:
        """Run a full collection so stale garbage does not skew the next delta.

        May pause for a time proportional to the outstanding garbage.
        """
        gc.collect()


class PsutilMemoryProbe(MemoryProbe):
    """Resident set size via psutil, available on every supported platform."""

    def current_memory_bytes(self) -> int:
        return _psutil_rss_bytes()


class ProcStatusMemoryProbe(MemoryProbe):
    """Resident set size parsed from a Linux ``/proc/<pid>/status`` file.

    Args:
        status_path: Status file to read (default: /proc/self/status)

    A reading that cannot be taken from the file falls back to psutil for
    that call.
    """

    @beartype
    def __init__(self, status_path: Path = PROC_STATUS_PATH) -> None:
        super().__init__()
        self.status_path = status_path

    def read_status_rss(self) -> int | None:
        """VmRSS from the status file in bytes, or None if unavailable."""
        try:
            status = self.status_path.read_text()
        except OSError:
            return None

        match = _VM_RSS.search(status)
        if match is None:
            return None
        return int(match.group(1)) * 1024

    def current_memory_bytes(self) -> int:
        rss = self.read_status_rss()
        if rss is None:
            logger.debug(f"No VmRSS in {self.status_path}, falling back to psutil")
            return _psutil_rss_bytes()
        return rss


@beartype
def select_memory_probe(status_path: Path = PROC_STATUS_PATH) -> MemoryProbe:
    """Return the most precise probe the host supports.

    Args:
        status_path: Status file checked for a precise VmRSS reading
    """
    probe = ProcStatusMemoryProbe(status_path)
    if probe.read_status_rss() is not None:
        return probe

    logger.debug(f"{status_path} unavailable, using psutil memory probe")
    return PsutilMemoryProbe()
