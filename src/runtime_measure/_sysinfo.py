"""Host environment snapshot printed alongside measurements."""

import os
import platform
from datetime import datetime

import psutil
from beartype import beartype

from runtime_measure._config import FormatConfig
from runtime_measure._format import format_memory
from runtime_measure._probe import MemoryProbe, select_memory_probe


@beartype
def system_info(
    probe: MemoryProbe | None = None,
    config: FormatConfig | None = None,
) -> dict[str, object]:
    """Collect interpreter, OS, CPU and memory details for the current host.

    Args:
        probe: Memory probe for current/peak figures (default: best for host)
        config: Formatting config for the memory figures

    Returns:
        Dictionary with python_version, os, architecture, cpu_count,
        system_load (None where unsupported), current_memory, peak_memory,
        timestamp and timezone.
    """
    probe = probe if probe is not None else select_memory_probe()
    now = datetime.now().astimezone()

    return {
        "python_version": platform.python_version(),
        "python_implementation": platform.python_implementation(),
        "os": platform.system(),
        "architecture": platform.machine(),
        "cpu_count": psutil.cpu_count(logical=True),
        "system_load": os.getloadavg() if hasattr(os, "getloadavg") else None,
        "current_memory": format_memory(probe.current_memory_bytes(), config=config),
        "peak_memory": format_memory(probe.peak_memory_bytes(), config=config),
        "timestamp": now.strftime("%Y-%m-%d %H:%M:%S"),
        "timezone": now.tzname(),
    }
