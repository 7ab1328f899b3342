"""runtime-measure: Timing and memory measurement of arbitrary callables.

Provides:
- Measurement: Times one call and samples process memory before/after/peak
- Aggregator: Repeats a measurement and reduces to min/max/average
- MemoryProbe: Pluggable process memory source (/proc status or psutil)
- format_time / format_memory / format_result / render_timeline: Localized text output
- FormatConfig / configure / set_language: Output language and rounding

Usage:
    from runtime_measure import measure, measure_multiple, format_result, render_timeline

    sample = measure(sorted, [data], name="sort")
    print(format_result(sample, show_result=True))

    stats = measure_multiple(sorted, [data], iterations=10, retain_samples=True)
    print(render_timeline({s.name: s for s in stats.samples}))
"""

from runtime_measure._config import (
    DEFAULT_CONFIG,
    FormatConfig,
    configure,
    get_config,
    get_language,
    reset_config,
    set_language,
)
from runtime_measure._core import (
    Aggregator,
    Measurement,
    benchmark,
    measure,
    measure_multiple,
)
from runtime_measure._format import (
    format_memory,
    format_result,
    format_statistics,
    format_time,
    log_statistics,
    render_timeline,
)
from runtime_measure._locale import (
    DEFAULT_LANGUAGE,
    SUPPORTED_LANGUAGES,
    lookup,
    lookup_unit,
    resolve_language,
    translate,
    translate_unit,
)
from runtime_measure._probe import (
    MemoryProbe,
    ProcStatusMemoryProbe,
    PsutilMemoryProbe,
    select_memory_probe,
)
from runtime_measure._samples import (
    AggregateStatistics,
    InvalidArgumentError,
    Sample,
    StatisticsAccumulator,
)
from runtime_measure._sysinfo import system_info

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_LANGUAGE",
    "SUPPORTED_LANGUAGES",
    "AggregateStatistics",
    "Aggregator",
    "FormatConfig",
    "InvalidArgumentError",
    "Measurement",
    "MemoryProbe",
    "ProcStatusMemoryProbe",
    "PsutilMemoryProbe",
    "Sample",
    "StatisticsAccumulator",
    "benchmark",
    "configure",
    "format_memory",
    "format_result",
    "format_statistics",
    "format_time",
    "get_config",
    "get_language",
    "log_statistics",
    "lookup",
    "lookup_unit",
    "measure",
    "measure_multiple",
    "render_timeline",
    "reset_config",
    "resolve_language",
    "select_memory_probe",
    "set_language",
    "system_info",
    "translate",
    "translate_unit",
]

__version__ = "0.1.0"
