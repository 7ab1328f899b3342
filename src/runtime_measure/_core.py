"""Core measurement utilities.

Design by Contract:
- Elapsed time MUST be non-negative (crash if negative)
- iterations MUST be >= 1 (InvalidArgumentError, workload never runs)
- Workload exceptions propagate unchanged; no partial samples or statistics

Measurement is synchronous: ``measure`` blocks until the work returns or
raises. There is no timeout; bound the work itself if needed.
"""

import time
from collections.abc import Callable, Sequence
from typing import Any

from beartype import beartype
from loguru import logger

from runtime_measure._config import FormatConfig
from runtime_measure._format import format_memory, format_result, format_time
from runtime_measure._probe import MemoryProbe, select_memory_probe
from runtime_measure._samples import (
    AggregateStatistics,
    InvalidArgumentError,
    Sample,
    StatisticsAccumulator,
)


class Measurement:
    """Times a single execution of a unit of work and samples memory.

    Args:
        probe: Memory probe to sample with (default: best probe for the host)

    Example:
        sample = Measurement().measure(sorted, [data], name="sort")
        print(sample.elapsed_time_ns, sample.memory_delta_bytes)

    Concurrency:
        Use one instance per thread. Memory readings are process-wide, so
        deltas and peaks taken while other threads allocate are not
        attributable to the measured work.
    """

    @beartype
    def __init__(self, probe: MemoryProbe | None = None) -> None:
        self.probe = probe if probe is not None else select_memory_probe()

    @beartype
    def measure(
        self,
        work: Callable[..., Any],
        args: Sequence[Any] = (),
        name: str = "",
    ) -> Sample:
        """Run ``work(*args)`` once and return its timing and memory sample.

        Runs a full garbage collection first, which can pause in proportion
        to outstanding garbage.

        Args:
            work: Callable to execute
            args: Positional arguments passed to ``work``
            name: Display label stored on the sample
        """
        self.probe.reset_transient_state()

        start_time = time.perf_counter_ns()
        start_memory = self.probe.current_memory_bytes()

        result = work(*args)

        end_time = time.perf_counter_ns()
        end_memory = self.probe.current_memory_bytes()

        sample = Sample(
            result=result,
            elapsed_time_ns=end_time - start_time,
            memory_delta_bytes=end_memory - start_memory,
            peak_memory_bytes=self.probe.peak_memory_bytes(),
            name=name,
        )
        logger.debug(
            f"Measured {name or getattr(work, '__name__', repr(work))}: "
            f"{format_time(sample.elapsed_ms)}, "
            f"Δ={format_memory(sample.memory_delta_bytes)}"
        )
        return sample


class Aggregator:
    """Repeats a measurement and reduces the samples to min/max/average.

    Args:
        measurement: Measurement to repeat (default: new Measurement)

    Example:
        stats = Aggregator().measure_multiple(work, [payload], iterations=10)
        print(stats.average_time_ns, stats.max_memory_bytes)
    """

    @beartype
    def __init__(self, measurement: Measurement | None = None) -> None:
        self.measurement = measurement if measurement is not None else Measurement()

    @beartype
    def measure_multiple(
        self,
        work: Callable[..., Any],
        args: Sequence[Any] = (),
        iterations: int = 1,
        retain_samples: bool = False,
    ) -> AggregateStatistics:
        """Measure ``work(*args)`` ``iterations`` times in sequence.

        Fails fast: the first exception from ``work`` aborts the run.

        Args:
            work: Callable to execute
            args: Positional arguments passed to ``work`` on every run
            iterations: Number of runs (MUST be >= 1)
            retain_samples: Keep every per-run Sample on the result

        Raises:
            InvalidArgumentError: If ``iterations`` < 1.
        """
        if iterations < 1:
            raise InvalidArgumentError(f"iterations must be >= 1, got {iterations}")

        accumulator = StatisticsAccumulator(retain_samples=retain_samples)
        for i in range(iterations):
            accumulator.add(self.measurement.measure(work, args, name=f"Iteration {i}"))

        return accumulator.result()


_default_measurement: Measurement | None = None


def _shared_measurement() -> Measurement:
    global _default_measurement

    if _default_measurement is None:
        _default_measurement = Measurement()
    return _default_measurement


@beartype
def measure(work: Callable[..., Any], args: Sequence[Any] = (), name: str = "") -> Sample:
    """Measure one run of ``work`` with the shared default probe."""
    return _shared_measurement().measure(work, args, name)


@beartype
def measure_multiple(
    work: Callable[..., Any],
    args: Sequence[Any] = (),
    iterations: int = 1,
    retain_samples: bool = False,
) -> AggregateStatistics:
    """Measure ``work`` repeatedly with the shared default probe."""
    return Aggregator(_shared_measurement()).measure_multiple(
        work, args, iterations, retain_samples
    )


@beartype
def benchmark(
    work: Callable[..., Any],
    args: Sequence[Any] = (),
    name: str = "",
    separator: str = "\n",
    show_result: bool = False,
    config: FormatConfig | None = None,
) -> str:
    """Measure ``work`` once and return the formatted result block."""
    sample = measure(work, args, name)
    return format_result(sample, separator, show_result, config)
