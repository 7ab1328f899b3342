"""Measurement records and their reduction."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from beartype import beartype


class InvalidArgumentError(ValueError):
    """A caller passed a value the measurement API cannot work with."""


@dataclass(frozen=True)
class Sample:
    """One timed execution of a unit of work.

    Attributes:
        result: Value returned by the work (stored, not inspected)
        elapsed_time_ns: Monotonic-clock duration in nanoseconds (MUST be >= 0)
        memory_delta_bytes: End memory minus start memory (can be negative)
        peak_memory_bytes: Process-wide high-water mark when sampling ended
        name: Display label, empty when unnamed
    """

    result: Any
    elapsed_time_ns: int
    memory_delta_bytes: int
    peak_memory_bytes: int
    name: str = ""

    def __post_init__(self) -> None:
        assert self.elapsed_time_ns >= 0, (
            f"Elapsed time cannot be negative: {self.elapsed_time_ns}ns. "
            f"Clock went backwards or timing bug."
        )
        assert self.peak_memory_bytes >= 0, (
            f"Peak memory cannot be negative: {self.peak_memory_bytes}"
        )

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_time_ns / 1e6


@dataclass(frozen=True)
class AggregateStatistics:
    """Min/max/average over repeated samples of the same work.

    ``samples`` holds every sample in call order when retention was
    requested, otherwise it is empty. Statistics are identical either way.
    """

    average_time_ns: float
    min_time_ns: int
    max_time_ns: int
    average_memory_bytes: float
    min_memory_bytes: int
    max_memory_bytes: int
    iterations: int
    samples: tuple[Sample, ...] = ()

    @classmethod
    @beartype
    def from_samples(
        cls,
        samples: Iterable[Sample],
        retain_samples: bool = False,
    ) -> "AggregateStatistics":
        """Reduce an existing sequence of samples.

        Raises:
            InvalidArgumentError: If ``samples`` is empty.
        """
        accumulator = StatisticsAccumulator(retain_samples=retain_samples)
        for sample in samples:
            accumulator.add(sample)
        return accumulator.result()


class StatisticsAccumulator:
    """Streaming min/sum/max reducer over samples.

    Keeps only running totals unless ``retain_samples`` is set, so large
    iteration counts do not hold on to every workload result.

    Usage:
        accumulator = StatisticsAccumulator(retain_samples=False)
        for sample in samples:
            accumulator.add(sample)
        stats = accumulator.result()
    """

    @beartype
    def __init__(self, retain_samples: bool = False) -> None:
        self.retain_samples = retain_samples
        self._count: int = 0
        self._time_sum: int = 0
        self._time_min: int = 0
        self._time_max: int = 0
        self._memory_sum: int = 0
        self._memory_min: int = 0
        self._memory_max: int = 0
        self._samples: list[Sample] = []

    @property
    def count(self) -> int:
        return self._count

    @beartype
    def add(self, sample: Sample) -> None:
        elapsed = sample.elapsed_time_ns
        memory = sample.memory_delta_bytes

        if self._count == 0:
            self._time_min = self._time_max = elapsed
            self._memory_min = self._memory_max = memory
        else:
            self._time_min = min(self._time_min, elapsed)
            self._time_max = max(self._time_max, elapsed)
            self._memory_min = min(self._memory_min, memory)
            self._memory_max = max(self._memory_max, memory)

        self._time_sum += elapsed
        self._memory_sum += memory
        self._count += 1

        if self.retain_samples:
            self._samples.append(sample)

    def result(self) -> AggregateStatistics:
        if self._count == 0:
            raise InvalidArgumentError("Cannot aggregate zero samples: samples must be non-empty")

        return AggregateStatistics(
            average_time_ns=self._time_sum / self._count,
            min_time_ns=self._time_min,
            max_time_ns=self._time_max,
            average_memory_bytes=self._memory_sum / self._count,
            min_memory_bytes=self._memory_min,
            max_memory_bytes=self._memory_max,
            iterations=self._count,
            samples=tuple(self._samples),
        )
