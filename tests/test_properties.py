"""Property-based tests for runtime_measure using Hypothesis.

These tests verify mathematical invariants that handwritten tests miss:
ordering of reduced statistics for arbitrary sample sequences, monotonic
timeline bars, and unit selection across the whole numeric range.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from runtime_measure import (
    AggregateStatistics,
    Aggregator,
    FormatConfig,
    InvalidArgumentError,
    Sample,
    format_memory,
    format_time,
    render_timeline,
    set_language,
)

# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

# Elapsed nanoseconds: non-negative, up to ~16 minutes
valid_elapsed_ns = st.integers(min_value=0, max_value=10**12)

# Memory deltas: can be negative (memory released)
valid_memory_delta = st.integers(min_value=-(2**40), max_value=2**40)

# Non-negative byte counts, far past any real process size
valid_bytes = st.integers(min_value=0, max_value=2**400)

# Durations in milliseconds, including magnitudes far beyond float digit counts
valid_ms = st.floats(min_value=0.0, max_value=1e300, allow_nan=False, allow_infinity=False)

# Any configured precision
valid_precision = st.integers(min_value=0, max_value=100)

sample_lists = st.lists(st.tuples(valid_elapsed_ns, valid_memory_delta), min_size=1, max_size=50)


def to_samples(data: list[tuple[int, int]]) -> list[Sample]:
    return [
        Sample(result=None, elapsed_time_ns=t, memory_delta_bytes=m, peak_memory_bytes=0)
        for t, m in data
    ]


# ---------------------------------------------------------------------------
# Aggregate statistics
# ---------------------------------------------------------------------------

class TestAggregateProperties:
    @given(data=sample_lists)
    def test_min_le_average_le_max(self, data):
        """min <= average <= max in both domains for any non-empty input."""
        stats = AggregateStatistics.from_samples(to_samples(data))

        assert stats.min_time_ns <= stats.average_time_ns <= stats.max_time_ns
        assert stats.min_memory_bytes <= stats.average_memory_bytes <= stats.max_memory_bytes

    @given(data=sample_lists)
    def test_extremes_match_input(self, data):
        stats = AggregateStatistics.from_samples(to_samples(data))

        assert stats.min_time_ns == min(t for t, _ in data)
        assert stats.max_time_ns == max(t for t, _ in data)
        assert stats.min_memory_bytes == min(m for _, m in data)
        assert stats.max_memory_bytes == max(m for _, m in data)
        assert stats.iterations == len(data)

    @given(data=sample_lists)
    def test_retention_only_affects_samples(self, data):
        samples = to_samples(data)
        kept = AggregateStatistics.from_samples(samples, retain_samples=True)
        dropped = AggregateStatistics.from_samples(samples, retain_samples=False)

        assert kept.samples == tuple(samples)
        assert dropped.samples == ()
        assert (kept.average_time_ns, kept.min_time_ns, kept.max_time_ns) == (
            dropped.average_time_ns, dropped.min_time_ns, dropped.max_time_ns
        )
        assert (kept.average_memory_bytes, kept.min_memory_bytes, kept.max_memory_bytes) == (
            dropped.average_memory_bytes, dropped.min_memory_bytes, dropped.max_memory_bytes
        )

    @given(n=st.integers(min_value=1, max_value=20))
    @settings(max_examples=15, deadline=None)
    def test_workload_runs_exactly_n_times(self, n):
        calls = []
        stats = Aggregator().measure_multiple(calls.append, [None], iterations=n, retain_samples=True)
        assert len(calls) == n
        assert len(stats.samples) == n

    @given(n=st.integers(max_value=0))
    def test_non_positive_iterations_always_raise(self, n):
        calls = []
        with pytest.raises(InvalidArgumentError):
            Aggregator().measure_multiple(calls.append, [None], iterations=n)
        assert calls == []


# ---------------------------------------------------------------------------
# Timeline
# ---------------------------------------------------------------------------

class TestTimelineProperties:
    @given(times=st.lists(valid_elapsed_ns, min_size=1, max_size=20))
    def test_bar_length_monotonic_in_time(self, times):
        """A longer time never gets a shorter bar."""
        named = {
            f"op{i}": Sample(result=None, elapsed_time_ns=t, memory_delta_bytes=0, peak_memory_bytes=0)
            for i, t in enumerate(times)
        }
        rows = [line for line in render_timeline(named).splitlines() if line.startswith("op")]
        lengths = [row.count("█") for row in rows]

        assert len(lengths) == len(times)
        for (t_a, len_a) in zip(times, lengths):
            for (t_b, len_b) in zip(times, lengths):
                if t_a > t_b:
                    assert len_a >= len_b
            assert 0 <= len_a <= 50
            assert (len_a >= 1) == (t_a > 0)


# ---------------------------------------------------------------------------
# Unit selection
# ---------------------------------------------------------------------------

class TestUnitProperties:
    @given(ms=valid_ms)
    def test_time_unit_matches_threshold(self, ms):
        output = format_time(ms)
        if ms < 1:
            assert output.endswith(" μs")
        elif ms < 1000:
            assert output.endswith(" ms")
        else:
            assert output.endswith(" sec")

    @given(ms=valid_ms, precision=valid_precision)
    def test_time_never_raises(self, ms, precision):
        value = format_time(ms, FormatConfig(time_precision=precision)).split(" ")[0]
        decimals = value.split(".")[1] if "." in value else ""
        assert len(decimals) <= precision

    @given(num_bytes=st.integers(min_value=-(2**400), max_value=2**400), precision=valid_precision)
    def test_memory_never_raises(self, num_bytes, precision):
        assert format_memory(num_bytes, precision=precision)

    @given(num_bytes=valid_bytes)
    def test_memory_unit_matches_threshold(self, num_bytes):
        output = format_memory(num_bytes)
        if num_bytes >= 1024**3:
            assert output.endswith(" GB")
        elif num_bytes >= 1024**2:
            assert output.endswith(" MB")
        elif num_bytes >= 1024:
            assert output.endswith(" KB")
        else:
            assert output == f"{num_bytes} bytes"

    @given(num_bytes=valid_bytes, precision=st.integers(min_value=0, max_value=6))
    def test_memory_respects_precision(self, num_bytes, precision):
        value = format_memory(num_bytes, precision=precision).split(" ")[0]
        decimals = value.split(".")[1] if "." in value else ""
        assert len(decimals) <= precision

    @given(tag=st.text(max_size=10))
    def test_set_language_never_raises(self, tag):
        assert set_language(tag) in ("en", "ru")
