"""Text rendering for samples and statistics.

Every function takes an optional ``FormatConfig``; when omitted the process
default from ``get_config()`` is used. None of these functions raise on
valid numeric input: unknown labels fall back to their keys.
"""

import math
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

from beartype import beartype
from loguru import logger

from runtime_measure._config import FormatConfig, get_config
from runtime_measure._locale import translate, translate_unit
from runtime_measure._samples import AggregateStatistics, Sample

SIZE_KB = 1024
SIZE_MB = SIZE_KB * 1024
SIZE_GB = SIZE_MB * 1024

NS_PER_MS = 1_000_000

RULE_WIDTH = 50
TIMELINE_WIDTH = 50
TIMELINE_NAME_WIDTH = 15
TIMELINE_BAR = "█"

_SCALARS = (bool, int, float, complex, str, bytes)


def _to_decimal(value: int | float) -> Decimal:
    if isinstance(value, int):
        return Decimal(int(value))
    return Decimal(str(float(value)))


def _round_number(value: int | float, precision: int, divisor: int = 1) -> str:
    """Round ``value / divisor`` half away from zero, without trailing zeros."""
    if isinstance(value, float) and not math.isfinite(value):
        return str(float(value))

    number = _to_decimal(value)
    with localcontext() as context:
        # room for every integer digit, the requested decimals and an exact quotient
        context.prec = max(number.adjusted(), 0) + precision + 64
        quantum = Decimal(1).scaleb(-precision)
        rounded = (number / divisor).quantize(quantum, rounding=ROUND_HALF_UP)

    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@beartype
def format_time(milliseconds: int | float, config: FormatConfig | None = None) -> str:
    """Render a duration given in milliseconds with a scaled unit.

    Below 1 ms renders microseconds, below 1000 ms milliseconds, otherwise
    seconds. Boundaries are strict: 1.0 is "1 ms" and 1000.0 is "1 sec".
    """
    config = config or get_config()
    language = config.language
    precision = config.time_precision

    if milliseconds < 1:
        value, divisor, unit = milliseconds * 1000, 1, "μs"
    elif milliseconds < 1000:
        value, divisor, unit = milliseconds, 1, "ms"
    else:
        value, divisor, unit = milliseconds, 1000, "sec"

    return f"{_round_number(value, precision, divisor)} {translate_unit(unit, language)}"


@beartype
def format_memory(
    num_bytes: int | float,
    precision: int | None = None,
    config: FormatConfig | None = None,
) -> str:
    """Render a byte count in binary multiples (KB = 1024 bytes).

    Args:
        num_bytes: Size in bytes; negative deltas are scaled by magnitude
        precision: Decimal places; ``config.memory_precision`` when None
        config: Formatting config; process default when None
    """
    config = config or get_config()
    language = config.language
    if precision is None:
        precision = config.memory_precision
    assert precision >= 0, f"Precision must be non-negative: {precision}"

    magnitude = abs(num_bytes)
    if magnitude >= SIZE_GB:
        divisor, unit = SIZE_GB, "gb"
    elif magnitude >= SIZE_MB:
        divisor, unit = SIZE_MB, "mb"
    elif magnitude >= SIZE_KB:
        divisor, unit = SIZE_KB, "kb"
    else:
        return f"{_round_number(num_bytes, 0)} {translate_unit('bytes', language)}"

    return f"{_round_number(num_bytes, precision, divisor)} {translate_unit(unit, language)}"


def _describe_result(result: Any) -> str:
    if isinstance(result, _SCALARS):
        return str(result)
    return type(result).__name__


@beartype
def format_result(
    sample: Sample,
    separator: str = "\n",
    show_result: bool = False,
    config: FormatConfig | None = None,
) -> str:
    """Render one sample as a multi-line block.

    Lines are always joined with newlines. ``separator`` terminates the block
    after the closing rule, so concatenated blocks are divided by it.

    Args:
        sample: Measurement to render
        separator: Text appended after the closing rule
        show_result: Include the work's return value (type name if not scalar)
        config: Formatting config; process default when None
    """
    config = config or get_config()
    language = config.language

    lines = []
    if sample.name:
        lines.append(f"{translate('test', language)}: {sample.name}")
    if show_result:
        lines.append(f" - {translate('result', language)}: {_describe_result(sample.result)}")

    lines.append(f" - {translate('time', language)}: {format_time(sample.elapsed_ms, config)}")
    lines.append(
        f" - {translate('memory_used', language)}: "
        f"{format_memory(sample.memory_delta_bytes, config=config)}"
    )
    lines.append(
        f" - {translate('peak_memory', language)}: "
        f"{format_memory(sample.peak_memory_bytes, config=config)}"
    )
    lines.append("-" * RULE_WIDTH)

    return "\n".join(lines) + separator


@beartype
def format_statistics(stats: AggregateStatistics, config: FormatConfig | None = None) -> str:
    """Render aggregate statistics as a multi-line block."""
    config = config or get_config()
    language = config.language

    rows = [
        ("average_time", format_time(stats.average_time_ns / NS_PER_MS, config)),
        ("min_time", format_time(stats.min_time_ns / NS_PER_MS, config)),
        ("max_time", format_time(stats.max_time_ns / NS_PER_MS, config)),
        ("average_memory", format_memory(stats.average_memory_bytes, config=config)),
        ("min_memory", format_memory(stats.min_memory_bytes, config=config)),
        ("max_memory", format_memory(stats.max_memory_bytes, config=config)),
    ]

    lines = [f"{translate('iterations', language)}: {stats.iterations}"]
    lines.extend(f" - {translate(key, language)}: {value}" for key, value in rows)
    lines.append("-" * RULE_WIDTH)
    return "\n".join(lines) + "\n"


@beartype
def render_timeline(
    named_samples: Mapping[str, Sample],
    config: FormatConfig | None = None,
) -> str:
    """Render a proportional ASCII bar chart of elapsed times.

    Bars are scaled against the slowest entry over a fixed width. Any entry
    with a non-zero time gets at least one filled cell. Names are truncated
    to 15 characters.

    Example:
        Execution Timeline:
        ----------------------------------------------------------------------
        parse            1.20 ms |████████████████████████                          |
        render           2.50 ms |██████████████████████████████████████████████████|
        ----------------------------------------------------------------------
        Max time: 2.50 ms
    """
    config = config or get_config()
    language = config.language

    if not named_samples:
        return translate("no_measurements", language)

    max_time = max(sample.elapsed_time_ns for sample in named_samples.values())
    ms = translate_unit("ms", language)
    rule = "-" * (TIMELINE_WIDTH + 20)

    output = [f"{translate('timeline', language)}:", rule]
    for name, sample in named_samples.items():
        elapsed = sample.elapsed_time_ns
        filled = _round_half_up(elapsed / max_time * TIMELINE_WIDTH) if max_time > 0 else 0
        if elapsed > 0:
            filled = max(1, filled)

        label = name[:TIMELINE_NAME_WIDTH]
        bar = TIMELINE_BAR * filled + " " * (TIMELINE_WIDTH - filled)
        output.append(f"{label:<{TIMELINE_NAME_WIDTH}} {sample.elapsed_ms:5.2f} {ms} |{bar}|")

    output.append(rule)
    output.append(f"{translate('max_time', language)}: {max_time / NS_PER_MS:.2f} {ms}")
    return "\n".join(output) + "\n"


@beartype
def log_statistics(
    stats: AggregateStatistics,
    title: str = "MEASUREMENT RESULTS",
    config: FormatConfig | None = None,
) -> None:
    """Log formatted statistics via loguru inside a titled banner."""
    logger.info("")
    logger.info("=" * RULE_WIDTH)
    logger.info(f"{title:^{RULE_WIDTH}}")
    logger.info("=" * RULE_WIDTH)
    for line in format_statistics(stats, config).splitlines()[:-1]:
        logger.info(line)
    logger.info("=" * RULE_WIDTH)
    logger.info("")
