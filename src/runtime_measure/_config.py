"""Formatting configuration.

``FormatConfig`` is an immutable value that formatter functions accept
explicitly. When a call omits it, the process default is used; the default
is replaced atomically under a lock so concurrent readers always see a
complete config.
"""

import threading
from dataclasses import dataclass, replace

from beartype import beartype
from loguru import logger

from runtime_measure._locale import DEFAULT_LANGUAGE, resolve_language

DEFAULT_TIME_PRECISION = 3
DEFAULT_MEMORY_PRECISION = 2


@dataclass(frozen=True)
class FormatConfig:
    """Language and rounding settings for rendered output.

    Attributes:
        language: Locale tag; unsupported tags are replaced by the default
        time_precision: Decimal places for formatted durations (MUST be >= 0)
        memory_precision: Decimal places for formatted sizes (MUST be >= 0)
    """

    language: str = DEFAULT_LANGUAGE
    time_precision: int = DEFAULT_TIME_PRECISION
    memory_precision: int = DEFAULT_MEMORY_PRECISION

    def __post_init__(self) -> None:
        assert isinstance(self.language, str), (
            f"Language must be a string: {self.language!r}"
        )
        for field_name in ("time_precision", "memory_precision"):
            value = getattr(self, field_name)
            assert isinstance(value, int) and not isinstance(value, bool), (
                f"{field_name} must be an integer: {value!r}"
            )

        resolved = resolve_language(self.language)
        if resolved != self.language:
            logger.debug(f"Unsupported language {self.language!r}, using {resolved!r}")
            object.__setattr__(self, "language", resolved)

        assert self.time_precision >= 0, (
            f"Time precision must be non-negative: {self.time_precision}"
        )
        assert self.memory_precision >= 0, (
            f"Memory precision must be non-negative: {self.memory_precision}"
        )


DEFAULT_CONFIG = FormatConfig()

_config = DEFAULT_CONFIG
_config_lock = threading.Lock()


def get_config() -> FormatConfig:
    """Current process-wide default config."""
    with _config_lock:
        return _config


@beartype
def configure(
    language: str | None = None,
    time_precision: int | None = None,
    memory_precision: int | None = None,
) -> FormatConfig:
    """Replace fields of the process default config and return the new value.

    Fields passed as None keep their current value.
    """
    global _config

    changes: dict[str, object] = {}
    if language is not None:
        changes["language"] = language
    if time_precision is not None:
        changes["time_precision"] = time_precision
    if memory_precision is not None:
        changes["memory_precision"] = memory_precision

    with _config_lock:
        _config = replace(_config, **changes)
        return _config


@beartype
def set_language(tag: str) -> str:
    """Select the default output language; returns the language now active.

    Unsupported tags fall back to the default language instead of raising.
    """
    return configure(language=tag).language


def get_language() -> str:
    return get_config().language


def reset_config() -> None:
    """Restore the built-in defaults (en, time 3, memory 2)."""
    global _config

    with _config_lock:
        _config = DEFAULT_CONFIG
