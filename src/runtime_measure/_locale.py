"""Localized labels and unit suffixes.

Two languages are built in. Lookups never fail: an unsupported language
resolves to the default and a missing key is echoed back unchanged.
"""

from beartype import beartype

DEFAULT_LANGUAGE = "en"

LOCALES: dict[str, dict[str, str]] = {
    "en": {
        "test": "Test",
        "result": "Result",
        "time": "Time",
        "memory_used": "Memory used",
        "peak_memory": "Peak memory",
        "max_time": "Max time",
        "timeline": "Execution Timeline",
        "no_measurements": "No measurements to display",
        "iterations": "Iterations",
        "average_time": "Average time",
        "min_time": "Min time",
        "average_memory": "Average memory",
        "min_memory": "Min memory",
        "max_memory": "Max memory",
    },
    "ru": {
        "test": "Тест",
        "result": "Результат",
        "time": "Время",
        "memory_used": "Использовано памяти",
        "peak_memory": "Пиковая память",
        "max_time": "Макс. время",
        "timeline": "Временная шкала выполнения",
        "no_measurements": "Нет данных для отображения",
        "iterations": "Итерации",
        "average_time": "Среднее время",
        "min_time": "Мин. время",
        "average_memory": "Средняя память",
        "min_memory": "Мин. память",
        "max_memory": "Макс. память",
    },
}

UNITS: dict[str, dict[str, str]] = {
    "en": {
        "μs": "μs",
        "ms": "ms",
        "sec": "sec",
        "bytes": "bytes",
        "kb": "KB",
        "mb": "MB",
        "gb": "GB",
    },
    "ru": {
        "μs": "мкс",
        "ms": "мс",
        "sec": "сек",
        "bytes": "байт",
        "kb": "Кб",
        "mb": "Мб",
        "gb": "Гб",
    },
}

SUPPORTED_LANGUAGES: tuple[str, ...] = tuple(LOCALES)


@beartype
def resolve_language(tag: str) -> str:
    """Return ``tag`` if it is supported, otherwise the default language."""
    return tag if tag in LOCALES else DEFAULT_LANGUAGE


@beartype
def lookup(key: str, language: str) -> str | None:
    """Label for ``key`` in ``language``, or None when the table has no entry."""
    return LOCALES[resolve_language(language)].get(key)


@beartype
def lookup_unit(unit: str, language: str) -> str | None:
    """Unit suffix for ``unit`` in ``language``, or None when absent."""
    return UNITS[resolve_language(language)].get(unit)


@beartype
def translate(key: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Localized label, echoing ``key`` when no translation exists.

    Args:
        key: Label key (e.g. "memory_used")
        language: Language tag; unsupported tags use the default language
    """
    found = lookup(key, language)
    return key if found is None else found


@beartype
def translate_unit(unit: str, language: str = DEFAULT_LANGUAGE) -> str:
    """Localized unit suffix, echoing ``unit`` when no translation exists."""
    found = lookup_unit(unit, language)
    return unit if found is None else found
