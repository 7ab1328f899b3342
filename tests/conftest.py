import pytest

from runtime_measure import reset_config


@pytest.fixture(autouse=True)
def _default_format_config():
    """Every test starts and ends with the built-in formatting defaults."""
    reset_config()
    yield
    reset_config()
