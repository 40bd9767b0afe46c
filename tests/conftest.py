import pytest

from tracescope.config import get_settings
from tracescope.utils.logger import reset_logging_for_tests
from tracescope.utils.request_context import reset_request_context


@pytest.fixture(autouse=True)
def idle_request_context():
    """Every test starts (and leaves) the main thread with no active request."""
    reset_request_context()
    yield
    reset_request_context()


@pytest.fixture
def clean_settings(monkeypatch):
    """Isolate tests from any local .env / cached settings."""
    for var in (
        "APP_ENV",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "TRACE_HEADER",
        "TRACE_ATTRIBUTE",
        "STRICT_SCOPES",
        "GOOGLE_CLOUD_PROJECT",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    reset_logging_for_tests()
    yield
    get_settings.cache_clear()
    reset_logging_for_tests()
