import pytest

from tlscore.core.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Every test starts from default settings, independent of the caller's environment."""
    monkeypatch.delenv("TLSCORE_SECRET_PRINT_MODE", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def reveal_secrets(monkeypatch):
    monkeypatch.setenv("TLSCORE_SECRET_PRINT_MODE", "hex")
    get_settings.cache_clear()
