"""Pytest configuration and shared fixtures."""
import pytest

from etf_explorer.core.config import API_KEY_ENV_NAMES, get_settings


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Mock environment variables for all tests."""
    for name in API_KEY_ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("ANALYSIS_MODE", raising=False)
    monkeypatch.setenv("GEMINI_API_KEY", "test-gemini-key")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def etf_payload():
    """A well-formed ETF analysis as the model returns it."""
    return {
        "ticker": "VOO",
        "summary": "Tracks the S&P 500 index.",
        "sector": "Large Blend",
        "currentPrice": "$512.30",
        "performance": {"ytd": "+12.4%", "threeMonth": "+3.1%", "sixMonth": "-1.2%", "oneYear": "+24.0%"},
        "holdings": [{"name": "Apple Inc.", "percentage": "7.1%"}, {"name": "Microsoft", "percentage": "6.8"}],
        "alternatives": [{"ticker": "SPY", "price": "$558.10"}, {"ticker": "IVV", "price": "561.00"}],
    }
