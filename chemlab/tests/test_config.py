import importlib

from chemlab.app import main
from chemlab.app.core.config import Settings, get_settings
from chemlab.app.models.core_types import Currency


def test_defaults(monkeypatch):
    names = (
        "CHEMLAB_CURRENCY", "CHEMLAB_ORG_NAME", "CHEMLAB_SEED", "CHEMLAB_LOG_LEVEL",
        "GEMINI_API_KEY", "GEMINI_MODEL", "GEMINI_TIMEOUT",
    )
    for name in names:
        monkeypatch.delenv(name, raising=False)

    s = get_settings()

    assert s == Settings()
    assert s.currency == Currency.twd
    assert s.gemini_api_key is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CHEMLAB_CURRENCY", "usd")
    monkeypatch.setenv("CHEMLAB_ORG_NAME", "North Lab")
    monkeypatch.setenv("CHEMLAB_SEED", "false")
    monkeypatch.setenv("CHEMLAB_LOG_LEVEL", "debug")
    monkeypatch.setenv("GEMINI_API_KEY", "k")
    monkeypatch.setenv("GEMINI_TIMEOUT", "5")

    s = get_settings()

    assert s.currency == Currency.usd
    assert s.org_name == "North Lab"
    assert s.seed is False
    assert s.log_level == "DEBUG"
    assert s.gemini_api_key == "k"
    assert s.gemini_timeout == 5.0


def test_unknown_currency_falls_back(monkeypatch):
    monkeypatch.setenv("CHEMLAB_CURRENCY", "EUR")
    assert get_settings().currency == Currency.twd


def test_importing_the_app_module_builds_nothing(monkeypatch):
    """
    GIVEN a malformed GEMINI_TIMEOUT
    THEN importing the app module still succeeds: the app is only built by
    the factory (uvicorn --factory chemlab.app.main:create_app)
    """
    monkeypatch.setenv("GEMINI_TIMEOUT", "soon")

    reloaded = importlib.reload(main)

    assert not hasattr(reloaded, "app")
    assert callable(reloaded.create_app)
