import pytest
from pydantic import ValidationError

from tripdiary.core.settings import Settings


def test_defaults_boot_without_api_keys(monkeypatch):
    for key in ("DISTANCE_PROVIDER", "ALLOWED_ORIGINS", "OPENCAGE_API_KEY", "OPENROUTESERVICE_API_KEY"):
        monkeypatch.delenv(key, raising=False)

    settings = Settings(_env_file=None)

    assert settings.DISTANCE_PROVIDER == "openroute"
    assert settings.OPENCAGE_API_KEY is None
    assert settings.allowed_origins == ["*"]


def test_values_are_read_from_environment(monkeypatch):
    monkeypatch.setenv("DISTANCE_PROVIDER", "Google")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://localhost:3000, https://diary.example.com")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "2.5")

    settings = Settings(_env_file=None)

    assert settings.DISTANCE_PROVIDER == "google"
    assert settings.allowed_origins == ["http://localhost:3000", "https://diary.example.com"]
    assert settings.HTTP_TIMEOUT_SECONDS == 2.5


def test_unknown_distance_provider_is_rejected(monkeypatch):
    monkeypatch.setenv("DISTANCE_PROVIDER", "carrier-pigeon")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
