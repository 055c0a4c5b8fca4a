from __future__ import annotations

import pytest

from core.config import EverythingSettings

_VARS = (
    "EVERYTHING_URL",
    "EVERYTHING_TIMEOUT",
    "EVERYTHING_RATE_LIMIT_MS",
    "EVERYTHING_DEFAULT_SCOPE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    # keep a developer's .env out of these tests
    monkeypatch.setattr("core.config.load_dotenv", lambda: False)


def test_defaults() -> None:
    settings = EverythingSettings.from_env()

    assert settings.base_url == "http://127.0.0.1:8011"
    assert settings.timeout == 10.0
    assert settings.rate_limit_ms == 100
    assert settings.rate_limit_seconds == 0.1
    assert settings.default_scope == "C:"


def test_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EVERYTHING_URL", "http://192.168.1.5:9000/")
    monkeypatch.setenv("EVERYTHING_TIMEOUT", "5")
    monkeypatch.setenv("EVERYTHING_RATE_LIMIT_MS", "0")
    monkeypatch.setenv("EVERYTHING_DEFAULT_SCOPE", "")

    settings = EverythingSettings.from_env()

    assert settings.base_url == "http://192.168.1.5:9000"
    assert settings.timeout == 5.0
    assert settings.rate_limit_ms == 0
    assert settings.default_scope == ""


def test_bare_host_port_gets_scheme(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EVERYTHING_URL", "localhost:8011")

    assert EverythingSettings.from_env().base_url == "http://localhost:8011"


@pytest.mark.parametrize("value", ["abc", "-3", "0"])
def test_bad_timeout_falls_back(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("EVERYTHING_TIMEOUT", value)

    assert EverythingSettings.from_env().timeout == 10.0


def test_bad_rate_limit_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EVERYTHING_RATE_LIMIT_MS", "soon")

    assert EverythingSettings.from_env().rate_limit_ms == 100
