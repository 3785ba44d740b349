"""Tests for environment-driven settings."""

from anxcloud.settings import DEFAULT_BASE_URL, DEFAULT_REQUEST_TIMEOUT, get_settings


def test_defaults():
    settings = get_settings()

    assert settings.token is None
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.request_timeout == DEFAULT_REQUEST_TIMEOUT


def test_reads_anexia_prefixed_env(monkeypatch):
    monkeypatch.setenv("ANEXIA_TOKEN", "secret-token")
    monkeypatch.setenv("ANEXIA_BASE_URL", "https://engine.example")
    monkeypatch.setenv("ANEXIA_REQUEST_TIMEOUT", "2.5")

    settings = get_settings()

    assert settings.token == "secret-token"
    assert settings.base_url == "https://engine.example"
    assert settings.request_timeout == 2.5


def test_ignores_unknown_anexia_variables(monkeypatch):
    monkeypatch.setenv("ANEXIA_VLAN_ID", "vlan-1")

    assert not hasattr(get_settings(), "vlan_id")


def test_token_hidden_from_repr(monkeypatch):
    monkeypatch.setenv("ANEXIA_TOKEN", "secret-token")

    assert "secret-token" not in repr(get_settings())
