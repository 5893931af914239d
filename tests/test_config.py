import importlib
import pytest

from core import config

def test_settings_load_from_env(monkeypatch):
    monkeypatch.setenv("READ_KEYS", "keys_token")
    monkeypatch.setenv("ISSUE_COMMENT", "comment_token")
    monkeypatch.setenv("WORKER_VERSION", "9.9.9 test")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")

    importlib.reload(config)
    settings = config.Settings()

    assert settings.READ_KEYS == "keys_token"
    assert settings.ISSUE_COMMENT == "comment_token"
    assert settings.WORKER_VERSION == "9.9.9 test"
    assert settings.PORT == 9000
    assert settings.REQUEST_TIMEOUT == 2.5

def test_settings_default_values(monkeypatch):
    monkeypatch.delenv("WORKER_VERSION", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("KEYS_URL", raising=False)
    monkeypatch.delenv("COMMENT_URL", raising=False)
    monkeypatch.delenv("WEBHOOK_USER_AGENT_PREFIX", raising=False)

    importlib.reload(config)
    settings = config.Settings()

    assert settings.WORKER_VERSION == "0.0.2 aequalis"
    assert settings.PORT == 8080
    assert settings.KEYS_URL.endswith("/actions/variables")
    assert settings.COMMENT_URL.endswith("/issues/1/comments")
    assert settings.WEBHOOK_USER_AGENT_PREFIX == "GitHub-Hookshot"

def test_settings_missing_required_env_vars(monkeypatch):
    monkeypatch.delenv("READ_KEYS", raising=False)
    monkeypatch.delenv("ISSUE_COMMENT", raising=False)

    settings = config.Settings()
    with pytest.raises(ValueError):
        settings.validate_settings()
