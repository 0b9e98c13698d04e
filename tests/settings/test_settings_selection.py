from __future__ import annotations

import pytest

from config import get_settings_module, load_settings


@pytest.mark.parametrize(
    "env, module",
    [
        ("production", "config.production"),
        ("PROD", "config.production"),
        (" testing ", "config.testing"),
        ("dev", "config.development"),
        ("staging", "config.development"),
    ],
)
def test_app_env_aliases(monkeypatch, env, module):
    monkeypatch.setenv("APP_ENV", env)
    assert get_settings_module() == module


def test_missing_app_env_means_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_settings_module() == "config.development"


def test_load_settings_returns_the_module():
    settings = load_settings("testing")

    assert settings.__name__ == "config.testing"
    assert settings.TESTING is True
    assert settings.DEPARTMENT_NAME == "Protocol Department"
