import importlib

import pytest

from flow_pool.config import get_settings_module


@pytest.mark.parametrize(
    "env, expected",
    [
        ("production", "flow_pool.config.production"),
        ("PROD", "flow_pool.config.production"),
        ("testing", "flow_pool.config.testing"),
        ("anything-else", "flow_pool.config.development"),
    ],
)
def test_app_env_selects_settings(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == expected


def test_testing_settings_do_not_touch_schema(monkeypatch):
    monkeypatch.delenv("AUTO_INIT_DB", raising=False)
    settings = importlib.reload(importlib.import_module("flow_pool.config.testing"))

    assert settings.AUTO_INIT_DB is False
    assert settings.ACCOUNT_CAPACITY == 10
    assert settings.TENANT_MODE in {"direct", "registration"}
