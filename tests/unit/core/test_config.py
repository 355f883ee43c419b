"""Unit tests for configuration selection and validation."""

from __future__ import annotations

import pytest

from makeshort.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_int,
    get_config,
    validate_config,
)


@pytest.mark.parametrize(
    ("env", "expected"),
    [
        ("production", ProductionConfig),
        ("Testing", TestingConfig),
        ("development", DevelopmentConfig),
        ("unknown", DevelopmentConfig),
    ],
)
def test_get_config_follows_app_env(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)
    assert get_config() is expected


def test_env_helpers(monkeypatch):
    monkeypatch.setenv("FLAG", "Yes")
    monkeypatch.setenv("NUM", " ")
    assert env_bool("FLAG") is True
    assert env_bool("MISSING_FLAG", default=True) is True
    assert env_int("NUM", 6) == 6
    monkeypatch.setenv("NUM", "9")
    assert env_int("NUM", 6) == 9


def _prod(**overrides):
    cfg = {
        "DEBUG": False,
        "TESTING": False,
        "SESSION_BACKEND": "redis",
        "SECRET_KEY": "s",
        "JWT_SECRET_KEY": "j",
        "HASH_SALT": "h",
    }
    cfg.update(overrides)
    return cfg


def test_validate_accepts_real_secrets():
    validate_config(_prod())


@pytest.mark.parametrize("key", ["SECRET_KEY", "JWT_SECRET_KEY", "HASH_SALT"])
def test_validate_rejects_placeholders_in_production(key):
    placeholder = {"SECRET_KEY": "CHANGE_ME", "JWT_SECRET_KEY": "CHANGE_ME_JWT", "HASH_SALT": "CHANGE_ME_SALT"}
    with pytest.raises(RuntimeError, match=key):
        validate_config(_prod(**{key: placeholder[key]}))


def test_validate_allows_placeholders_when_testing():
    validate_config(_prod(TESTING=True, JWT_SECRET_KEY="CHANGE_ME_JWT"))


def test_validate_rejects_unknown_backend():
    with pytest.raises(RuntimeError, match="SESSION_BACKEND"):
        validate_config(_prod(SESSION_BACKEND="memcached"))


def test_testing_config_needs_no_redis():
    assert TestingConfig.SESSION_BACKEND == "memory"
    assert TestingConfig.ALIAS_LENGTH >= 1
