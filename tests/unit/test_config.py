"""
Unit tests for configuration resolution.
"""

from datetime import timedelta

import pytest

from config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    get_config,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "env, expected",
    [
        ("development", DevelopmentConfig),
        ("testing", TestingConfig),
        ("production", ProductionConfig),
        ("unknown", DevelopmentConfig),
    ],
)
def test_get_config_by_name(env, expected):
    assert get_config(env) is expected


def test_get_config_reads_flask_env(monkeypatch):
    monkeypatch.setenv("FLASK_ENV", "production")

    assert get_config() is ProductionConfig


def test_cookie_lifetime_matches_session_lifetime():
    assert TestingConfig.PERMANENT_SESSION_LIFETIME == timedelta(
        seconds=TestingConfig.SESSION_LIFETIME_SECONDS
    )


def test_testing_uses_separate_data_file(app):
    assert app.config["TESTING"] is True
    assert app.config["DATA_FILE"] == TestingConfig.DATA_FILE
    assert app.config["DATA_FILE"] != DevelopmentConfig.DATA_FILE


def test_ownership_enforcement_is_off_by_default():
    assert DevelopmentConfig.ENFORCE_TASK_OWNERSHIP is False
