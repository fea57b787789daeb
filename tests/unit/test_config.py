"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from src.taskflow.core.config import Settings

pytestmark = pytest.mark.unit

BASE = {
    "database_url": "postgresql+asyncpg://u:p@localhost/db",
    "jwt_secret_key": "x" * 32,
}


def make(**overrides) -> Settings:
    return Settings(_env_file=None, **{**BASE, **overrides})


def test_defaults():
    settings = make()

    assert settings.default_project_color == "#3B82F6"
    assert settings.access_token_expire_minutes == 30


def test_short_jwt_secret_rejected():
    with pytest.raises(ValidationError, match="at least 32"):
        make(jwt_secret_key="short")


def test_placeholder_jwt_secret_rejected():
    with pytest.raises(ValidationError, match="changed from default"):
        make(jwt_secret_key="change-this-to-a-secure-random-string")


def test_wildcard_cors_rejected():
    with pytest.raises(ValidationError, match="wildcard"):
        make(cors_origins=["*"])


@pytest.mark.parametrize("color", ["blue", "#12345", "3B82F6ff", "#GGGGGG"])
def test_bad_default_color_rejected(color):
    with pytest.raises(ValidationError, match="DEFAULT_PROJECT_COLOR"):
        make(default_project_color=color)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DEFAULT_PROJECT_COLOR", "#10B981")

    assert make().default_project_color == "#10B981"
