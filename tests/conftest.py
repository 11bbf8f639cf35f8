from datetime import datetime, timezone

import pytest
from authable.core.config import AuthableSettings
from authable.install.config import load_config

NOW = datetime(2026, 10, 19, 2, 19, 0, tzinfo=timezone.utc)

ENV_KEYS = (
    "AUTHABLE_RESOURCE_OWNER",
    "AUTHABLE_TOKEN_STORE",
    "AUTHABLE_CLIENT",
    "AUTHABLE_APP",
    "AUTHABLE_REPO",
    "AUTHABLE_MIGRATIONS_PATH",
    "AUTHABLE_OTP_APP",
    "AUTHABLE_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    # Keep developer env vars and .env files out of the settings under test.
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def app_path(tmp_path):
    path = tmp_path / "myapp"
    path.mkdir()
    return path


@pytest.fixture()
def make_config(app_path, monkeypatch):
    def _make(**env):
        for key, value in env.items():
            monkeypatch.setenv(f"AUTHABLE_{key.upper()}", value)
        settings = AuthableSettings(_env_file=None)
        return load_config(settings, {"app_path": str(app_path)}, now=NOW)

    return _make


@pytest.fixture()
def migrations_dir(app_path):
    return app_path / "priv" / "repo" / "migrations"
