from datetime import datetime, timezone
from pathlib import Path

import pytest
from authable.core.config import AuthableSettings
from authable.install.config import BuiltIn, Custom, load_config, model_source
from pydantic import ValidationError


def test_defaults_use_builtin_models(make_config, app_path):
    config = make_config()

    assert config.resource_owner == BuiltIn("authable.models.User")
    assert config.token_store == BuiltIn("authable.models.Token")
    assert config.client == BuiltIn("authable.models.Client")
    assert config.app == BuiltIn("authable.models.App")
    assert config.repo == "Authable.Repo"
    assert config.app_path == app_path
    assert config.timestamp == 20261019021900
    assert config.down_revision is None
    assert config.force is False


def test_env_overrides_select_custom_models(make_config):
    config = make_config(
        resource_owner="myapp.models.Account",
        client="myapp.models:OAuthClient",
        repo="MyApp.Repo",
    )

    assert config.resource_owner == Custom("myapp.models.Account")
    assert config.client == Custom("myapp.models:OAuthClient")
    assert config.token_store == BuiltIn("authable.models.Token")
    assert config.repo == "MyApp.Repo"


def test_model_source_matches_only_the_role_sentinel():
    assert model_source("authable.models.User", "authable.models.User") == BuiltIn(
        "authable.models.User"
    )
    # another role's built-in model is a custom model for this role
    assert model_source("authable.models.Token", "authable.models.User") == Custom(
        "authable.models.Token"
    )


def test_otp_app_defaults_to_app_path_name(make_config, app_path):
    config = make_config()
    assert config.otp_app == "myapp"
    assert config.models_dir == app_path / "lib" / "myapp" / "authable"
    assert config.migrations_dir == app_path / "priv" / "repo" / "migrations"


def test_otp_app_and_migrations_path_from_env(make_config, app_path):
    config = make_config(otp_app="shop", migrations_path="db/versions")
    assert config.models_dir == app_path / "lib" / "shop" / "authable"
    assert config.migrations_dir == app_path / "db" / "versions"


def test_app_path_defaults_to_cwd():
    config = load_config(AuthableSettings(_env_file=None), {})
    assert config.app_path == Path(".")


def test_unknown_options_are_ignored():
    now = datetime(2026, 10, 19, 2, 19, 0, tzinfo=timezone.utc)
    config = load_config(
        AuthableSettings(_env_file=None),
        {"app_path": "/srv/app", "verbose": True, "force": True},
        now=now,
    )
    assert config.app_path == Path("/srv/app")
    assert config.force is True
    assert config.timestamp == 20261019021900


def test_log_level_is_normalized(monkeypatch):
    monkeypatch.setenv("AUTHABLE_LOG_LEVEL", " debug ")
    assert AuthableSettings(_env_file=None).log_level == "DEBUG"


def test_blank_model_identifier_is_rejected(monkeypatch):
    monkeypatch.setenv("AUTHABLE_CLIENT", "   ")
    with pytest.raises(ValidationError):
        AuthableSettings(_env_file=None)


def test_config_is_immutable(make_config):
    config = make_config()
    with pytest.raises(AttributeError):
        config.timestamp = 1


def test_unknown_log_level_is_rejected(monkeypatch):
    monkeypatch.setenv("AUTHABLE_LOG_LEVEL", "loud")
    with pytest.raises(ValidationError, match="AUTHABLE_LOG_LEVEL must be one of"):
        AuthableSettings(_env_file=None)
