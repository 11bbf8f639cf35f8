from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Mapping, Union

from authable.core.config import (
    BUILTIN_APP,
    BUILTIN_CLIENT,
    BUILTIN_TOKEN,
    BUILTIN_USER,
    AuthableSettings,
)
from authable.install.templates import timestamp


@dataclass(frozen=True)
class BuiltIn:
    """The role uses the model shipped with authable."""

    identifier: str


@dataclass(frozen=True)
class Custom:
    """The role uses a caller-supplied SQLAlchemy model."""

    identifier: str


ModelSource = Union[BuiltIn, Custom]

Revision = Union[str, tuple[str, ...], None]


def model_source(identifier: str, builtin: str) -> ModelSource:
    if identifier == builtin:
        return BuiltIn(builtin)
    return Custom(identifier)


@dataclass(frozen=True)
class InstallConfig:
    resource_owner: ModelSource
    token_store: ModelSource
    client: ModelSource
    app: ModelSource

    repo: str
    app_path: Path
    otp_app: str
    migrations_path: str

    timestamp: int
    down_revision: Revision = None
    force: bool = False

    @property
    def migrations_dir(self) -> Path:
        return self.app_path / self.migrations_path

    @property
    def models_dir(self) -> Path:
        return self.app_path / "lib" / self.otp_app / "authable"


def load_config(
    settings: AuthableSettings,
    options: Mapping[str, object] | None = None,
    now: datetime | None = None,
) -> InstallConfig:
    """Merge library settings with CLI overrides and a fresh timestamp seed.

    Only ``app_path`` and ``force`` are read from ``options``; anything else
    is ignored.
    """
    options = options or {}

    raw_path = options.get("app_path") or "."
    app_path = Path(str(raw_path))
    otp_app = settings.otp_app or app_path.resolve().name

    return InstallConfig(
        resource_owner=model_source(settings.resource_owner, BUILTIN_USER),
        token_store=model_source(settings.token_store, BUILTIN_TOKEN),
        client=model_source(settings.client, BUILTIN_CLIENT),
        app=model_source(settings.app, BUILTIN_APP),
        repo=settings.repo,
        app_path=app_path,
        otp_app=otp_app,
        migrations_path=settings.migrations_path,
        timestamp=timestamp(now),
        force=bool(options.get("force", False)),
    )

