from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Sequence

import click

from authable.install.config import InstallConfig
from authable.install.copier import copy_models
from authable.install.errors import UnsupportedEnvironmentError
from authable.install.migrations import (
    FieldsOf,
    gen_app_migration,
    gen_client_migration,
    gen_token_migration,
    gen_user_migration,
    seed_revision,
)
from authable.install.schema import model_fields

logger = logging.getLogger(__name__)

MIN_PYTHON = (3, 10)

NOTICE = """
Before moving on, configure your database URL in alembic.ini and run:

    $ alembic upgrade head
"""


def check_environment(version_info: Sequence[int] | None = None) -> None:
    if version_info is None:
        version_info = sys.version_info
    if tuple(version_info[:2]) < MIN_PYTHON:
        required = ".".join(str(p) for p in MIN_PYTHON)
        found = ".".join(str(p) for p in version_info[:3])
        raise UnsupportedEnvironmentError(
            f"authable requires at least Python {required}. "
            f"You have {found}. Please update accordingly"
        )


def print_notice() -> None:
    click.echo(NOTICE)


def run_install(
    config: InstallConfig,
    *,
    fields_of: FieldsOf = model_fields,
    roots: Sequence[Path] | None = None,
) -> InstallConfig:
    """Copy built-in models and emit one migration per role that needs one.

    Roles run in a fixed order (user, token, client, app) so the emitted
    timestamps sort the same way.
    """
    check_environment()

    config = seed_revision(config)
    config = copy_models(config, roots)
    config = gen_user_migration(config, fields_of)
    config = gen_token_migration(config, fields_of)
    config = gen_client_migration(config, fields_of)
    config = gen_app_migration(config, fields_of)

    logger.info("install finished; next timestamp %s", config.timestamp)
    print_notice()
    return config
