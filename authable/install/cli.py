"""Command-line entry point: ``authable-install``."""

from __future__ import annotations

import logging

import click
from pydantic import ValidationError

from authable import __version__
from authable.core.config import LOG_LEVELS, AuthableSettings
from authable.install.config import load_config
from authable.install.errors import InstallError
from authable.install.runner import check_environment, run_install


@click.command(
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True}
)
@click.version_option(
    __version__, "-v", "--version", message="Authable v%(version)s"
)
@click.option(
    "--app-path",
    type=click.Path(file_okay=False),
    default=None,
    help="Root of the application to install into (default: current directory).",
)
@click.option("--force", is_flag=True, help="Overwrite files that already exist.")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Override AUTHABLE_LOG_LEVEL.",
)
def cli(app_path: str | None, force: bool, log_level: str | None) -> None:
    """Create default migrations and models inside the current application."""
    try:
        check_environment()
        settings = AuthableSettings()
    except InstallError as exc:
        raise click.ClickException(str(exc)) from exc
    except ValidationError as exc:
        raise click.ClickException(f"invalid authable configuration:\n{exc}") from exc

    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = load_config(settings, {"app_path": app_path, "force": force})
    try:
        run_install(config)
    except InstallError as exc:
        raise click.ClickException(str(exc)) from exc


def main() -> None:
    cli()
