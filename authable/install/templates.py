from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from string import Template
from typing import Mapping

import click

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def render(source: str, bindings: Mapping[str, object]) -> str:
    """Substitute ``$name`` placeholders; a placeholder without a binding raises KeyError."""
    return Template(source).substitute(bindings)


def timestamp(now: datetime | None = None) -> int:
    if now is None:
        now = datetime.now(timezone.utc)
    return int(now.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT))


def camelize(name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def underscore(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def create_file(path: Path, contents: str, *, force: bool = False) -> bool:
    """Write ``contents`` to ``path``, creating parent directories.

    An existing file is left untouched unless ``force`` is set. Returns
    whether the file was written.
    """
    if path.exists() and not force:
        logger.warning("refusing to overwrite %s", path)
        click.secho(f"* skipping {path} (already exists)", fg="yellow")
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(contents, encoding="utf-8")
    click.secho(f"* creating {path}", fg="green")
    logger.debug("wrote %d bytes to %s", len(contents), path)
    return True
