from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Sequence

from authable.core.config import PACKAGE_ROOT
from authable.install.config import BuiltIn, InstallConfig
from authable.install.errors import MissingTemplateError, TemplateRenderError
from authable.install.templates import create_file, render

logger = logging.getLogger(__name__)

FileFormat = Literal["template", "text"]

# role -> (source relative to a source root, file name under <models_dir>)
MODEL_FILES: dict[str, tuple[str, str]] = {
    "resource_owner": ("authable/models/app.py", "app.py"),
    "token_store": ("authable/models/token.py", "token.py"),
    "client": ("authable/models/client.py", "client.py"),
    "app": ("authable/models/app.py", "app.py"),
}


@dataclass(frozen=True)
class CopySpec:
    format: FileFormat
    source: str
    target: Path


def source_roots() -> list[Path]:
    """Working directory first, then the directory holding the installed package."""
    return [Path.cwd(), PACKAGE_ROOT]


def models_to_be_copied(config: InstallConfig) -> list[CopySpec]:
    specs: list[CopySpec] = []
    for role, (source, file_name) in MODEL_FILES.items():
        if not isinstance(getattr(config, role), BuiltIn):
            continue
        spec = CopySpec("template", source, config.models_dir / file_name)
        # the user role shares app.py with the app role
        if spec not in specs:
            specs.append(spec)
    return specs


def find_source(roots: Sequence[Path], source: str) -> Path:
    for root in roots:
        candidate = root / source
        if candidate.is_file():
            return candidate
    raise MissingTemplateError(source)


def copy_from(
    roots: Sequence[Path], mapping: Sequence[CopySpec], *, force: bool = False
) -> None:
    """Copy each mapped file, rendering the ones marked as templates.

    Aborts on the first source that no root provides; files already
    written stay in place.
    """
    for spec in mapping:
        source = find_source(roots, spec.source)
        logger.debug("copying %s from %s", spec.source, source)

        contents = source.read_text(encoding="utf-8")
        if spec.format == "template":
            try:
                contents = render(contents, {})
            except (KeyError, ValueError) as exc:
                raise TemplateRenderError(str(source), str(exc)) from exc

        create_file(spec.target, contents, force=force)


def copy_models(
    config: InstallConfig, roots: Sequence[Path] | None = None
) -> InstallConfig:
    copy_from(
        source_roots() if roots is None else roots,
        models_to_be_copied(config),
        force=config.force,
    )
    return config
