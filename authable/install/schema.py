from __future__ import annotations

import importlib

from sqlalchemy import inspect
from sqlalchemy.exc import NoInspectionAvailable

from authable.install.errors import ModelLookupError


def _split_identifier(identifier: str) -> tuple[str, str]:
    if ":" in identifier:
        module_name, _, attr = identifier.partition(":")
    else:
        module_name, _, attr = identifier.rpartition(".")
    if not module_name or not attr:
        raise ModelLookupError(identifier, "expected 'package.module.Class'")
    return module_name, attr


def load_model(identifier: str) -> type:
    module_name, attr = _split_identifier(identifier)
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ModelLookupError(identifier, str(exc)) from exc
    try:
        return getattr(module, attr)
    except AttributeError as exc:
        raise ModelLookupError(identifier, f"{module_name} has no attribute {attr}") from exc


def model_fields(identifier: str) -> set[str]:
    """Column names declared on the mapped class named by ``identifier``."""
    model = load_model(identifier)
    try:
        mapper = inspect(model)
    except NoInspectionAvailable as exc:
        raise ModelLookupError(identifier, "not a mapped SQLAlchemy class") from exc
    return {column.name for column in mapper.columns}


def model_name(identifier: str) -> str:
    """``myapp.models:Account`` -> ``account``"""
    return identifier.replace(":", ".").split(".")[-1].lower()
