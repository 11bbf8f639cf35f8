from __future__ import annotations


class InstallError(Exception):
    """Base class for failures that abort the install task."""


class UnsupportedEnvironmentError(InstallError):
    pass


class MissingTemplateError(InstallError):
    def __init__(self, path: str) -> None:
        super().__init__(f"could not find {path} in any of the sources")
        self.path = path


class ModelLookupError(InstallError):
    def __init__(self, identifier: str, reason: str) -> None:
        super().__init__(f"could not load model {identifier}: {reason}")
        self.identifier = identifier


class TemplateRenderError(InstallError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"could not render {path}: {reason}")
        self.path = path
