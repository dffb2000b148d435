"""Command line interface for the FMI temperature importer."""

from importlib import import_module
from types import ModuleType


def __getattr__(name: str) -> ModuleType:
    if name == "app":
        return import_module("cli.app")
    raise AttributeError(name)

# ``cli.app`` stays the module, not the Typer instance, so tests can patch
# collaborators such as ``cli.app.build_default_service``.

__all__ = []
