"""Configuration loader helpers."""

from importlib import import_module
from typing import Any


def __getattr__(name: str) -> Any:  # noqa: D401
    mod = import_module("src.config.settings")
    value = getattr(mod, name)
    globals()[name] = value
    return value

__all__ = ["SETTINGS", "PharmaSettings", "update_from_kwargs"]
