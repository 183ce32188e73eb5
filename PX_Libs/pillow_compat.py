"""
Single import point for Pillow (which provides the `PIL` namespace).

Library modules import `Image` from here instead of from `PIL` directly, so
the dependency is loaded (and reported when missing) in one place.
"""
from importlib import import_module
from types import ModuleType


def _import(name: str) -> ModuleType:
    try:
        return import_module(name)
    except ImportError as exc:
        raise ImportError("pillow (PIL) is required: install with 'pip install Pillow'") from exc


Image = _import("PIL.Image")
