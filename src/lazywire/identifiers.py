"""Identifier normalization and lookup of classes by dotted path."""

import importlib
import inspect
from typing import Any, Optional

from lazywire.domain import Identifier

__all__ = ["normalize", "display_name", "locate", "locate_type", "NAMESPACE_SEPARATOR"]

NAMESPACE_SEPARATOR = "."

_MISSING = object()


def normalize(identifier: Identifier) -> str:
    """Canonicalise an identifier so equivalent spellings share one key.

    A class is keyed by its module and qualified name. A string loses a single
    leading namespace separator. Either way the result is lower-cased.

    Example:
        >>> normalize(".app.db.Database")  # Returns "app.db.database"
        >>> normalize(Database)            # Returns "app.db.database"
    """
    if inspect.isclass(identifier):
        identifier = display_name(identifier)
    elif identifier.startswith(NAMESPACE_SEPARATOR):
        identifier = identifier[1:]
    return identifier.lower()


def display_name(identifier: Identifier) -> str:
    if inspect.isclass(identifier):
        return f"{identifier.__module__}.{identifier.__qualname__}"
    return identifier


def locate(path: str) -> Optional[Any]:
    """Import the object named by a dotted path.

    The longest importable module prefix is imported and the remaining parts
    are looked up as attributes on it.

    Returns:
        The located object, or None if nothing is found at that path. Paths
        that are still relative once one leading separator is stripped, or
        that contain empty parts, never name anything.
    """
    if path.startswith(NAMESPACE_SEPARATOR):
        path = path[1:]
    parts = path.split(NAMESPACE_SEPARATOR)
    if not all(parts):
        return None

    for index in range(len(parts), 0, -1):
        try:
            target = importlib.import_module(NAMESPACE_SEPARATOR.join(parts[:index]))
        except (ImportError, ValueError):
            continue

        for attribute in parts[index:]:
            target = getattr(target, attribute, _MISSING)
            if target is _MISSING:
                return None
        return target

    return None


def locate_type(path: str) -> Optional[type]:
    target = locate(path)
    return target if inspect.isclass(target) else None
