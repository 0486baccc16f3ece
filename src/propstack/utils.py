"""Various utilities."""

import importlib
from collections.abc import Iterable
from typing import Any

import Levenshtein


def import_item(name: str) -> Any:
    """Import item. Expected to import an item inside a module."""
    parts = name.rsplit(".", 1)
    if len(parts) != 2:
        raise ImportError("Can only import objects inside module")
    module_name, obj_name = parts
    module = importlib.import_module(module_name)
    try:
        obj = getattr(module, obj_name)
    except AttributeError as e:
        raise ImportError(f"No object named {obj_name} in module {module_name}") from e
    return obj


def did_you_mean(
    suggestions: Iterable[str], wrong_key: str, max_distance: int | None = None
) -> str | None:
    """Return element of `suggestions` closest to `wrong_key`.

    If `max_distance` is given, suggestions further away than this are discarded.
    """
    min_distance = 9999
    closest_key = None
    for suggestion in suggestions:
        distance = Levenshtein.distance(suggestion, wrong_key)
        if distance < min_distance:
            min_distance = distance
            closest_key = suggestion

    if max_distance is not None and min_distance > max_distance:
        return None
    return closest_key
