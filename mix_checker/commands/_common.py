"""Helpers shared by command modules."""

from typing import Any

from mix_checker.core.palette import nearest_colour
from mix_checker.core.types import Color, Recipe

NEAREST_THRESHOLD = 30


def colour_data(color: Color) -> dict[str, Any]:
    """Report entry for a blended colour."""
    name, _dist = nearest_colour(color.as_tuple(), threshold=NEAREST_THRESHOLD)
    return {
        'hex': color.to_hex(),
        'rgb': [color.red, color.green, color.blue],
        'nearest': name,
    }


def find_target(recipe: Recipe, targets: list[Recipe]) -> Recipe | None:
    """Target recipe with the same name, or the only target if there is just one."""
    for target in targets:
        if target.name == recipe.name:
            return target
    if len(targets) == 1:
        return targets[0]
    return None
