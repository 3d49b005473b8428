"""mix_checker — colour recipe blending and comparison."""

from mix_checker.core.mixing import check_color_is_equal, compare_recipes, mix_colors, mix_colors_and_compare
from mix_checker.core.types import Color, ColorMix, Comparison, InvalidProportionSum, Recipe

__all__ = [
    'Color',
    'ColorMix',
    'Comparison',
    'InvalidProportionSum',
    'Recipe',
    'check_color_is_equal',
    'compare_recipes',
    'mix_colors',
    'mix_colors_and_compare',
]
