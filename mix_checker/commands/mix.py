"""Blend each recipe into a single colour.

Every entry's channels are weighted by its proportion; proportions must
add up to 100 (±0.001) or the command fails. The result is reported with
fractional channels, a display hex, and the nearest named colour within
RGB distance 30.

Example:
    mix-tool mix '#ff0000@50, #0000ff@50'
    mix-tool mix recipes.mix --json
"""

from mix_checker.commands._common import colour_data
from mix_checker.core.mixing import mix_colors
from mix_checker.core.types import Command, Recipe, Report

command = Command(
    name='mix',
    help='Blend each recipe by its proportions and print the resulting colour.',
)


@command.run
def run(recipes: list[Recipe], targets: list[Recipe], report: Report, args) -> None:
    for recipe in recipes:
        mixed = mix_colors(recipe.mixes)
        report.add(recipe.name, {'entries': len(recipe.mixes), 'mixed': colour_data(mixed)})
