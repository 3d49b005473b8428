"""Check whether each recipe blends to exactly the target's colour.

Requires --target. Both recipes are blended and compared channel by
channel with no tolerance, so 127.5 and 127.4999 are different colours.
Two different recipes can still be equal if they blend to the same colour.

Example:
    mix-tool equal '#ff0000@50, #0000ff@50' --target 'rgb(127.5, 0, 127.5)@100'
"""

from mix_checker.commands._common import colour_data, find_target
from mix_checker.core.mixing import check_color_is_equal, mix_colors
from mix_checker.core.types import Command, Recipe, Report

command = Command(
    name='equal',
    help='Exact equality of each blended recipe against its --target blend.',
    needs_target=True,
)


@command.run
def run(recipes: list[Recipe], targets: list[Recipe], report: Report, args) -> None:
    for recipe in recipes:
        target = find_target(recipe, targets)
        if target is None:
            report.add(recipe.name, {'error': f'no target recipe named {recipe.name!r}'})
            continue

        mixed = mix_colors(recipe.mixes)
        target_mixed = mix_colors(target.mixes)
        report.add(
            recipe.name,
            {
                'target_name': target.name,
                'mixed': colour_data(mixed),
                'target_mixed': colour_data(target_mixed),
                'equal': check_color_is_equal(mixed, target_mixed),
            },
        )
