"""Score each recipe against a target recipe (0-100, 100 = identical).

Requires --target. Recipes are paired with the target recipe of the same
name; a target file holding a single recipe is used for every recipe.

Score = blended colour similarity * 0.6 + entry match * 0.4, where entry
match pairs each recipe entry, in order, with its best unused target entry
(colour 70%, proportion 30%). Recipes identical entry for entry score 100
without blending.

The score is not symmetric: `compare A --target B` can differ from
`compare B --target A`.

With --fail-below N (or MIX_TOOL_FAIL_BELOW), each score is marked pass/fail
and mix-tool exits 1 if any score is below N. A recipe with no target to
compare against counts as a failure.

Example:
    mix-tool compare mine.mix --target reference.mix
    mix-tool compare '#ff0000@100' --target '#00ff00@100' --fail-below 80
"""

from mix_checker.commands._common import colour_data, find_target
from mix_checker.core.mixing import compare_recipes
from mix_checker.core.types import Command, Recipe, Report

command = Command(
    name='compare',
    help='Score recipes against --target recipes (0-100). Use --fail-below for CI gating.',
    needs_target=True,
)


@command.run
def run(recipes: list[Recipe], targets: list[Recipe], report: Report, args) -> None:
    for recipe in recipes:
        target = find_target(recipe, targets)
        if target is None:
            report.add(recipe.name, {'error': f'no target recipe named {recipe.name!r}'})
            # Nothing was compared, which must not pass the gate
            if report.threshold is not None:
                report.record_fail(recipe.name)
            continue

        result = compare_recipes(recipe.mixes, target.mixes)
        data = {
            'target_name': target.name,
            'score': result.score,
            'exact_match': result.exact_match,
            'color_similarity': result.color_similarity,
            'proportion_match': result.proportion_match,
            'matches': [
                {'entry': m.source_index, 'target_entry': m.target_index, 'score': round(m.score, 2)}
                for m in result.matches
            ],
        }
        if result.mixed is not None:
            data['mixed'] = colour_data(result.mixed)
        if result.target_mixed is not None:
            data['target_mixed'] = colour_data(result.target_mixed)
        report.add(recipe.name, data)

        if report.threshold is not None:
            if result.score >= report.threshold:
                report.record_pass(recipe.name)
            else:
                report.record_fail(recipe.name)
