"""Colour blending and recipe comparison.

A recipe is an ordered sequence of ColorMix entries whose proportions add up
to 100. `mix_colors` blends a recipe into one colour; `mix_colors_and_compare`
scores how close two recipes are on a 0-100 scale:

  score = colour similarity * 0.6 + proportion match * 0.4

Colour similarity is the inverse Euclidean distance between the two blended
colours. Proportion match pairs entries greedily: each source entry, in
order, takes the best still-unused target entry.

Inputs are not range-checked. Negative proportions, channels outside 0-255
and recipes of different lengths all produce a best-effort score.
"""

import math
from collections.abc import Sequence

from mix_checker.core.palette import MAX_RGB_DISTANCE, rgb_distance
from mix_checker.core.types import Color, ColorMix, Comparison, InvalidProportionSum, Match

PROPORTION_TOLERANCE = 0.001
# Float noise allowed on top of the tolerance, so 99.999 and 100.001 pass.
_TOLERANCE_SLACK = 1e-9

COLOR_WEIGHT = 0.6
PROPORTION_WEIGHT = 0.4
ENTRY_COLOR_WEIGHT = 0.7
ENTRY_PROPORTION_WEIGHT = 0.3

_MAX_CHANNEL_DIFF = 255 * 3


def mix_colors(color_mixes: Sequence[ColorMix]) -> Color:
    """Blend colours by their proportions.

    Raises InvalidProportionSum if the proportions do not sum to 100.
    """
    total = 0.0
    for mix in color_mixes:
        total += mix.proportion
    if abs(total - 100) - PROPORTION_TOLERANCE > _TOLERANCE_SLACK:
        raise InvalidProportionSum(total)

    red = green = blue = 0.0
    for mix in color_mixes:
        red += (mix.color.red * mix.proportion) / 100
        green += (mix.color.green * mix.proportion) / 100
        blue += (mix.color.blue * mix.proportion) / 100
    return Color(red=red, green=green, blue=blue)


def check_color_is_equal(a: Color, b: Color) -> bool:
    """True only when every channel matches exactly."""
    return a.red == b.red and a.green == b.green and a.blue == b.blue


def _is_exact_match(color_mixes: Sequence[ColorMix], target_color_mixes: Sequence[ColorMix]) -> bool:
    if len(color_mixes) != len(target_color_mixes):
        return False
    for mix, target in zip(color_mixes, target_color_mixes):
        if abs(mix.proportion - target.proportion) >= PROPORTION_TOLERANCE:
            return False
        if not check_color_is_equal(mix.color, target.color):
            return False
    return True


def _entry_score(mix: ColorMix, target: ColorMix) -> float:
    """Score one source/target entry pair on a 0-100 scale."""
    channel_diff = (
        abs(mix.color.red - target.color.red)
        + abs(mix.color.green - target.color.green)
        + abs(mix.color.blue - target.color.blue)
    )
    color_score = 1 - channel_diff / _MAX_CHANNEL_DIFF
    proportion_score = 1 - abs(mix.proportion - target.proportion) / 100
    return (color_score * ENTRY_COLOR_WEIGHT + proportion_score * ENTRY_PROPORTION_WEIGHT) * 100


def _greedy_matches(color_mixes: Sequence[ColorMix], target_color_mixes: Sequence[ColorMix]) -> list[Match]:
    """Pair each source entry with its best unused target entry, in source order.

    Ties keep the first target seen. A pair must score above 0 to be taken.
    """
    used: set[int] = set()
    matches = []
    for i, mix in enumerate(color_mixes):
        best_index = -1
        best_score = 0.0
        for j, target in enumerate(target_color_mixes):
            if j in used:
                continue
            score = _entry_score(mix, target)
            if score > best_score:
                best_index, best_score = j, score
        if best_index != -1:
            used.add(best_index)
            matches.append(Match(source_index=i, target_index=best_index, score=best_score))
    return matches


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compare_recipes(color_mixes: Sequence[ColorMix], target_color_mixes: Sequence[ColorMix]) -> Comparison:
    """Compare two recipes and return the full score breakdown.

    Raises InvalidProportionSum if either recipe does not sum to 100, unless
    the two recipes are identical entry for entry.
    """
    if _is_exact_match(color_mixes, target_color_mixes):
        return Comparison(score=100, exact_match=True)

    mixed = mix_colors(color_mixes)
    target_mixed = mix_colors(target_color_mixes)

    distance = rgb_distance(mixed.as_tuple(), target_mixed.as_tuple())
    color_similarity = max(0.0, 100 * (1 - distance / MAX_RGB_DISTANCE))

    matches = _greedy_matches(color_mixes, target_color_mixes)
    matched_total = 0.0
    for match in matches:
        matched_total += match.score
    # Unmatched source entries still count towards the divisor.
    proportion_match = matched_total / len(color_mixes)

    score = _round_half_up(color_similarity * COLOR_WEIGHT + proportion_match * PROPORTION_WEIGHT)
    return Comparison(
        score=score,
        color_similarity=color_similarity,
        proportion_match=proportion_match,
        mixed=mixed,
        target_mixed=target_mixed,
        matches=matches,
    )


def mix_colors_and_compare(color_mixes: Sequence[ColorMix], target_color_mixes: Sequence[ColorMix]) -> int:
    """Similarity of two recipes as an integer percentage (100 = identical)."""
    return compare_recipes(color_mixes, target_color_mixes).score
