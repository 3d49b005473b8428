"""Render a PNG swatch per recipe.

Top band: one block per entry, width proportional to its share.
Middle band: the blended colour. If --target is given, a bottom band shows
the target's blend for side-by-side comparison.

Channels are rounded and clamped to 0-255 for display only.
Saves to <out_dir>/<recipe_name>_swatch.png (--out-dir, MIX_TOOL_OUT_DIR,
or ./swatches).

Example:
    mix-tool swatch recipes.mix --out-dir ./tmp
    mix-tool swatch mine.mix --target reference.mix
"""

import os
import re

from PIL import Image, ImageDraw

from mix_checker.commands._common import colour_data, find_target
from mix_checker.core.mixing import mix_colors
from mix_checker.core.types import Color, Command, Recipe, Report

command = Command(
    name='swatch',
    help='Render each recipe (entries + blend, and --target blend) to a PNG.',
)

WIDTH = 400
BAND_HEIGHT = 80


def _fill(color: Color) -> tuple[int, int, int]:
    r, g, b = (max(0, min(255, int(round(c)))) for c in color.as_tuple())
    return (r, g, b)


def _safe_name(name: str) -> str:
    return re.sub(r'[^\w\-.]+', '_', name)


def render_swatch(recipe: Recipe, mixed: Color, target_mixed: Color | None = None) -> Image.Image:
    """Draw the entry band, the blend band and the optional target band."""
    bands = 2 if target_mixed is None else 3
    img = Image.new('RGB', (WIDTH, BAND_HEIGHT * bands), (255, 255, 255))
    draw = ImageDraw.Draw(img)

    x = 0.0
    for mix in recipe.mixes:
        # Negative shares have no width to draw
        share = max(mix.proportion, 0.0) / 100 * WIDTH
        x0, x1 = int(round(x)), int(round(x + share))
        if x1 > x0:
            draw.rectangle([x0, 0, x1 - 1, BAND_HEIGHT - 1], fill=_fill(mix.color))
        x += share

    draw.rectangle([0, BAND_HEIGHT, WIDTH - 1, 2 * BAND_HEIGHT - 1], fill=_fill(mixed))
    if target_mixed is not None:
        draw.rectangle([0, 2 * BAND_HEIGHT, WIDTH - 1, 3 * BAND_HEIGHT - 1], fill=_fill(target_mixed))
    return img


@command.run
def run(recipes: list[Recipe], targets: list[Recipe], report: Report, args) -> None:
    os.makedirs(args.out_dir, exist_ok=True)

    for recipe in recipes:
        mixed = mix_colors(recipe.mixes)
        target_mixed = None
        data = {'mixed': colour_data(mixed)}
        if targets:
            target = find_target(recipe, targets)
            if target is not None:
                target_mixed = mix_colors(target.mixes)
                data['target_mixed'] = colour_data(target_mixed)

        path = os.path.join(args.out_dir, f'{_safe_name(recipe.name)}_swatch.png')
        render_swatch(recipe, mixed, target_mixed).save(path)
        data['swatch'] = path
        report.add(recipe.name, data)
