"""Regex-based parser for recipe strings, .mix files and JSON recipe files.

Text format, one recipe per line (the `name:` prefix is optional):

    # comment
    sunset: #ff0000@50, #0000ff@50
    olive: olive@70, rgb(255, 255, 255)@30

JSON format is either a list of {"color": {"red", "green", "blue"}, "proportion"}
objects, or an object mapping recipe names to such lists.

Proportions are NOT validated here; the sum check belongs to mix_colors.
"""

import json
import os
import re
from typing import Any

from mix_checker.core.palette import hex_to_rgb, is_hex, resolve_name
from mix_checker.core.types import Color, ColorMix, Recipe, RecipeParseError

DEFAULT_NAME = 'default'

_NUMBER = r'[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?'
_RGB_RE = re.compile(rf'^rgb\(\s*({_NUMBER})\s*,\s*({_NUMBER})\s*,\s*({_NUMBER})\s*\)$', re.IGNORECASE)
_ENTRY_RE = re.compile(rf'^(.+?)\s*@\s*({_NUMBER})\s*%?$')
_NAME_RE = re.compile(r'^\s*([A-Za-z_][\w\-. ]*?)\s*:\s*(.*)$')
# Split on commas that are not inside rgb(...)
_SPLIT_RE = re.compile(r',(?![^(]*\))')


def looks_like_path(value: str) -> bool:
    return value.endswith(('.mix', '.json')) or os.path.isfile(value)


def load_recipes(value: str) -> list[Recipe]:
    """Load recipes from a file path or an inline recipe string."""
    if looks_like_path(value):
        return parse_recipe_file(value)
    return parse_recipe_string(value)


def parse_recipe_file(path: str) -> list[Recipe]:
    """Parse a .mix or .json recipe file from disk."""
    try:
        with open(path, encoding='utf-8') as f:
            text = f.read()
    except OSError as e:
        raise RecipeParseError(f'cannot read recipe file {path}: {e.strerror}') from e
    if path.endswith('.json'):
        recipes = parse_recipe_json(text)
    else:
        recipes = parse_recipe_string(text)
    for recipe in recipes:
        recipe.source = path
    return recipes


def parse_recipe_string(text: str) -> list[Recipe]:
    """Parse recipes in the line format. Blank and comment lines are skipped."""
    recipes: list[Recipe] = []
    seen: set[str] = set()
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or (line.startswith('#') and not _looks_like_entry(line)):
            continue
        name, body = _split_name(line)
        if name in seen:
            raise RecipeParseError(f'line {lineno}: duplicate recipe name {name!r}')
        seen.add(name)
        mixes = [_parse_entry(part.strip(), lineno) for part in _SPLIT_RE.split(body) if part.strip()]
        if not mixes:
            raise RecipeParseError(f'line {lineno}: recipe {name!r} has no entries')
        recipes.append(Recipe(name=name, mixes=mixes))
    if not recipes:
        raise RecipeParseError('no recipes found')
    return recipes


def _looks_like_entry(line: str) -> bool:
    """A line starting with '#' is an entry ('#ff0000@50') rather than a comment."""
    first = _SPLIT_RE.split(line, maxsplit=1)[0].strip()
    m = _ENTRY_RE.match(first)
    return m is not None and is_hex(m.group(1))


def _split_name(line: str) -> tuple[str, str]:
    m = _NAME_RE.match(line)
    if m:
        return m.group(1).strip(), m.group(2)
    return DEFAULT_NAME, line


def _parse_entry(text: str, lineno: int) -> ColorMix:
    m = _ENTRY_RE.match(text)
    if not m:
        raise RecipeParseError(f'line {lineno}: expected colour@proportion, got {text!r}')
    return ColorMix(color=parse_colour(m.group(1), lineno), proportion=float(m.group(2)))


def parse_colour(text: str, lineno: int | None = None) -> Color:
    """Parse '#rrggbb', '#rgb', 'rgb(r, g, b)' or a palette name."""
    where = f'line {lineno}: ' if lineno is not None else ''
    value = text.strip()
    m = _RGB_RE.match(value)
    if m:
        return Color(red=float(m.group(1)), green=float(m.group(2)), blue=float(m.group(3)))
    if value.startswith('#'):
        if not is_hex(value):
            raise RecipeParseError(f'{where}invalid hex colour {value!r}')
        r, g, b = hex_to_rgb(value)
        return Color(red=r, green=g, blue=b)
    hex_val = resolve_name(value)
    if hex_val is None:
        raise RecipeParseError(f'{where}unknown colour {value!r}')
    r, g, b = hex_to_rgb(hex_val)
    return Color(red=r, green=g, blue=b)


def parse_recipe_json(text: str) -> list[Recipe]:
    """Parse a JSON recipe document."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RecipeParseError(f'invalid JSON: {e}') from e
    if isinstance(data, list):
        return [Recipe(name=DEFAULT_NAME, mixes=_mixes_from_json(data, DEFAULT_NAME))]
    if isinstance(data, dict) and data:
        return [Recipe(name=str(name), mixes=_mixes_from_json(entries, str(name))) for name, entries in data.items()]
    raise RecipeParseError('JSON recipe must be a list of mixes or an object of named lists')


def _mixes_from_json(entries: Any, name: str) -> list[ColorMix]:
    if not isinstance(entries, list) or not entries:
        raise RecipeParseError(f'recipe {name!r}: expected a non-empty list of mixes')
    mixes = []
    for i, entry in enumerate(entries):
        try:
            color = entry['color']
            mixes.append(
                ColorMix(
                    color=Color(red=_number(color['red']), green=_number(color['green']), blue=_number(color['blue'])),
                    proportion=_number(entry['proportion']),
                )
            )
        except (KeyError, TypeError) as e:
            raise RecipeParseError(f'recipe {name!r} entry {i}: missing or invalid field {e}') from e
    return mixes


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(repr(value))
    return value
