"""Shared types for mix-tool: Color, ColorMix, Recipe, Comparison, Command, Report."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


class InvalidProportionSum(ValueError):
    """Recipe proportions do not add up to 100%."""

    def __init__(self, total: float):
        super().__init__(f'Color proportions must sum up to 100% (got {total:g}%)')
        self.total = total


class RecipeParseError(ValueError):
    """A recipe string or file could not be parsed."""


@dataclass(frozen=True)
class Color:
    """An RGB colour. Channels are conventionally 0-255 but never clamped."""

    red: float
    green: float
    blue: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.red, self.green, self.blue)

    def to_hex(self) -> str:
        """Hex form of the colour, rounded and clamped for display."""
        r, g, b = (max(0, min(255, int(round(c)))) for c in self.as_tuple())
        return f'#{r:02x}{g:02x}{b:02x}'


@dataclass(frozen=True)
class ColorMix:
    """A colour and its percentage share in a blend."""

    color: Color
    proportion: float


@dataclass
class Recipe:
    """A named, ordered list of ColorMix entries read from a recipe source."""

    name: str
    mixes: list[ColorMix] = field(default_factory=list)
    source: str | None = None  # file path, or None for inline recipes


@dataclass
class Match:
    """One greedy pairing between a source entry and a target entry."""

    source_index: int
    target_index: int
    score: float  # 0-100


@dataclass
class Comparison:
    """Score breakdown for one recipe compared against a target recipe."""

    score: int
    exact_match: bool = False
    color_similarity: float | None = None  # 0-100, None on the exact-match path
    proportion_match: float | None = None  # 0-100, None on the exact-match path
    mixed: Color | None = None
    target_mixed: Color | None = None
    matches: list[Match] = field(default_factory=list)


class Command:
    """A self-registering mix-tool command.

    Usage in a command module:

        command = Command(name='mix', help='Blend each recipe')

        @command.run
        def run(recipes, targets, report, args):
            ...
    """

    def __init__(self, name: str, help: str = '', needs_target: bool = False):
        self.name = name
        self.help = help
        self.needs_target = needs_target
        self._run_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, recipes: list[Recipe], targets: list[Recipe], report: Report, args: Any) -> None:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(recipes, targets, report, args)


@dataclass
class Report:
    """Accumulates per-recipe results from a command for text/JSON output."""

    command: str = ''
    recipe_path: str = ''
    target_path: str | None = None
    threshold: float | None = None
    recipes: dict[str, dict[str, Any]] = field(default_factory=dict)
    pass_count: int = 0
    fail_count: int = 0

    def add(self, recipe_name: str, data: dict[str, Any]) -> None:
        """Merge command results for a recipe."""
        self.recipes.setdefault(recipe_name, {}).update(data)

    def record_pass(self, recipe_name: str) -> None:
        self.pass_count += 1
        self.add(recipe_name, {'pass': True})

    def record_fail(self, recipe_name: str) -> None:
        self.fail_count += 1
        self.add(recipe_name, {'pass': False})
