"""mix-tool — Blend colour recipes and score how close two recipes are.

Usage: mix-tool <command> <recipe> [options]

A recipe is an inline string ('#ff0000@50, #0000ff@50'), a .mix text file
with one `name: colour@proportion, ...` line per recipe, or a JSON file.

Commands are auto-discovered from mix_checker/commands/.
Each command module's docstring is its documentation.
Run `mix-tool help <command>` for full docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, mix-tool looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import sys

from mix_checker import registry
from mix_checker.core.env import default_fail_below, default_out_dir, load_env
from mix_checker.core.recipe_parser import load_recipes
from mix_checker.core.report import format_json, format_text
from mix_checker.core.types import Report


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'mix_checker.commands.{name}')


def _short_doc(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        "  mix-tool mix '#ff0000@50, #0000ff@50'\n"
        '  mix-tool mix recipes.mix --json\n'
        '  mix-tool compare mine.mix --target reference.mix\n'
        '  mix-tool compare mine.json --target reference.json --fail-below 80\n'
        "  mix-tool equal '#ff0000@50, #0000ff@50' --target 'rgb(127.5, 0, 127.5)@100'\n"
        '  mix-tool swatch recipes.mix --out-dir ./tmp\n'
        '  mix-tool help compare\n'
        '\n'
        'Env vars (set in .env or environment):\n'
        '  MIX_TOOL_FAIL_BELOW  default for --fail-below\n'
        '  MIX_TOOL_OUT_DIR     default for --out-dir\n'
    )
    parser = argparse.ArgumentParser(
        prog='mix-tool',
        description='Blend colour recipes and score how close two recipes are.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_doc(name, cmd.help))
        p.add_argument('recipe', help='Recipe file (.mix/.json) or inline recipe string')
        p.add_argument('-t', '--target', required=cmd.needs_target, help='Target recipe file or inline string')
        p.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
        p.add_argument('-o', '--out-dir', default=None, help='Directory for swatch images')
        p.add_argument(
            '-f',
            '--fail-below',
            type=float,
            default=None,
            metavar='N',
            help='Exit 1 if any comparison score is below N (CI gating)',
        )

    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_doc(name, cmd.help)}')
        print('\nRun: mix-tool help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_command_module(topic).__doc__ or '').strip()
    print(doc or f'(No module docs for {topic!r})')


def run(args: argparse.Namespace) -> Report:
    """Load recipes, execute the chosen command and return its report."""
    threshold = args.fail_below if args.fail_below is not None else default_fail_below()
    if args.out_dir is None:
        args.out_dir = default_out_dir()

    recipes = load_recipes(args.recipe)
    targets = load_recipes(args.target) if args.target else []

    report = Report(
        command=args.command,
        recipe_path=args.recipe,
        target_path=args.target,
        threshold=threshold,
    )
    registry.get(args.command).execute(recipes, targets, report, args)
    return report


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else; OS env vars always win
    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'mix-tool: loaded {env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(args.topic)
        return

    try:
        report = run(args)
    # ValueError covers InvalidProportionSum, RecipeParseError and malformed env values;
    # OSError covers an unusable --out-dir or a swatch that cannot be written
    except (ValueError, OSError) as e:
        print(f'mix-tool: error: {e}', file=sys.stderr)
        sys.exit(2)

    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))

    # CI gate runs after output so the report is visible on failure
    if report.fail_count:
        print(
            f'\nFAIL: {report.fail_count} recipe(s) scored below {report.threshold:g} or had no target',
            file=sys.stderr,
        )
        sys.exit(1)


if __name__ == '__main__':
    main()
