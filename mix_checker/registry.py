"""Command auto-discovery and registration.

Every public module in mix_checker/commands/ that defines a `command`
object of type Command becomes a mix-tool subcommand. Modules whose name
starts with an underscore hold shared helpers and are skipped.
"""

import importlib
import pkgutil
from collections.abc import Iterator
from functools import cache
from types import ModuleType

from mix_checker.core.types import Command


def _command_modules() -> Iterator[ModuleType]:
    import mix_checker.commands as pkg

    for info in pkgutil.iter_modules(pkg.__path__, prefix=f'{pkg.__name__}.'):
        if not info.name.rpartition('.')[2].startswith('_'):
            yield importlib.import_module(info.name)


@cache
def discover() -> dict[str, Command]:
    """Import the command modules once and map command name to Command."""
    found = (getattr(module, 'command', None) for module in _command_modules())
    return {cmd.name: cmd for cmd in found if isinstance(cmd, Command)}


def get(name: str) -> Command:
    """Look up a command by name; KeyError lists the available ones."""
    commands = discover()
    try:
        return commands[name]
    except KeyError:
        raise KeyError(f'Unknown command: {name}. Available: {", ".join(sorted(commands))}') from None


def all_commands() -> dict[str, Command]:
    """Return all registered commands."""
    return discover()
