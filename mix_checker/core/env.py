"""Configuration for mix-tool from the environment and .env files.

Lookup order (first wins):
  1. Variables already in os.environ are never overwritten.
  2. The file passed with --env-file.
  3. The nearest .env walking up from cwd, stopping at a .git boundary.

Recognised variables:
  MIX_TOOL_FAIL_BELOW  default for --fail-below (score 0-100)
  MIX_TOOL_OUT_DIR     default for --out-dir (swatch output)
"""

import os
import re
from pathlib import Path

FAIL_BELOW_VAR = 'MIX_TOOL_FAIL_BELOW'
OUT_DIR_VAR = 'MIX_TOOL_OUT_DIR'
DEFAULT_OUT_DIR = 'swatches'

# KEY=value, optionally prefixed with `export` as in shell-sourced .env files
_ASSIGNMENT_RE = re.compile(r'^(?:export\s+)?([A-Za-z_]\w*)\s*=\s*(.*)$')
_TRAILING_COMMENT_RE = re.compile(r'\s+#.*$')


def _find_dotenv(start: Path) -> Path | None:
    """Nearest .env in start or one of its parents, never looking past a .git."""
    start = start.resolve()
    for directory in (start, *start.parents):
        if (directory / '.env').is_file():
            return directory / '.env'
        # .git is a dir in a clone and a file in a worktree
        if (directory / '.git').exists():
            break
    return None


def _unquote(value: str) -> str:
    """Drop matching surrounding quotes, or a trailing ` # comment` on a bare value."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in '"\'':
        return value[1:-1]
    return _TRAILING_COMMENT_RE.sub('', value)


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Map each assignment line of a .env file to its value; later lines win."""
    lines = (line.strip() for line in path.read_text(encoding='utf-8').splitlines())
    matches = (_ASSIGNMENT_RE.match(line) for line in lines if line and not line.startswith('#'))
    return {m.group(1): _unquote(m.group(2).strip()) for m in matches if m}


def load_env(env_file: str | None = None) -> Path | None:
    """Copy .env values into os.environ for keys that are not set yet.

    Returns the file that was read, or None.
    """
    path = Path(env_file) if env_file else _find_dotenv(Path.cwd())
    if path is None or not path.is_file():
        return None

    missing = {key: value for key, value in _parse_dotenv(path).items() if key not in os.environ}
    os.environ.update(missing)
    return path


def env_float(name: str) -> float | None:
    """Read a numeric variable. Raises ValueError naming the variable if malformed."""
    raw = os.environ.get(name, '').strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f'{name} must be a number, got {raw!r}') from None


def default_fail_below() -> float | None:
    return env_float(FAIL_BELOW_VAR)


def default_out_dir() -> str:
    return os.environ.get(OUT_DIR_VAR, '').strip() or DEFAULT_OUT_DIR
