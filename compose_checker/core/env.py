"""Configuration from the environment and .env files.

Precedence (first wins):
  1. Command-line flags (applied by the caller on top of what is returned here).
  2. Existing OS environment variables, never overwritten.
  3. The .env file given by --env-file, or else the nearest .env found by
     walking up from the working directory. The walk stops at the first
     directory holding .git, so a .env outside the repository is never read.

Recognised keys:
  COMPOSE_IDENTITY_STRIDE         stride for the alpha=0 / alpha=255 sweeps
  COMPOSE_CLOSURE_STRIDE          background stride for range closure
  COMPOSE_MONOTONIC_FG_STRIDE     foreground stride for the monotonic sweep
  COMPOSE_MONOTONIC_ALPHA_STRIDE  alpha stride for the monotonic sweep
  COMPOSE_MAX_REPORTED            detail lines per failing property
  COMPOSE_EXHAUSTIVE              1/true/yes/on: every stride becomes 1
  MAKEPNG                         makepng executable used by compose-fixtures
"""

import os
from collections.abc import Mapping
from pathlib import Path

from compose_checker.core.types import Sampling

_STRIDE_KEYS = {
    'identity_stride': 'COMPOSE_IDENTITY_STRIDE',
    'closure_bg_stride': 'COMPOSE_CLOSURE_STRIDE',
    'monotonic_fg_stride': 'COMPOSE_MONOTONIC_FG_STRIDE',
    'monotonic_alpha_stride': 'COMPOSE_MONOTONIC_ALPHA_STRIDE',
    'max_reported': 'COMPOSE_MAX_REPORTED',
}

_TRUE = {'1', 'true', 'yes', 'on'}

DEFAULT_MAKEPNG = './makepng'


def find_dotenv(start: Path) -> Path | None:
    """Nearest .env at or above start, not looking past a .git boundary."""
    for directory in (start.resolve(), *start.resolve().parents):
        candidate = directory / '.env'
        if candidate.is_file():
            return candidate
        # .git is a directory in a clone and a file in a worktree
        if (directory / '.git').exists():
            break
    return None


def read_dotenv(path: Path) -> dict[str, str]:
    """KEY=value lines into a dict; quotes around the value are dropped."""
    values: dict[str, str] = {}
    for raw in path.read_text(encoding='utf-8').splitlines():
        line = raw.strip()
        if line.startswith('#') or '=' not in line:
            continue
        key, _, value = line.partition('=')
        key = key.strip()
        if key:
            values[key] = value.strip().strip('"').strip("'")
    return values


def _dotenv_path(env_file: str | None) -> Path | None:
    if not env_file:
        return find_dotenv(Path.cwd())
    explicit = Path(env_file)
    return explicit if explicit.is_file() else None


def load_env(env_file: str | None = None) -> Path | None:
    """Copy .env values into os.environ for keys not already set.

    Returns the file that was read, or None when there was none.
    """
    path = _dotenv_path(env_file)
    if path is not None:
        for key, value in read_dotenv(path).items():
            os.environ.setdefault(key, value)
    return path


def parse_int(label: str, raw: str | None) -> int | None:
    """int(raw), or None when raw is missing or blank. ValueError names `label`."""
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'{label} must be an integer, got {raw!r}') from None


def sampling_from_env(env: Mapping[str, str] | None = None) -> Sampling:
    """Build the sampling policy from COMPOSE_* variables (defaults where unset)."""
    env = os.environ if env is None else env
    overrides = {field: parse_int(key, env.get(key)) for field, key in _STRIDE_KEYS.items()}

    if env.get('COMPOSE_EXHAUSTIVE', '').strip().lower() in _TRUE:
        base = Sampling.exhaustive()
        # explicit strides still win over the exhaustive switch
        return base.with_overrides(**overrides)
    return Sampling().with_overrides(**overrides)


def makepng_path(env: Mapping[str, str] | None = None) -> str:
    env = os.environ if env is None else env
    return env.get('MAKEPNG') or DEFAULT_MAKEPNG
