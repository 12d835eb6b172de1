"""compose-fixtures: generate the PNG test fixtures with makepng.

Usage: uv run compose-fixtures --all|--coverage [--out DIR] [--makepng PATH] [--dry-run] [--check]

Each fixture is one makepng invocation for a (gamma tag, colour type, bit
depth) triple, written as <gamma>-<colour>-<depth>.png. The 'none' gamma tag
passes no gamma flag and drops the prefix, e.g. palette-8.png.

  --all       every gamma tag x every colour type/bit depth makepng accepts
  --coverage  the smallest set that still reaches the decode paths the
              existing pngsuite files do not (palette+tRNS with gamma among them)

makepng is taken from --makepng, then MAKEPNG (environment or .env), then
./makepng. --check opens every generated file with Pillow and fails if it is
not a PNG.
"""

import argparse
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from compose_checker.core.env import load_env, makepng_path

GAMMA_TAGS = ('none', 'sRGB', 'linear', '1.8')

# colour types that only take the low bit depths, plus palette at 8
_LOW_DEPTH_TYPES = ('gray', 'palette')
_LOW_DEPTHS = (1, 2, 4)
_HIGH_DEPTH_TYPES = ('gray', 'gray-alpha', 'rgb', 'rgb-alpha')
_HIGH_DEPTHS = (8, 16)

# (gamma, colour, depth); entries marked required add coverage no other entry does
COVERAGE_SET: tuple[tuple[str, str, int], ...] = (
    ('none', 'gray', 16),
    ('none', 'gray-alpha', 16),
    ('none', 'gray-alpha', 8),  # required
    ('none', 'palette', 8),
    ('none', 'rgb-alpha', 8),
    ('1.8', 'gray', 2),
    ('1.8', 'palette', 2),  # required
    ('1.8', 'palette', 4),  # required
    ('1.8', 'palette', 8),
    ('linear', 'palette', 8),
    ('linear', 'rgb-alpha', 16),
    ('sRGB', 'gray-alpha', 8),
    ('sRGB', 'palette', 1),  # required
    ('sRGB', 'palette', 8),
    ('sRGB', 'rgb-alpha', 16),  # required, composite path for 16-bit sRGB
    ('sRGB', 'rgb-alpha', 8),
)


@dataclass(frozen=True)
class Fixture:
    gamma: str
    colour: str
    depth: int

    def __post_init__(self) -> None:
        if self.gamma not in GAMMA_TAGS:
            raise ValueError(f'unknown gamma tag {self.gamma!r}, expected one of {", ".join(GAMMA_TAGS)}')

    @property
    def filename(self) -> str:
        prefix = '' if self.gamma == 'none' else f'{self.gamma}-'
        return f'{prefix}{self.colour}-{self.depth}.png'

    def command(self, makepng: str) -> list[str]:
        cmd = [makepng]
        if self.gamma != 'none':
            cmd.append(f'--{self.gamma}')
        cmd.extend([self.colour, str(self.depth), self.filename])
        return cmd


def all_fixtures() -> list[Fixture]:
    """Full cross product, grouped by gamma tag."""
    plan = []
    for gamma in GAMMA_TAGS:
        for colour in _LOW_DEPTH_TYPES:
            for depth in _LOW_DEPTHS:
                plan.append(Fixture(gamma, colour, depth))
        plan.append(Fixture(gamma, 'palette', 8))
        for colour in _HIGH_DEPTH_TYPES:
            for depth in _HIGH_DEPTHS:
                plan.append(Fixture(gamma, colour, depth))
    return plan


def coverage_fixtures() -> list[Fixture]:
    return [Fixture(*entry) for entry in COVERAGE_SET]


def generate(plan: list[Fixture], out_dir: Path, makepng: str) -> list[Path]:
    """Run makepng once per fixture inside out_dir. Stops at the first failing command."""
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for fixture in plan:
        subprocess.run(fixture.command(makepng), cwd=out_dir, check=True)
        written.append(out_dir / fixture.filename)
    return written


def check_png(path: Path) -> str | None:
    """Return None if path opens as a PNG, else a one-line reason."""
    if not path.is_file():
        return 'missing'
    try:
        with Image.open(path) as img:
            if img.format != 'PNG':
                return f'format is {img.format}'
    except OSError as exc:
        return str(exc)
    return None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='compose-fixtures',
        description='Generate PNG test fixtures with makepng.',
        formatter_class=argparse.RawTextHelpFormatter,
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--all', dest='mode', action='store_const', const='all', help='Full cross product')
    mode.add_argument('--coverage', dest='mode', action='store_const', const='coverage', help='Minimal coverage set')
    parser.add_argument('-o', '--out', default='.', help='Output directory (default: current directory)')
    parser.add_argument('-m', '--makepng', default=None, help='makepng executable (default: $MAKEPNG or ./makepng)')
    parser.add_argument('-n', '--dry-run', action='store_true', help='Print the commands instead of running them')
    parser.add_argument('-c', '--check', action='store_true', help='Open each output with Pillow and confirm PNG')
    parser.add_argument('--env-file', metavar='PATH', default=None, help='Path to .env file')
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.mode is None:
        print('compose-fixtures: one of --all or --coverage is required', file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'compose-fixtures: loaded {env_path}', file=sys.stderr)

    makepng = args.makepng or makepng_path()
    plan = all_fixtures() if args.mode == 'all' else coverage_fixtures()

    if args.dry_run:
        for fixture in plan:
            print(' '.join(fixture.command(makepng)))
        return 0

    try:
        written = generate(plan, Path(args.out), makepng)
    except (OSError, subprocess.CalledProcessError) as exc:
        print(f'compose-fixtures: {exc}', file=sys.stderr)
        return 1
    print(f'compose-fixtures: wrote {len(written)} file(s) to {args.out}')

    if args.check:
        failures = 0
        for path in written:
            reason = check_png(path)
            if reason is not None:
                print(f'  FAIL: {path}: {reason}')
                failures += 1
        if failures:
            return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
