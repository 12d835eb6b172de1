"""compose-check: verify the sRGB alpha composition kernel.

Usage: uv run compose-check [options]

Runs the curated test vectors, then the four kernel properties
(transparency, opacity, range closure, monotonicity in background),
prints the report and exits 0 only when nothing failed. Otherwise the
exit status is the number of failing checks, capped at 255.

No arguments are required and unrecognised ones are ignored. Options are
only recognised when spelled in full; a recognised stride option still
needs a value, and a value that is not an integer exits 2 like a bad
COMPOSE_* variable.

Sampling can be tuned with flags or COMPOSE_* variables. OS environment
variables are used first; missing ones are read from a .env file found by
walking up from the current directory (stopping at .git), or from
--env-file.
"""

import argparse
import sys

from compose_checker.core.env import load_env, parse_int, sampling_from_env
from compose_checker.core.report import format_json, format_text
from compose_checker.core.types import Sampling
from compose_checker.runner import exit_status, run_suite

# Same status argparse uses for a usage error
CONFIG_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    epilog = (
        'Examples:\n'
        '  compose-check\n'
        '  compose-check --json\n'
        '  compose-check --exhaustive\n'
        '  compose-check --closure-stride 5 --max-reported 50\n'
        '\n'
        'Environment (set in .env or environment):\n'
        '  COMPOSE_IDENTITY_STRIDE, COMPOSE_CLOSURE_STRIDE,\n'
        '  COMPOSE_MONOTONIC_FG_STRIDE, COMPOSE_MONOTONIC_ALPHA_STRIDE,\n'
        '  COMPOSE_MAX_REPORTED, COMPOSE_EXHAUSTIVE=1\n'
    )
    parser = argparse.ArgumentParser(
        prog='compose-check',
        description='Verify the sRGB alpha composition kernel against curated vectors and universal properties.',
        epilog=epilog,
        allow_abbrev=False,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
    parser.add_argument(
        '-x',
        '--exhaustive',
        action='store_true',
        help='Sweep every input on every axis (all strides 1)',
    )
    parser.add_argument('--identity-stride', metavar='N', help='Stride for the alpha=0/255 sweeps (default 51)')
    parser.add_argument('--closure-stride', metavar='N', help='Background stride for range closure (default 17)')
    parser.add_argument('--max-reported', metavar='N', help='Failure lines shown per property (default 10)')
    return parser


def _resolve_sampling(args: argparse.Namespace) -> Sampling:
    """Environment first, then flags on top."""
    sampling = sampling_from_env()
    if args.exhaustive:
        sampling = Sampling.exhaustive(max_reported=sampling.max_reported)
    return sampling.with_overrides(
        identity_stride=parse_int('--identity-stride', args.identity_stride),
        closure_bg_stride=parse_int('--closure-stride', args.closure_stride),
        max_reported=parse_int('--max-reported', args.max_reported),
    )


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args, _ignored = parser.parse_known_args(argv)

    env_path = load_env(env_file=args.env_file)
    if env_path:
        print(f'compose-check: loaded {env_path}', file=sys.stderr)

    try:
        sampling = _resolve_sampling(args)
    except ValueError as exc:
        print(f'compose-check: {exc}', file=sys.stderr)
        return CONFIG_ERROR

    report = run_suite(sampling)

    if args.json:
        print(format_json(report))
    else:
        print(format_text(report))

    return exit_status(report)


if __name__ == '__main__':
    sys.exit(main())
