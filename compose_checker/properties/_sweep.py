"""Grid and bookkeeping helpers shared by the property modules."""

from collections.abc import Callable

import numpy as np

from compose_checker.core.types import FailureRecord, PropertyTally


def axis(start: int, stop: int, stride: int) -> np.ndarray:
    """start, start+stride, ... always ending on stop, so the top of the domain is never skipped."""
    values = list(range(start, stop + 1, stride))
    if values[-1] != stop:
        values.append(stop)
    return np.array(values, dtype=np.int32)


def collect(
    tally: PropertyTally,
    bad: np.ndarray,
    samples: tuple,
    computed: np.ndarray,
    expected: str | Callable[[int], str],
    limit: int,
) -> None:
    """Count the True cells of `bad` as violations and keep details for the first `limit`.

    samples is the (foreground, alpha, background) triple broadcastable to bad.shape;
    expected is the text shown after 'expected', either fixed or computed from
    the flat cell index.
    """
    tally.checked += bad.size
    positions = np.flatnonzero(bad)
    if len(positions) == 0:
        return

    room = max(limit - len(tally.failures), 0)
    if room:
        fg, alpha, bg = (np.broadcast_to(s, bad.shape).ravel() for s in samples)
        got = np.broadcast_to(computed, bad.shape).ravel()
        for n, pos in enumerate(positions[:room], start=1):
            tally.failures.append(
                FailureRecord(
                    index=tally.violations + n,
                    sample=(int(fg[pos]), int(alpha[pos]), int(bg[pos])),
                    computed=int(got[pos]),
                    expected=expected if isinstance(expected, str) else expected(int(pos)),
                )
            )
    tally.violations += len(positions)
