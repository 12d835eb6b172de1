"""alpha=255 => result = foreground.

The background is fully covered. Holds even when the foreground breaks the
premultiplied invariant, because alpha=255 never reaches the blend formula.
"""

import numpy as np

from compose_checker.core.kernel import OPAQUE
from compose_checker.core.types import BYTE_MAX, ArrayKernel, Property, PropertyTally, Sampling
from compose_checker.properties._sweep import axis, collect

prop = Property(
    name='opacity',
    claim='alpha=255 => result = foreground',
    order=2,
    help='Opacity identity over sampled foreground/background.',
)


@prop.check
def check(kernel: ArrayKernel, sampling: Sampling, tally: PropertyTally) -> None:
    values = axis(0, BYTE_MAX, sampling.identity_stride)
    fg = values[:, None]
    bg = values[None, :]

    result = np.broadcast_to(kernel(fg, OPAQUE, bg), (len(values), len(values)))
    expected = np.broadcast_to(fg, result.shape)
    collect(
        tally,
        result != expected,
        (fg, OPAQUE, bg),
        result,
        lambda pos: str(expected.flat[pos]),
        sampling.max_reported,
    )
