"""alpha=0 => result = background.

A fully transparent foreground contributes nothing, whatever its value.
Sweeps foreground and background at Sampling.identity_stride.
"""

import numpy as np

from compose_checker.core.kernel import TRANSPARENT
from compose_checker.core.types import BYTE_MAX, ArrayKernel, Property, PropertyTally, Sampling
from compose_checker.properties._sweep import axis, collect

prop = Property(
    name='transparency',
    claim='alpha=0 => result = background',
    order=1,
    help='Transparency identity over sampled foreground/background.',
)


@prop.check
def check(kernel: ArrayKernel, sampling: Sampling, tally: PropertyTally) -> None:
    values = axis(0, BYTE_MAX, sampling.identity_stride)
    fg = values[:, None]
    bg = values[None, :]

    result = np.broadcast_to(kernel(fg, TRANSPARENT, bg), (len(values), len(values)))
    expected = np.broadcast_to(bg, result.shape)
    collect(
        tally,
        result != expected,
        (fg, TRANSPARENT, bg),
        result,
        lambda pos: str(expected.flat[pos]),
        sampling.max_reported,
    )
