"""Result always in [0, 255].

Foreground and alpha cover the full byte range; background is sampled at
Sampling.closure_bg_stride (17 by default, 1 with --exhaustive). This is the
check that catches a missing clamp: with foreground > alpha the blended sum
goes well past 255, e.g. 250 + (245*250+127)//255 = 490.

The kernel result is inspected before any narrowing to a byte, so a kernel
that wraps or overflows shows up here rather than being hidden by a cast.
"""

import numpy as np

from compose_checker.core.types import BYTE_MAX, ArrayKernel, Property, PropertyTally, Sampling
from compose_checker.properties._sweep import axis, collect

IN_RANGE = f'in [0, {BYTE_MAX}]'

prop = Property(
    name='range-closure',
    claim='result always in [0, 255]',
    order=3,
    help='Range closure over all foreground/alpha, sampled background.',
)


@prop.check
def check(kernel: ArrayKernel, sampling: Sampling, tally: PropertyTally) -> None:
    alpha = axis(0, BYTE_MAX, 1)[:, None]
    bg = axis(0, BYTE_MAX, sampling.closure_bg_stride)[None, :]
    shape = (alpha.shape[0], bg.shape[1])

    # One foreground row at a time keeps the exhaustive sweep at 64K cells per step
    for fg in axis(0, BYTE_MAX, 1):
        result = np.broadcast_to(kernel(fg, alpha, bg), shape)
        collect(
            tally,
            (result < 0) | (result > BYTE_MAX),
            (fg, alpha, bg),
            result,
            IN_RANGE,
            sampling.max_reported,
        )
