"""Monotonic in background: for fixed foreground and 0 < alpha < 255, a brighter
background never gives a darker result.

Background walks the full range; foreground and alpha are sampled at
Sampling.monotonic_fg_stride and Sampling.monotonic_alpha_stride. Alpha 0 and
255 are excluded since they bypass the blend.
"""

import numpy as np

from compose_checker.core.kernel import OPAQUE, TRANSPARENT
from compose_checker.core.types import BYTE_MAX, ArrayKernel, Property, PropertyTally, Sampling
from compose_checker.properties._sweep import axis, collect

prop = Property(
    name='monotonic',
    claim='monotonic in background',
    order=4,
    help='Non-decreasing in background for fixed foreground and partial alpha.',
)


@prop.check
def check(kernel: ArrayKernel, sampling: Sampling, tally: PropertyTally) -> None:
    alpha = axis(TRANSPARENT + 1, OPAQUE - 1, sampling.monotonic_alpha_stride)[:, None]
    bg = axis(0, BYTE_MAX, 1)[None, :]
    shape = (alpha.shape[0], bg.shape[1])

    for fg in axis(0, BYTE_MAX, sampling.monotonic_fg_stride):
        result = np.broadcast_to(kernel(fg, alpha, bg), shape)
        prev = result[:, :-1]
        current = result[:, 1:]
        collect(
            tally,
            current < prev,
            (fg, alpha, bg[:, 1:]),
            current,
            lambda pos, prev=prev: f'>= {prev.flat[pos]} (result at background - 1)',
            sampling.max_reported,
        )
