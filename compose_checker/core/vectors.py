"""Curated test vectors for the sRGB composition kernel.

Grouped by intent: alpha boundaries, hand-computed mid-alpha blends, the
palette/tRNS samples that overflowed the old linear path, clamp edges,
rounding of the +127 term, the decoder's default buffer byte and extremal
stress values. Order is significant; reports refer to vectors by 1-based index.
"""

from collections.abc import Callable

from compose_checker.core import kernel
from compose_checker.core.kernel import BUFFER_INIT8
from compose_checker.core.types import TestVector, VectorResult

V = TestVector

VECTORS: tuple[TestVector, ...] = (
    # alpha=0: result is the background
    V(0, 0, 255, 255, 'transparent black on white: background only'),
    V(255, 0, 0, 0, 'transparent white on black: background only'),
    V(100, 0, 200, 200, 'transparent on gray: background only'),
    V(123, 0, 45, 45, 'transparent: foreground ignored'),
    # alpha=255: result is the foreground
    V(255, 255, 0, 255, 'opaque white on black: foreground only'),
    V(0, 255, 255, 0, 'opaque black on white: foreground only'),
    V(100, 255, 200, 100, 'opaque on gray: foreground only'),
    # mid alpha
    V(128, 128, 128, 192, '50% gray on gray: 128 + (127*128+127)/255 = 192'),
    V(0, 128, 255, 127, '50% black on white: 0 + (127*255+127)/255 = 127'),
    V(255, 128, 0, 255, '50% white on black: 255 + 0 = 255'),
    V(100, 128, 200, 200, '50% blend: 100 + (127*200+127)/255 = 200'),
    # palette-4-1.8-tRNS.png samples where foreground > alpha
    V(134, 118, 73, 173, 'overflow reproduction 1: fg > alpha'),
    V(194, 140, 73, 227, 'overflow reproduction 2: fg > alpha'),
    V(249, 242, 73, 253, 'overflow reproduction 3: fg > alpha'),
    # would pass 255 without the clamp
    V(255, 1, 255, 255, 'near-transparent white on white: clamp'),
    V(200, 50, 200, 255, 'overflow case: 200 + 161 = 361 -> 255'),
    V(250, 10, 250, 255, 'high values low alpha: clamp'),
    # rounding of the +127 term
    V(0, 254, 255, 1, 'nearly opaque: (1*255+127)/255 = 1'),
    V(0, 253, 255, 2, 'nearly opaque: (2*255+127)/255 = 2'),
    V(0, 1, 1, 1, 'nearly transparent low bg: (254*1+127)/255 = 1'),
    # default buffer byte
    V(0, 128, BUFFER_INIT8, 36, 'transparent black over default buffer'),
    V(128, 64, BUFFER_INIT8, 183, 'partial over default buffer'),
    # stress
    V(254, 1, 254, 255, 'max non-overflow: 254 + 253 = 507 -> 255'),
    V(1, 254, 1, 1, 'min result with alpha: 1 + 0 = 1'),
)


def run_vectors(compose_fn: Callable[[int, int, int], int] | None = None) -> list[VectorResult]:
    """Evaluate every vector in order with compose_fn (default kernel.compose). A mismatch never stops the run."""
    compose_fn = compose_fn or kernel.compose
    results = []
    for i, vec in enumerate(VECTORS, start=1):
        computed = compose_fn(vec.foreground, vec.alpha, vec.background)
        results.append(VectorResult(index=i, vector=vec, computed=int(computed)))
    return results
