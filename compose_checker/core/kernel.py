"""sRGB-space alpha composition of one colour channel.

The foreground is a palette sample after gamma correction, premultiplied on
black, so the blend only has to add the background's share:

    result = foreground + ((255 - alpha) * background + 127) // 255

The +127 rounds the division half-up. Malformed tRNS data can give a
foreground larger than its alpha, in which case the sum goes past 255 and
must be clamped. alpha 0 and alpha 255 are answered before the formula runs.
"""

import numpy as np

TRANSPARENT = 0
OPAQUE = 255
ROUNDING_BIAS = 127

# Byte the decode pipeline fills its row buffer with before composing.
BUFFER_INIT8 = 73


def compose(foreground: int, alpha: int, background: int) -> int:
    """Compose one channel. All three inputs are bytes; the result is a byte."""
    if alpha == TRANSPARENT:
        return background
    if alpha == OPAQUE:
        return foreground

    blended = foreground + ((OPAQUE - alpha) * background + ROUNDING_BIAS) // OPAQUE
    if blended > OPAQUE:
        blended = OPAQUE
    return blended


def compose_array(foreground, alpha, background) -> np.ndarray:
    """compose() applied elementwise over broadcastable integer arrays.

    Each cell is computed by compose() itself, looked up at call time, so the
    property sweeps and the vector table always exercise the same kernel.
    The result is int64 and never narrowed to a byte, so a value past 255
    stays visible to range checks instead of wrapping.
    """
    # Python ints per cell: (255 - a) * bg + 127 reaches 65152 before the divide
    fg = np.asarray(foreground, dtype=np.int64)
    a = np.asarray(alpha, dtype=np.int64)
    bg = np.asarray(background, dtype=np.int64)

    per_cell = np.frompyfunc(compose, 3, 1)
    return np.asarray(per_cell(fg.astype(object), a.astype(object), bg.astype(object)), dtype=np.int64)
