"""3×3 sharpening convolution.

Only interior pixels are convolved.  The outermost rows and columns are copied
through unchanged, which keeps every neighbour read in bounds; an image smaller
than 3×3 in either direction has no interior and comes back unchanged.

Every output sample is computed from a snapshot of the input taken before any
write, then committed in one assignment.  Sweeping in place would feed
already-sharpened neighbours into later pixels and bias the result by scan
order.
"""

from typing import Sequence

import numpy as np

from handwriting_ocr.errors import InvalidConfig
from handwriting_ocr.preprocessing.buffer import PixelBuffer

SHARPEN_KERNEL = (
    0, -1, 0,
    -1, 5, -1,
    0, -1, 0,
)


def _as_matrix(kernel: Sequence[int]) -> np.ndarray:
    matrix = np.asarray(kernel, dtype=np.int32)
    if matrix.size != 9:
        raise InvalidConfig("sharpen", f"kernel must have 9 weights, got {matrix.size}")
    return matrix.reshape(3, 3)


def sharpen(buffer: PixelBuffer, kernel: Sequence[int] = SHARPEN_KERNEL) -> PixelBuffer:
    weights = _as_matrix(kernel)
    h, w = buffer.height, buffer.width
    if h < 3 or w < 3:
        return PixelBuffer(buffer.samples.copy())

    snapshot = buffer.rgb.astype(np.int32)
    acc = np.zeros((h - 2, w - 2, 3), dtype=np.int32)
    for ky in range(3):
        for kx in range(3):
            weight = weights[ky, kx]
            if weight:
                acc += weight * snapshot[ky:ky + h - 2, kx:kx + w - 2]

    out = buffer.samples.copy()
    out[1:-1, 1:-1, :3] = np.clip(acc, 0, 255).astype(np.uint8)
    return PixelBuffer(out)
