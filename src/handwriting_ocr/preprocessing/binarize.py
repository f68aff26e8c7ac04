"""Two-level ink/background binarization."""

import numpy as np

from handwriting_ocr.errors import InvalidConfig
from handwriting_ocr.preprocessing.buffer import PixelBuffer
from handwriting_ocr.preprocessing.threshold import select_threshold

AUTO = "auto"


def validate_threshold(threshold) -> None:
    if threshold == AUTO:
        return
    if isinstance(threshold, bool) or not isinstance(threshold, (int, np.integer)):
        raise InvalidConfig(
            "binarize", f"threshold must be an integer in [0, 255] or 'auto', got {threshold!r}"
        )
    if not 0 <= threshold <= 255:
        raise InvalidConfig("binarize", f"threshold must lie in [0, 255], got {threshold}")


def binarize(buffer: PixelBuffer, threshold=128) -> PixelBuffer:
    """Set R, G, B to 255 where luminance > *threshold*, else 0.

    The red channel is read as luminance, so the buffer should already be
    grayscale.  ``threshold="auto"`` selects one with Otsu's method.
    """
    validate_threshold(threshold)
    if threshold == AUTO:
        threshold = select_threshold(buffer)
    levels = np.where(buffer.samples[:, :, 0] > threshold, 255, 0).astype(np.uint8)
    return buffer.with_rgb(levels[:, :, np.newaxis])
