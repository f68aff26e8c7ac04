"""Linear contrast stretch around mid-gray."""

import math

import numpy as np

from handwriting_ocr.errors import InvalidConfig
from handwriting_ocr.preprocessing.buffer import PixelBuffer, round_to_uint8

MIDPOINT = 128

# The factor's denominator is 255 * (259 - strength).
SINGULAR_STRENGTH = 259


def contrast_factor(strength: float) -> float:
    """Scaling factor for *strength*; 0 gives 1.0 (identity).

    Raises ``InvalidConfig`` for a non-numeric or non-finite strength, for
    exactly 259 (zero denominator) and for strengths so large that the factor
    overflows.  Any other value is accepted, including values outside the
    usual (-255, 255) range.
    """
    if isinstance(strength, bool) or not isinstance(
        strength, (int, float, np.integer, np.floating)
    ):
        raise InvalidConfig("contrast", f"contrast strength must be a number, got {strength!r}")
    try:
        strength = float(strength)
    except OverflowError:
        raise InvalidConfig("contrast", f"contrast strength {strength} is out of range") from None
    if not math.isfinite(strength):
        raise InvalidConfig("contrast", f"contrast strength must be finite, got {strength}")
    if strength == SINGULAR_STRENGTH:
        raise InvalidConfig(
            "contrast", f"contrast strength {SINGULAR_STRENGTH} gives a singular scaling factor"
        )
    factor = (259 * (strength + 255)) / (255 * (259 - strength))
    if not math.isfinite(factor):
        raise InvalidConfig(
            "contrast", f"contrast strength {strength} is too large for a finite scaling factor"
        )
    return factor


def adjust_contrast(buffer: PixelBuffer, strength: float) -> PixelBuffer:
    factor = contrast_factor(strength)
    stretched = factor * (buffer.rgb.astype(np.float64) - MIDPOINT) + MIDPOINT
    return buffer.with_rgb(round_to_uint8(stretched))
