"""Luminance conversion using ITU-R BT.601 luma weights."""

import numpy as np

from handwriting_ocr.preprocessing.buffer import PixelBuffer, round_to_uint8

LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114])


def luminance(buffer: PixelBuffer) -> np.ndarray:
    """Per-pixel luminance as a ``(height, width)`` uint8 array."""
    return round_to_uint8(buffer.rgb.astype(np.float64) @ LUMA_WEIGHTS)


def to_grayscale(buffer: PixelBuffer) -> PixelBuffer:
    """Replace R, G and B with the pixel's luminance so that R == G == B."""
    luma = luminance(buffer)
    return buffer.with_rgb(luma[:, :, np.newaxis])
