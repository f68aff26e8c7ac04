"""Luminance histogram and Otsu threshold selection.

Tie-breaking
------------
Candidates are scanned in ascending order and a candidate only replaces the
current best when its inter-class variance is *strictly* greater, so the
smallest threshold reaching the maximum wins.

* Two populations at 50 and 200 give a flat variance plateau over [50, 199];
  the selected threshold is 50.
* A uniform image (one luminance value ``k``) has zero variance at every
  candidate and the selected threshold is 0.  Binarizing with it maps the
  whole image to white, or to black when ``k`` is 0.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from handwriting_ocr.errors import InvalidConfig
from handwriting_ocr.preprocessing.buffer import PixelBuffer

logger = logging.getLogger(__name__)

LEVELS = 256


def histogram(buffer: PixelBuffer) -> list[int]:
    """256-bin histogram of the red channel, which holds luminance after grayscale."""
    counts = np.bincount(buffer.samples[:, :, 0].ravel(), minlength=LEVELS)
    return [int(c) for c in counts]


def otsu_threshold(hist: Sequence[int], total: Optional[int] = None) -> int:
    """Return the threshold maximising ``w_bg * w_fg * (mean_bg - mean_fg) ** 2``.

    Background is ``<= t``, foreground ``> t``; weights are pixel fractions.
    *total* defaults to the histogram sum.
    """
    if len(hist) != LEVELS:
        raise InvalidConfig("threshold", f"histogram must have {LEVELS} bins, got {len(hist)}")
    if total is None:
        total = sum(hist)
    if total <= 0:
        raise InvalidConfig("threshold", "histogram is empty")

    weighted_total = sum(i * count for i, count in enumerate(hist))

    count_bg = 0
    sum_bg = 0
    best_variance = 0.0
    best = 0

    for t in range(LEVELS):
        count_bg += hist[t]
        if count_bg == 0:
            continue
        count_fg = total - count_bg
        if count_fg == 0:
            break
        sum_bg += t * hist[t]

        mean_bg = sum_bg / count_bg
        mean_fg = (weighted_total - sum_bg) / count_fg
        variance = (count_bg / total) * (count_fg / total) * (mean_bg - mean_fg) ** 2

        if variance > best_variance:
            best_variance = variance
            best = t

    return best


def select_threshold(buffer: PixelBuffer) -> int:
    t = otsu_threshold(histogram(buffer), buffer.width * buffer.height)
    logger.debug("Otsu threshold selected: %d", t)
    return t
