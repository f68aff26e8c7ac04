"""Preprocessing pipeline for handwritten-text OCR.

Pipeline
--------
1. Grayscale  — BT.601 luminance written back into R, G and B.

2. Contrast   — linear stretch around mid-gray; the default strength of 50
                deepens faint pen strokes against paper.

3. Sharpen    — 3×3 kernel that crisps stroke boundaries.  Border pixels
                are left as they are.

4. Binarize   — ink (0) / background (255) split at a fixed level, or at
                the Otsu level when the threshold is ``"auto"``.

The run is a pure function of (image, config): each stage returns a new
buffer, the config is validated before the first stage, and the same input
always yields byte-identical output.
"""

import logging
from typing import Callable, NamedTuple, Optional

from handwriting_ocr.config import PreprocessingConfig
from handwriting_ocr.errors import PreprocessingError
from handwriting_ocr.preprocessing.binarize import binarize
from handwriting_ocr.preprocessing.buffer import PixelBuffer
from handwriting_ocr.preprocessing.contrast import adjust_contrast
from handwriting_ocr.preprocessing.grayscale import to_grayscale
from handwriting_ocr.preprocessing.sharpen import sharpen

logger = logging.getLogger(__name__)


class Progress(NamedTuple):
    percent: int
    phase: str


ProgressCallback = Callable[[Progress], None]


def _stages(config: PreprocessingConfig):
    return [
        ("grayscale", to_grayscale),
        ("contrast", lambda buf: adjust_contrast(buf, config.contrast_strength)),
        ("sharpen", lambda buf: sharpen(buf, config.sharpen_kernel)),
        ("binarize", lambda buf: binarize(buf, config.binarize_threshold)),
    ]


def run_pipeline(
    buffer: PixelBuffer,
    config: Optional[PreprocessingConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> PixelBuffer:
    """Run every stage in order and return the final buffer.

    Raises ``PreprocessingError`` tagged with the failing stage.  *buffer* is
    never modified.
    """
    config = config or PreprocessingConfig()
    config.validate()

    stages = _stages(config)
    logger.debug("Preprocessing %dx%d image with %s", buffer.width, buffer.height, config)

    result = buffer
    for i, (name, stage) in enumerate(stages, start=1):
        try:
            result = stage(result)
        except PreprocessingError:
            logger.debug("Stage %s failed", name)
            raise
        if on_progress:
            on_progress(Progress(percent=100 * i // len(stages), phase=name))

    return result


def preprocess_for_ocr(
    image_bytes: bytes,
    config: Optional[PreprocessingConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> bytes:
    """Decode *image_bytes*, run the pipeline and return the result as PNG bytes."""
    config = config or PreprocessingConfig()
    config.validate()
    buffer = PixelBuffer.from_bytes(image_bytes)
    return run_pipeline(buffer, config, on_progress).to_png()
