"""Decode → preprocess → recognize workflow around an OCR engine."""

import asyncio
import logging
from typing import NamedTuple, Optional

from handwriting_ocr.config import PreprocessingConfig
from handwriting_ocr.preprocessing.buffer import PixelBuffer
from handwriting_ocr.preprocessing.pipeline import ProgressCallback, run_pipeline
from handwriting_ocr.providers.base import BaseProvider, Recognition

logger = logging.getLogger(__name__)


class RecognitionOutcome(NamedTuple):
    recognition: Recognition
    # PNG bytes actually handed to the engine.
    image: bytes


def recognize_image(
    image_bytes: bytes,
    provider: BaseProvider,
    language: str,
    config: Optional[PreprocessingConfig] = None,
    preprocess: bool = True,
    on_progress: Optional[ProgressCallback] = None,
) -> RecognitionOutcome:
    """Preprocess *image_bytes* (unless *preprocess* is False) and run OCR on it.

    Preprocessing errors are raised before the engine is called.
    """
    buffer = PixelBuffer.from_bytes(image_bytes)
    if preprocess:
        buffer = run_pipeline(buffer, config or PreprocessingConfig(), on_progress)
    png = buffer.to_png()

    recognition = provider.recognize(png, language, on_progress=on_progress)
    logger.debug(
        "Recognized %d characters (confidence %s)", len(recognition.text), recognition.confidence
    )
    return RecognitionOutcome(recognition=recognition, image=png)


async def recognize_image_async(
    image_bytes: bytes,
    provider: BaseProvider,
    language: str,
    config: Optional[PreprocessingConfig] = None,
    preprocess: bool = True,
    on_progress: Optional[ProgressCallback] = None,
) -> RecognitionOutcome:
    """Run :func:`recognize_image` in a worker thread.

    Progress callbacks fire on the worker thread.
    """
    return await asyncio.to_thread(
        recognize_image,
        image_bytes,
        provider,
        language,
        config=config,
        preprocess=preprocess,
        on_progress=on_progress,
    )
