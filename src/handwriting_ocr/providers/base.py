"""Abstract base for OCR engines."""

from abc import ABC, abstractmethod
from typing import NamedTuple, Optional

from handwriting_ocr.preprocessing.pipeline import Progress, ProgressCallback


class Recognition(NamedTuple):
    text: str
    # 0–100; None for engines that report no score.
    confidence: Optional[float]


class BaseProvider(ABC):
    @abstractmethod
    def recognize(
        self,
        image: bytes,
        language: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Recognition:
        """Accept PNG bytes and a language code and return the recognized text."""
        ...

    @staticmethod
    def _report(on_progress: Optional[ProgressCallback], percent: int, phase: str) -> None:
        if on_progress:
            on_progress(Progress(percent=percent, phase=phase))
