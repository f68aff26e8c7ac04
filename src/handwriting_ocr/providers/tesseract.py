"""Local Tesseract engine via pytesseract."""

import io
from typing import Optional

import pytesseract
from PIL import Image

from handwriting_ocr.errors import RecognitionError
from handwriting_ocr.preprocessing.pipeline import ProgressCallback
from handwriting_ocr.providers.base import BaseProvider, Recognition


class TesseractProvider(BaseProvider):
    def __init__(self, tesseract_cmd: Optional[str] = None, config: str = "") -> None:
        self.tesseract_cmd = tesseract_cmd
        self.config = config

    def recognize(
        self,
        image: bytes,
        language: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Recognition:
        # pytesseract only reads the binary path from this module attribute.
        if self.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd

        self._report(on_progress, 0, "loading image")
        try:
            with Image.open(io.BytesIO(image)) as img:
                img.load()
                self._report(on_progress, 0, "recognizing text")
                data = pytesseract.image_to_data(
                    img, lang=language, config=self.config, output_type=pytesseract.Output.DICT
                )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, OSError) as e:
            raise RecognitionError(f"Failed to recognize text: {e}") from e
        self._report(on_progress, 100, "recognizing text")

        return Recognition(
            text=text_from_data(data),
            confidence=mean_confidence(data.get("conf", [])),
        )


def text_from_data(data: dict) -> str:
    """Rebuild the page text from ``image_to_data`` word boxes.

    Words on the same line are joined with a space; a new block or paragraph
    starts after a blank line.
    """
    paragraphs: list[list[tuple]] = []
    lines: dict[tuple, list[str]] = {}
    current_par = None

    for i, word in enumerate(data.get("text", [])):
        word = (word or "").strip()
        if not word:
            continue
        par = (data["block_num"][i], data["par_num"][i])
        line = par + (data["line_num"][i],)
        if par != current_par:
            paragraphs.append([])
            current_par = par
        if line not in lines:
            lines[line] = []
            paragraphs[-1].append(line)
        lines[line].append(word)

    return "\n\n".join(
        "\n".join(" ".join(lines[line]) for line in par_lines) for par_lines in paragraphs
    )


def mean_confidence(word_confidences) -> float:
    """Mean of the word confidences Tesseract reports; -1 marks non-word boxes."""
    scores = [float(c) for c in word_confidences if float(c) >= 0]
    if not scores:
        return 0.0
    return sum(scores) / len(scores)
