"""Shared transcription prompt used by the LLM engines."""

# Tesseract codes for the scripts this tool is mostly used with.
LANGUAGE_NAMES = {
    "tam": "Tamil",
    "eng": "English",
    "hin": "Hindi",
    "mal": "Malayalam",
    "tel": "Telugu",
    "kan": "Kannada",
    "ben": "Bengali",
}

HANDWRITTEN_TEXT_PROMPT = """\
You are an expert OCR engine specialising in handwritten documents.

The image has been preprocessed for recognition: it is black ink on a white \
background, binarized and sharpened. Stray dots and thin broken strokes are \
artefacts of that process, not punctuation.

Transcribe the handwritten text exactly as written, in its original script. \
Do not transliterate or translate.

- Keep the original line breaks. Separate paragraphs with a blank line.
- Reproduce spelling as written, including mistakes.
- Mark a word you cannot read with [?].
- Output plain text only: no markdown, no commentary, no description of \
the image.
"""


def language_name(code: str) -> str:
    """Human-readable name for a Tesseract language code, or the code itself."""
    return LANGUAGE_NAMES.get(code, code)


def instruction(language: str) -> str:
    return f"Transcribe all handwritten text above. Language: {language_name(language)}."
