"""Configuration loading from environment variables and CLI flags."""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from handwriting_ocr.errors import InvalidConfig
from handwriting_ocr.preprocessing.binarize import AUTO, validate_threshold
from handwriting_ocr.preprocessing.contrast import contrast_factor
from handwriting_ocr.preprocessing.sharpen import SHARPEN_KERNEL


class Provider(str, Enum):
    TESSERACT = "tesseract"
    ANTHROPIC = "anthropic"
    OPENAI = "openai"


DEFAULTS = {
    Provider.TESSERACT: "",
    Provider.ANTHROPIC: "claude-sonnet-4-6",
    Provider.OPENAI: "gpt-4o",
}

# Engines missing from this map run locally and need no key.
ENV_KEYS = {
    Provider.ANTHROPIC: "ANTHROPIC_API_KEY",
    Provider.OPENAI: "OPENAI_API_KEY",
}

LANGUAGE_ENV = "OCR_LANGUAGE"
TESSERACT_CMD_ENV = "TESSERACT_CMD"

# Tesseract language code; the LLM engines get the name via prompt.language_name().
DEFAULT_LANGUAGE = "tam"


@dataclass
class Config:
    provider: Provider
    model: str
    api_key: str
    language: str = DEFAULT_LANGUAGE
    tesseract_cmd: Optional[str] = None

    @classmethod
    def from_env(
        cls,
        provider: Provider,
        model_override: Optional[str] = None,
        api_key_override: Optional[str] = None,
        language_override: Optional[str] = None,
    ) -> "Config":
        model = model_override or DEFAULTS[provider]
        language = language_override or os.environ.get(LANGUAGE_ENV) or DEFAULT_LANGUAGE
        api_key = ""
        if provider in ENV_KEYS:
            api_key = api_key_override or os.environ.get(ENV_KEYS[provider], "")
            if not api_key:
                raise RuntimeError(
                    f"No API key for {provider.value}. "
                    f"Set {ENV_KEYS[provider]} in your environment or .env file."
                )
        return cls(
            provider=provider,
            model=model,
            api_key=api_key,
            language=language,
            tesseract_cmd=os.environ.get(TESSERACT_CMD_ENV) or None,
        )


Threshold = Union[int, str]


@dataclass(frozen=True)
class PreprocessingConfig:
    """Parameters for one preprocessing run.

    ``binarize_threshold`` is either a fixed level in [0, 255] or ``"auto"``
    for Otsu's method.  The default is a fixed 128; Otsu must be asked for.
    """

    contrast_strength: float = 50
    sharpen_kernel: Tuple[int, ...] = field(default=SHARPEN_KERNEL)
    binarize_threshold: Threshold = 128

    def validate(self) -> None:
        contrast_factor(self.contrast_strength)
        if tuple(self.sharpen_kernel) != SHARPEN_KERNEL:
            raise InvalidConfig("sharpen", "the sharpen kernel is fixed and cannot be overridden")
        validate_threshold(self.binarize_threshold)


def parse_threshold(text: str) -> Threshold:
    """Parse ``"auto"`` or an integer level from CLI / environment text."""
    value = text.strip().lower()
    if value == AUTO:
        return AUTO
    try:
        threshold = int(value)
    except ValueError:
        raise InvalidConfig(
            "binarize", f"threshold must be an integer in [0, 255] or 'auto', got {text!r}"
        ) from None
    validate_threshold(threshold)
    return threshold
