"""Anthropic Claude vision engine."""

import base64
from typing import Any, Optional

import anthropic

from handwriting_ocr.errors import RecognitionError
from handwriting_ocr.preprocessing.pipeline import ProgressCallback
from handwriting_ocr.prompt import HANDWRITTEN_TEXT_PROMPT, instruction
from handwriting_ocr.providers.base import BaseProvider, Recognition

SYSTEM_PROMPT = HANDWRITTEN_TEXT_PROMPT


class AnthropicProvider(BaseProvider):
    def __init__(self, api_key: str, model: str) -> None:
        self.client = anthropic.Anthropic(api_key=api_key)
        self.model = model

    def recognize(
        self,
        image: bytes,
        language: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Recognition:
        b64 = base64.standard_b64encode(image).decode("utf-8")
        content: list[Any] = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": "image/png",
                    "data": b64,
                },
            },
            {"type": "text", "text": instruction(language)},
        ]

        self._report(on_progress, 0, "recognizing text")
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=8192,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": content}],
            )
        except anthropic.APIError as e:
            raise RecognitionError(f"Failed to recognize text: {e}") from e
        self._report(on_progress, 100, "recognizing text")

        return Recognition(text=response.content[0].text.strip(), confidence=None)
