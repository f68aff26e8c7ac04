"""OpenAI GPT-4o vision engine."""

import base64
from typing import Any, Optional

import openai
from openai import OpenAI

from handwriting_ocr.errors import RecognitionError
from handwriting_ocr.preprocessing.pipeline import ProgressCallback
from handwriting_ocr.prompt import HANDWRITTEN_TEXT_PROMPT, instruction
from handwriting_ocr.providers.base import BaseProvider, Recognition

SYSTEM_PROMPT = HANDWRITTEN_TEXT_PROMPT


class OpenAIProvider(BaseProvider):
    def __init__(self, api_key: str, model: str) -> None:
        self.client = OpenAI(api_key=api_key)
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
                "type": "image_url",
                "image_url": {
                    "url": f"data:image/png;base64,{b64}",
                    "detail": "high",
                },
            },
            {"type": "text", "text": instruction(language)},
        ]

        self._report(on_progress, 0, "recognizing text")
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                max_tokens=4096,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": content},
                ],
            )
        except openai.OpenAIError as e:
            raise RecognitionError(f"Failed to recognize text: {e}") from e
        self._report(on_progress, 100, "recognizing text")

        text = response.choices[0].message.content or ""
        return Recognition(text=text.strip(), confidence=None)
