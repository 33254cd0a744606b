from __future__ import annotations

import logging

try:
    from openai import OpenAI as _OpenAI
except ImportError:
    _OpenAI = None  # type: ignore[assignment,misc]

from prscribe_core.providers.base import BaseGenerator

logger = logging.getLogger(__name__)


class OpenAIGenerator(BaseGenerator):
    MODEL = "gpt-4o-mini"
    IMAGE_MODEL = "dall-e-3"
    IMAGE_SIZE = "1024x1024"
    TEMPERATURE = 0.5

    def __init__(self, api_key: str, model: str | None = None):
        super().__init__(model)
        if _OpenAI is None:
            raise ImportError(
                "The 'openai' package is required for this provider. " "Install it with: pip install 'prscribe[openai]'"
            )
        self.client = _OpenAI(api_key=api_key)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.MODEL,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.TEMPERATURE,
            max_tokens=self.MAX_TOKENS,
        )
        return self._join_text(choice.message.content for choice in response.choices[:1])

    def generate_image(self, prompt: str) -> str | None:
        # One attempt only: every image is billed.
        try:
            response = self.client.images.generate(model=self.IMAGE_MODEL, prompt=prompt, n=1, size=self.IMAGE_SIZE)
        except Exception as e:
            logger.error("OpenAIGenerator image generation failed: %s", e)
            return None
        return response.data[0].url if response.data else None
