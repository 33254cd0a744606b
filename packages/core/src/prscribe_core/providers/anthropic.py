from __future__ import annotations

import logging

from prscribe_core.providers.base import BaseGenerator

logger = logging.getLogger(__name__)


class AnthropicGenerator(BaseGenerator):
    """Claude text generation. Anthropic has no image model, so release images are skipped."""

    MODEL = "claude-sonnet-4-20250514"
    TEMPERATURE = 0.5

    def __init__(self, api_key: str, model: str | None = None):
        super().__init__(model)
        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "The 'anthropic' package is required for this provider. "
                "Install it with: pip install 'prscribe[anthropic]'"
            )
        self.client = anthropic.Anthropic(api_key=api_key)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        response = self.client.messages.create(
            model=self.MODEL,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
            temperature=self.TEMPERATURE,
            max_tokens=self.MAX_TOKENS,
        )
        if response.stop_reason == "max_tokens":
            logger.warning("Summary from %s was cut off at %d tokens", self.MODEL, self.MAX_TOKENS)
        return self._join_text(block.text for block in response.content if block.type == "text")
