"""Base text generator implementing the Template Method pattern.

All providers share the same generation algorithm:
    generate() → _split_prompt()          (only for oversized user prompts)
               → _call_with_retry() → _call_api()   ← only this differs per provider

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the text response

Prompt wording lives with the summarizers (prscribe_core.prompts); a
generator only knows how to turn a system prompt plus a user prompt into text.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

# Shared defaults; subclasses may override as class attributes if needed.
_MAX_RETRIES = 3
_MAX_TOKENS = 1024
_MAX_PROMPT_CHARS = 15_000


class BaseGenerator(ABC):
    MODEL: str = ""
    TEMPERATURE: float = 0.5
    MAX_RETRIES: int = _MAX_RETRIES
    MAX_TOKENS: int = _MAX_TOKENS
    # User prompts longer than this are generated in line-aligned chunks.
    MAX_PROMPT_CHARS: int = _MAX_PROMPT_CHARS

    def __init__(self, model: str | None = None):
        if model:
            self.MODEL = model

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def generate(self, system_prompt: str, user_prompt: str) -> str | None:
        """Return generated text, or None if the provider kept failing.

        A user prompt over MAX_PROMPT_CHARS is split on line boundaries; each
        chunk is generated on its own and the results are joined with newlines.
        If any chunk fails the whole call fails.
        """
        if len(user_prompt) <= self.MAX_PROMPT_CHARS:
            return self._call_with_retry(system_prompt, user_prompt)

        chunks = self._split_prompt(user_prompt)
        logger.info(
            "%s: prompt of %d chars split into %d chunks",
            self.__class__.__name__,
            len(user_prompt),
            len(chunks),
        )
        responses = []
        for chunk in chunks:
            response = self._call_with_retry(system_prompt, chunk)
            if response is None:
                return None
            responses.append(response)
        return "\n".join(responses)

    # ------------------------------------------------------------------ #
    # Abstract, implement in each provider                                #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        """Make a single API call and return the raw text response.

        This is the only method subclasses must implement. It should raise
        on failure; _call_with_retry handles retries and logging.
        """

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    def _split_prompt(self, prompt: str) -> list[str]:
        chunks: list[str] = []
        current = ""
        for line in prompt.split("\n"):
            if len(line) > self.MAX_PROMPT_CHARS:
                logger.warning(
                    "%s: a single prompt line is %d chars, over the %d limit",
                    self.__class__.__name__,
                    len(line),
                    self.MAX_PROMPT_CHARS,
                )
            if current and len(current) + len(line) + 1 > self.MAX_PROMPT_CHARS:
                chunks.append(current)
                current = ""
            current += line + "\n"
        if current:
            chunks.append(current)
        return chunks

    def _call_with_retry(self, system_prompt: str, user_prompt: str) -> str | None:
        """Retry _call_api up to MAX_RETRIES times with exponential backoff."""
        for attempt in range(self.MAX_RETRIES):
            try:
                text = self._call_api(system_prompt, user_prompt)
            except Exception as e:
                if attempt == self.MAX_RETRIES - 1:
                    logger.error(
                        "%s API failed after %d attempts: %s",
                        self.__class__.__name__,
                        self.MAX_RETRIES,
                        e,
                    )
                    return None
                delay = 2**attempt
                logger.warning(
                    "%s API error (attempt %d/%d): %s. Retrying in %ds...",
                    self.__class__.__name__,
                    attempt + 1,
                    self.MAX_RETRIES,
                    e,
                    delay,
                )
                time.sleep(delay)
                continue
            if not text:
                logger.warning("%s returned an empty response", self.__class__.__name__)
                return None
            return text.strip()
        return None

    def generate_image(self, prompt: str) -> str | None:
        """Return the URL of an image generated for prompt.

        Providers without an image model return None.
        """
        logger.warning("%s cannot generate images, skipping", self.__class__.__name__)
        return None

    @staticmethod
    def _join_text(parts) -> str:
        """Concatenate the text parts of a response, skipping empty ones."""
        return "".join(part for part in parts if part)
