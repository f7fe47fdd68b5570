import logging
import os

from openai import OpenAI

from ai.service import AIService, MAX_OUTPUT_TOKENS, TEMPERATURE

logger = logging.getLogger(__name__)

_DEFAULT_MODEL = "gpt-5.2"


class OpenAIService(AIService):
    """AIService backed by the OpenAI API.  Single attempt, no retry."""

    def __init__(self, model: str = None):
        self._model = model or os.getenv("OPENAI_MODEL", _DEFAULT_MODEL)
        # reads OPENAI_API_KEY from env; the SDK's own retries are disabled
        self._client = OpenAI(max_retries=0)

    def get_decision(self, prompt: str) -> str:
        logger.info("  [OpenAI] Sending %d-char prompt to %s", len(prompt), self._model)
        response = self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            temperature=TEMPERATURE,
            max_completion_tokens=MAX_OUTPUT_TOKENS,
        )
        return response.choices[0].message.content or ""
