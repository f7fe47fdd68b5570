import logging
import os

from google import genai
from google.genai import types

from ai.service import AIService, MAX_OUTPUT_TOKENS, TEMPERATURE, THINKING_BUDGET

logger = logging.getLogger(__name__)

_DEFAULT_MODEL = "gemini-3-pro-preview"


class GeminiService(AIService):
    """AIService backed by the Google Gemini API.  Single attempt, no retry."""

    def __init__(self, model: str = None):
        self._model = model or os.getenv("GEMINI_MODEL", _DEFAULT_MODEL)
        self._client = genai.Client()  # reads GEMINI_API_KEY / GOOGLE_API_KEY from env
        self._config = types.GenerateContentConfig(
            temperature=TEMPERATURE,
            max_output_tokens=MAX_OUTPUT_TOKENS,
            thinking_config=types.ThinkingConfig(thinking_budget=THINKING_BUDGET),
        )

    def get_decision(self, prompt: str) -> str:
        logger.info("  [Gemini] Sending %d-char prompt to %s", len(prompt), self._model)
        response = self._client.models.generate_content(
            model=self._model,
            contents=prompt,
            config=self._config,
        )
        return response.text or ""
