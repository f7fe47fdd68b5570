"""
AIService implementation backed by the Anthropic Claude API.

Text-only prompts (get_decision).  Extended thinking is left off because
it cannot be combined with a non-default temperature; the shared low
temperature matters more for keeping the reply format stable.

Reads ANTHROPIC_API_KEY from the environment.
Default model: claude-opus-4-6 (override with CLAUDE_MODEL)

Each call is a single attempt: the SDK's built-in retries are disabled
and failures propagate to the caller.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from anthropic import Anthropic

from ai.service import AIService, MAX_OUTPUT_TOKENS, TEMPERATURE

logger = logging.getLogger(__name__)

_DEFAULT_MODEL = "claude-opus-4-6"


class ClaudeService(AIService):
    """AIService backed by the Anthropic Claude API."""

    def __init__(self, model: Optional[str] = None):
        self._model = model or os.getenv("CLAUDE_MODEL", _DEFAULT_MODEL)
        self._client = Anthropic(max_retries=0)  # reads ANTHROPIC_API_KEY from env

    def get_decision(self, prompt: str) -> str:
        logger.info("  [Claude] Sending %d-char prompt to %s", len(prompt), self._model)
        # Long outputs need the streaming endpoint to avoid the SDK's
        # non-streaming duration guard.
        with self._client.messages.stream(
            model=self._model,
            max_tokens=MAX_OUTPUT_TOKENS,
            temperature=TEMPERATURE,
            messages=[{"role": "user", "content": prompt}],
        ) as stream:
            message = stream.get_final_message()
        return "".join(
            block.text for block in message.content if block.type == "text"
        )
