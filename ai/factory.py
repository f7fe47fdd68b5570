import os

from ai.service import AIService
from ai.openai_service import OpenAIService
from ai.gemini_service import GeminiService
from ai.claude_service import ClaudeService


def _make_service(provider: str) -> AIService:
    """Instantiate the appropriate AIService for a provider name."""
    provider = provider.lower().strip()
    if provider == "gemini":
        return GeminiService()
    if provider in ("claude", "anthropic"):
        return ClaudeService()
    if provider == "openai":
        return OpenAIService()
    raise ValueError(f"Unknown AI provider: {provider!r}")


def get_generation_service() -> AIService:
    """
    Return the AIService used to generate matrices.

    The provider is chosen via the AI_GENERATION_PROVIDER env var:
      - "gemini"     → GeminiService  (default)
      - "claude"     → ClaudeService
      - "openai"     → OpenAIService
    """
    provider = os.getenv("AI_GENERATION_PROVIDER", "gemini")
    return _make_service(provider)
