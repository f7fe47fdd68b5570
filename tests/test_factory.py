import pytest

import ai.factory as factory


class _Stub:
    def __init__(self, name):
        self.name = name


@pytest.fixture(autouse=True)
def stub_services(monkeypatch):
    monkeypatch.setattr(factory, "GeminiService", lambda: _Stub("gemini"))
    monkeypatch.setattr(factory, "ClaudeService", lambda: _Stub("claude"))
    monkeypatch.setattr(factory, "OpenAIService", lambda: _Stub("openai"))


def test_gemini_is_the_default(monkeypatch):
    monkeypatch.delenv("AI_GENERATION_PROVIDER", raising=False)
    assert factory.get_generation_service().name == "gemini"


@pytest.mark.parametrize(
    "value, expected",
    [("claude", "claude"), ("Anthropic", "claude"), (" openai ", "openai"), ("GEMINI", "gemini")],
)
def test_provider_from_env(monkeypatch, value, expected):
    monkeypatch.setenv("AI_GENERATION_PROVIDER", value)
    assert factory.get_generation_service().name == expected


def test_unknown_provider(monkeypatch):
    monkeypatch.setenv("AI_GENERATION_PROVIDER", "mistral")
    with pytest.raises(ValueError, match="mistral"):
        factory.get_generation_service()
