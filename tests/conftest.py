"""
Pytest configuration: fake generation services and sample replies.
"""
from __future__ import annotations

import threading
from typing import List, Optional

import pytest

from ai.service import AIService


SAMPLE_REPLY = """Dưới đây là ma trận:
SECTION: MA TRẬN ĐỌC
HEADERS: STT ||| Nội dung ||| Số câu
ROW: 1 ||| Đọc hiểu văn bản ||| 4
ROW: 2 ||| Tiếng Việt
SECTION: MA TRẬN VIẾT
HEADERS: STT ||| Nội dung ||| Số câu
ROW: 1 ||| Viết đoạn văn ||| 1 ||| thừa
"""


class FakeAIService(AIService):
    """Returns a canned reply and records every prompt it receives."""

    def __init__(self, reply: str = SAMPLE_REPLY, error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []

    def get_decision(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


class BlockingAIService(FakeAIService):
    """Holds the call open until ``release`` is set."""

    def __init__(self, reply: str = SAMPLE_REPLY):
        super().__init__(reply)
        self.entered = threading.Event()
        self.release = threading.Event()

    def get_decision(self, prompt: str) -> str:
        self.entered.set()
        self.release.wait(timeout=5)
        return super().get_decision(prompt)


@pytest.fixture
def fake_service():
    return FakeAIService()


@pytest.fixture
def sample_reply():
    return SAMPLE_REPLY
