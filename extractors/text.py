from __future__ import annotations

from extractors.base import BaseDocumentExtractor


class PlainTextExtractor(BaseDocumentExtractor):
    """Fallback for every other extension: decode the bytes as UTF-8."""

    def extract(self, data: bytes) -> str:
        return data.decode("utf-8", errors="replace")
