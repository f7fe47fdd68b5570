from __future__ import annotations

import io
import logging

from pypdf import PdfReader

from extractors.base import BaseDocumentExtractor

logger = logging.getLogger(__name__)


class PdfExtractor(BaseDocumentExtractor):
    """Concatenates the text layer of every page, one page per line block."""

    extensions = ("pdf",)

    def extract(self, data: bytes) -> str:
        reader = PdfReader(io.BytesIO(data))
        parts = []
        for page in reader.pages:
            parts.append((page.extract_text() or "") + "\n")
        logger.debug("  [PDF] %d page(s) read", len(parts))
        return "".join(parts)
