"""
Base class for reference-document extractors.

Each extractor turns the raw bytes of one uploaded file into plain text
that is pasted verbatim into the generation prompt.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Tuple


class BaseDocumentExtractor(ABC):
    """
    Interface that every file-format extractor must implement.
    """

    # Lower-case extensions (without the dot) handled by this extractor.
    extensions: Tuple[str, ...] = ()

    @abstractmethod
    def extract(self, data: bytes) -> str:
        """
        Return best-effort plain text for *data*.

        May raise on corrupt or unreadable input; batch callers are
        expected to catch and skip.
        """
        ...
