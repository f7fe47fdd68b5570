"""
Extension → extractor dispatch, and batch extraction of uploads.

Uploads are processed one at a time.  A file that fails to extract is
logged and left out; the rest of the batch still goes through.
"""

from __future__ import annotations

import logging
from pathlib import PurePath
from typing import Dict, Iterable, List, Tuple

from dto.matrix import ReferenceFile
from extractors.base import BaseDocumentExtractor
from extractors.pdf import PdfExtractor
from extractors.spreadsheet import XlsExtractor, XlsxExtractor
from extractors.text import PlainTextExtractor
from extractors.word import DocxExtractor

logger = logging.getLogger(__name__)


class ExtractorRegistry:
    """Maps a file extension to the extractor that handles it."""

    def __init__(self) -> None:
        self._fallback: BaseDocumentExtractor = PlainTextExtractor()
        self._extractors: Dict[str, BaseDocumentExtractor] = {}
        for extractor in (PdfExtractor(), DocxExtractor(), XlsxExtractor(), XlsExtractor()):
            self.register(extractor)

    def register(self, extractor: BaseDocumentExtractor) -> None:
        for ext in extractor.extensions:
            self._extractors[ext.lower()] = extractor

    def get_extractor(self, filename: str) -> BaseDocumentExtractor:
        return self._extractors.get(file_extension(filename), self._fallback)

    def supported_extensions(self) -> List[str]:
        return sorted(self._extractors)


def file_extension(filename: str) -> str:
    """Lower-case extension without the dot (``""`` when there is none)."""
    return PurePath(filename or "").suffix.lstrip(".").lower()


_default_registry = ExtractorRegistry()


def extract_document_text(
    filename: str,
    data: bytes,
    registry: ExtractorRegistry = None,
) -> str:
    """Extract plain text from one file, chosen by its extension."""
    registry = registry or _default_registry
    extractor = registry.get_extractor(filename)
    logger.info("Extracting '%s' with %s", filename, type(extractor).__name__)
    text = extractor.extract(data)
    logger.info("  -> %d character(s)", len(text))
    return text


def extract_reference_files(
    uploads: Iterable[Tuple[str, bytes]],
    registry: ExtractorRegistry = None,
) -> List[ReferenceFile]:
    """
    Extract every ``(filename, data)`` upload in order.

    Files whose extraction raises are skipped.
    """
    files: List[ReferenceFile] = []
    for name, data in uploads:
        try:
            text = extract_document_text(name, data, registry=registry)
        except Exception:
            logger.exception("Failed to extract '%s' — skipping file", name)
            continue
        files.append(ReferenceFile(name=name, text_content=text))
    return files
