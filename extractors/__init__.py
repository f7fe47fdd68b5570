from extractors.base import BaseDocumentExtractor
from extractors.registry import (
    ExtractorRegistry,
    extract_document_text,
    extract_reference_files,
    file_extension,
)

__all__ = [
    "BaseDocumentExtractor",
    "ExtractorRegistry",
    "extract_document_text",
    "extract_reference_files",
    "file_extension",
]
