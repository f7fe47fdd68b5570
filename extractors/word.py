from __future__ import annotations

import io
from typing import List

from docx import Document

from extractors.base import BaseDocumentExtractor


class DocxExtractor(BaseDocumentExtractor):
    """
    Raw text of a .docx file: body paragraphs first, then the text of
    every table cell (row by row, cells tab-separated).
    """

    extensions = ("docx",)

    def extract(self, data: bytes) -> str:
        document = Document(io.BytesIO(data))
        lines: List[str] = [p.text for p in document.paragraphs]
        for table in document.tables:
            for row in table.rows:
                lines.append("\t".join(cell.text for cell in row.cells))
        return "\n".join(lines)
