"""
Write matrix tables to an .xlsx workbook — one worksheet per table.

Row 1 holds the headers (bold); data rows follow in order.
"""

from __future__ import annotations

import io
import logging
import re
from typing import List, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font

from dto.matrix import MatrixTable

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "Ma_Tran_Dac_Ta_Chuan_100.xlsx"
XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_MAX_SHEET_TITLE_LEN = 30
_ILLEGAL_SHEET_CHARS_RE = re.compile(r"[:\\/?*\[\]]")


def sheet_title(title: str, index: int) -> str:
    """
    Worksheet name for a table title: first 30 characters with the
    characters Excel forbids removed.  Falls back to ``Sheet<n>``.
    """
    name = _ILLEGAL_SHEET_CHARS_RE.sub("", title[:_MAX_SHEET_TITLE_LEN])
    return name if name.strip() else f"Sheet{index + 1}"


def build_workbook(matrices: Sequence[MatrixTable]) -> Workbook:
    if not matrices:
        raise ValueError("No matrices to export")

    wb = Workbook()
    wb.remove(wb.active)
    header_font = Font(bold=True)
    wrap = Alignment(wrap_text=True, vertical="top")

    for i, matrix in enumerate(matrices):
        # openpyxl suffixes duplicate titles itself.
        ws = wb.create_sheet(title=sheet_title(matrix.title, i))
        ws.append(list(matrix.headers))
        for cell in ws[1]:
            cell.font = header_font
            cell.alignment = wrap
        for row in matrix.rows:
            ws.append(list(row))
        logger.info(
            "  -> sheet '%s': %d column(s), %d row(s)",
            ws.title,
            len(matrix.headers),
            len(matrix.rows),
        )
    return wb


def export_matrices_xlsx(matrices: List[MatrixTable]) -> bytes:
    """Serialise *matrices* to .xlsx bytes."""
    wb = build_workbook(matrices)
    buf = io.BytesIO()
    wb.save(buf)
    wb.close()
    return buf.getvalue()
