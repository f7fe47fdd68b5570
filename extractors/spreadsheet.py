"""
Spreadsheet extractors: the first worksheet rendered as CSV text.

    .xlsx  — openpyxl
    .xls   — xlrd (legacy BIFF workbooks)
"""

from __future__ import annotations

import csv
import datetime as dt
import io
import logging
from typing import Any, Iterable, List

import openpyxl
import xlrd

from extractors.base import BaseDocumentExtractor

logger = logging.getLogger(__name__)


def _format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return value.isoformat()
    return str(value)


def rows_to_csv(rows: Iterable[Iterable[Any]]) -> str:
    """Serialise rows of cell values as CSV (``\\n`` line endings)."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    for row in rows:
        writer.writerow([_format_cell(v) for v in row])
    return buf.getvalue()


class XlsxExtractor(BaseDocumentExtractor):
    extensions = ("xlsx",)

    def extract(self, data: bytes) -> str:
        wb = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
        try:
            ws = wb[wb.sheetnames[0]]
            logger.debug("  [XLSX] Reading first sheet '%s'", ws.title)
            return rows_to_csv(ws.iter_rows(values_only=True))
        finally:
            wb.close()


class XlsExtractor(BaseDocumentExtractor):
    extensions = ("xls",)

    def extract(self, data: bytes) -> str:
        book = xlrd.open_workbook(file_contents=data)
        sheet = book.sheet_by_index(0)
        logger.debug("  [XLS] Reading first sheet '%s'", sheet.name)

        rows: List[List[Any]] = []
        for r in range(sheet.nrows):
            row: List[Any] = []
            for c in range(sheet.ncols):
                cell = sheet.cell(r, c)
                if cell.ctype == xlrd.XL_CELL_DATE:
                    row.append(xlrd.xldate_as_datetime(cell.value, book.datemode))
                elif cell.ctype == xlrd.XL_CELL_BOOLEAN:
                    row.append(bool(cell.value))
                elif cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
                    row.append(None)
                else:
                    row.append(cell.value)
            rows.append(row)
        return rows_to_csv(rows)
