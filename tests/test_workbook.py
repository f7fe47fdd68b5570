"""
Tests for the .xlsx exporter.
"""
import io

import openpyxl
import pytest

from dto.matrix import MatrixTable
from utils.workbook import build_workbook, export_matrices_xlsx, sheet_title


def _matrix(title, rows=None):
    return MatrixTable(title=title, headers=["STT", "Nội dung"], rows=rows or [["1", "Đọc"]])


class TestSheetTitle:

    def test_truncated_to_thirty_characters(self):
        assert sheet_title("x" * 40, 0) == "x" * 30

    def test_illegal_characters_removed(self):
        assert sheet_title("MA TRẬN: ĐỌC [1/2]?*\\", 0) == "MA TRẬN ĐỌC 12"

    def test_truncation_happens_before_stripping(self):
        title = "a" * 29 + ":b"
        assert sheet_title(title, 0) == "a" * 29

    def test_empty_name_falls_back(self):
        assert sheet_title("[]", 2) == "Sheet3"


class TestExport:

    def test_one_sheet_per_matrix_with_headers_first(self):
        matrices = [
            _matrix("MA TRẬN ĐỌC", [["1", "Thơ"], ["2", "Truyện"]]),
            _matrix("MA TRẬN VIẾT"),
        ]
        data = export_matrices_xlsx(matrices)

        wb = openpyxl.load_workbook(io.BytesIO(data))
        assert wb.sheetnames == ["MA TRẬN ĐỌC", "MA TRẬN VIẾT"]
        rows = list(wb["MA TRẬN ĐỌC"].iter_rows(values_only=True))
        assert rows == [("STT", "Nội dung"), ("1", "Thơ"), ("2", "Truyện")]
        assert wb["MA TRẬN ĐỌC"]["A1"].font.b

    def test_duplicate_titles_get_unique_sheet_names(self):
        wb = build_workbook([_matrix("Dup"), _matrix("Dup")])

        assert len(wb.sheetnames) == 2
        assert len(set(wb.sheetnames)) == 2
        assert wb.sheetnames[0] == "Dup"

    def test_nothing_to_export(self):
        with pytest.raises(ValueError):
            export_matrices_xlsx([])
