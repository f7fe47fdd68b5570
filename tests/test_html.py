from dto.matrix import MatrixTable
from utils.html import render_matrix_html


def test_renders_headers_and_rows():
    html = render_matrix_html(
        MatrixTable(title="T", headers=["A", "B"], rows=[["1", "2"], ["3", ""]])
    )

    assert html.count("<th>") == 2
    assert html.count("<tr>") == 3
    assert "<td>3</td>" in html
    assert "<td></td>" in html


def test_escapes_cell_text():
    html = render_matrix_html(
        MatrixTable(title="T", headers=["<b>"], rows=[['"x" & <y>']])
    )

    assert "<b>" not in html.replace("<table", "")
    assert "&lt;b&gt;" in html
    assert "&amp;" in html


def test_empty_table():
    html = render_matrix_html(MatrixTable(title="T"))
    assert "<thead>" not in html
    assert "<tbody>" not in html
