"""
Utility to render a MatrixTable into an HTML <table> string.
"""

from __future__ import annotations

from typing import List

from markupsafe import escape

from dto.matrix import MatrixTable


def render_matrix_html(matrix: MatrixTable) -> str:
    """
    Render headers / rows into an HTML ``<table>`` string.  All text is
    escaped.
    """
    parts: List[str] = ['<table class="matrix" border="1" cellpadding="5" cellspacing="0">']

    # <thead>
    if matrix.headers:
        parts.append("  <thead>")
        parts.append("    <tr>")
        for header in matrix.headers:
            parts.append(f"      <th>{escape(header)}</th>")
        parts.append("    </tr>")
        parts.append("  </thead>")

    # <tbody>
    if matrix.rows:
        parts.append("  <tbody>")
        for row in matrix.rows:
            parts.append("    <tr>")
            for cell in row:
                parts.append(f"      <td>{escape(cell)}</td>")
            parts.append("    </tr>")
        parts.append("  </tbody>")

    parts.append("</table>")
    return "\n".join(parts)
