"""
Parse the generation service's line-oriented reply into matrix tables.

Expected reply shape (requested by ``prompts.matrix``)::

    SECTION: <title>
    HEADERS: <col> ||| <col> ||| ...
    ROW: <cell> ||| <cell> ||| ...
    ROW: ...
    SECTION: <title>
    ...

The section marker is matched case-insensitively; the HEADERS / ROW
prefixes are matched case-sensitively at the start of a trimmed line.
Text before the first marker is ignored.

The lenient (default) mode never raises: a section without a HEADERS
line takes the caller's fallback headers, and every row is padded with
empty cells or truncated to the header count.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence

from dto.matrix import DEFAULT_MATRIX_TITLE, MatrixTable, normalize_row
from prompts.matrix import CELL_DELIMITER, HEADER_PREFIX, ROW_PREFIX, SECTION_MARKER

logger = logging.getLogger(__name__)

_SECTION_RE = re.compile(re.escape(SECTION_MARKER), re.IGNORECASE)
_HEADER_LINE_RE = re.compile(rf"^{re.escape(HEADER_PREFIX)}(?P<cells>.*)$")
_ROW_LINE_RE = re.compile(rf"^{re.escape(ROW_PREFIX)}(?P<cells>.*)$")


class MatrixFormatError(ValueError):
    """Raised in strict mode when a section does not match its headers."""


def _trim(text: str) -> str:
    # str.strip leaves a byte-order mark in place
    return text.strip().strip("\ufeff").strip()


def _split_cells(body: str) -> List[str]:
    return [_trim(cell) for cell in body.split(CELL_DELIMITER)]


def _section_bodies(raw_text: str) -> List[str]:
    # The first piece is whatever preceded the first marker.
    pieces = _SECTION_RE.split(raw_text or "")[1:]
    return [p for p in pieces if p.strip()]


def _parse_section(
    body: str,
    fallback_headers: Sequence[str],
    index: int,
    strict: bool,
) -> MatrixTable:
    # Only "\n" ends a line; "\r" is trimmed, and other separators that
    # str.splitlines honours (\u2028, \x85, \x0c, ...) stay inside cells.
    lines = [_trim(line) for line in body.split("\n")]
    lines = [line for line in lines if line]

    title = lines[0] if lines else DEFAULT_MATRIX_TITLE

    headers: Optional[List[str]] = None
    raw_rows: List[List[str]] = []
    for line in lines:
        if headers is None:
            m = _HEADER_LINE_RE.match(line)
            if m:
                headers = _split_cells(m.group("cells"))
                continue
        m = _ROW_LINE_RE.match(line)
        if m:
            raw_rows.append(_split_cells(m.group("cells")))

    if headers is None:
        if strict:
            raise MatrixFormatError(
                f"Section {index + 1} ({title!r}) has no {HEADER_PREFIX} line"
            )
        logger.debug(
            "  Section %d (%r): no header line, using %d fallback header(s)",
            index + 1,
            title,
            len(fallback_headers),
        )
        headers = list(fallback_headers)

    width = len(headers)
    if strict:
        for row_no, cells in enumerate(raw_rows, start=1):
            if len(cells) != width:
                raise MatrixFormatError(
                    f"Section {index + 1} ({title!r}) row {row_no} has "
                    f"{len(cells)} cell(s), expected {width}"
                )

    rows = [normalize_row(cells, width) for cells in raw_rows]
    return MatrixTable(title=title, headers=headers, rows=rows)


def parse_matrix_response(
    raw_text: str,
    fallback_headers: Sequence[str],
    *,
    strict: bool = False,
) -> List[MatrixTable]:
    """
    Rebuild the ordered list of tables contained in *raw_text*.

    Sections are returned in the order they appear; same-titled sections
    are kept separate.  An empty list means the reply held no section
    marker at all; callers decide whether that is an error.

    With ``strict=True`` a section missing its HEADERS line, or a row
    whose cell count differs from the header count, raises
    ``MatrixFormatError`` instead of being silently repaired.
    """
    bodies = _section_bodies(raw_text)
    tables = [
        _parse_section(body, fallback_headers, i, strict)
        for i, body in enumerate(bodies)
    ]
    logger.info(
        "  -> %d matrix table(s) parsed, %d row(s) total",
        len(tables),
        sum(len(t.rows) for t in tables),
    )
    return tables


def format_matrix_section(table: MatrixTable) -> str:
    """
    Render *table* back into the reply format.

    Parsing the result yields the same headers and rows, provided no cell
    contains the delimiter or a line break.
    """
    lines = [f"{SECTION_MARKER} {table.title}"]
    lines.append(f"{HEADER_PREFIX} " + f" {CELL_DELIMITER} ".join(table.headers))
    for row in table.rows:
        lines.append(f"{ROW_PREFIX} " + f" {CELL_DELIMITER} ".join(row))
    return "\n".join(lines)
