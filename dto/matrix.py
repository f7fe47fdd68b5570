"""
DTOs for the matrix generation flow.

    MatrixRequest   — what the educator submitted (reference material,
                      column template, custom instructions)
    ReferenceFile   — extracted text of one uploaded file
    MatrixTable     — one reconstructed table ("matrix") from the LLM reply
    MatrixResult    — the full set of tables, used for export round-trips
"""

from __future__ import annotations

from typing import Any, List, Sequence

from pydantic import BaseModel, model_validator

from prompts.matrix import DEFAULT_TEMPLATE_STRUCTURE, parse_template_structure


DEFAULT_MATRIX_TITLE = "Ma trận"


def normalize_row(cells: Sequence[str], width: int) -> List[str]:
    """Right-pad *cells* with empty strings, or truncate, to exactly *width*."""
    row = list(cells[:width])
    row.extend([""] * (width - len(row)))
    return row


class MatrixTable(BaseModel):
    """
    A titled table with a fixed column count.

    Every row is padded or truncated to the header count on construction,
    so tables posted back by a client obey the same shape as parsed ones.
    """

    title: str = DEFAULT_MATRIX_TITLE
    headers: List[str] = []
    rows: List[List[str]] = []

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _fit_rows_to_headers(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        headers = data.get("headers") or []
        rows = data.get("rows")
        if not isinstance(headers, (list, tuple)) or not isinstance(rows, (list, tuple)):
            return data
        width = len(headers)
        fitted = [
            normalize_row(row, width) if isinstance(row, (list, tuple)) else row
            for row in rows
        ]
        return {**data, "rows": fitted}

    @property
    def num_columns(self) -> int:
        return len(self.headers)


class ReferenceFile(BaseModel):
    name: str
    text_content: str


class MatrixRequest(BaseModel):
    reference_text: str = ""
    reference_files: List[ReferenceFile] = []
    template_structure: str = DEFAULT_TEMPLATE_STRUCTURE
    custom_instructions: str = ""

    @property
    def headers(self) -> List[str]:
        """Column names declared by the template structure."""
        return parse_template_structure(self.template_structure)

    @property
    def has_reference_material(self) -> bool:
        if self.reference_text.strip():
            return True
        return any(f.text_content.strip() for f in self.reference_files)


class MatrixResult(BaseModel):
    matrices: List[MatrixTable] = []
