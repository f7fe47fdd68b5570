from ai.service import AIService
from ai.factory import get_generation_service
from ai.response_parser import (
    MatrixFormatError,
    format_matrix_section,
    parse_matrix_response,
)

__all__ = [
    "AIService",
    "get_generation_service",
    "MatrixFormatError",
    "format_matrix_section",
    "parse_matrix_response",
]
