"""
Matrix generation pipeline.

One user action runs, in order:
  1. input validation   — some reference material must be present
  2. prompt building    — template columns + instructions + reference text
  3. generation         — a single call to the AI service
  4. parsing            — SECTION / HEADERS / ROW reply → MatrixTable list

Only one generation may be outstanding per pipeline; a second request
while the first is in flight is rejected rather than queued.

Every failure surfaces as a ``MatrixError`` whose message is meant for
the user.  No partial results accompany an error.
"""

from __future__ import annotations

import logging
import threading
from typing import List, Optional

from ai.response_parser import parse_matrix_response
from ai.service import AIService
from dto.matrix import MatrixRequest, MatrixTable
from prompts.matrix import get_matrix_generation_prompt

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Errors
# -------------------------------------------------------------------


class MatrixError(Exception):
    """Base class for failures reported to the user."""

    default_message = "Lỗi xử lý hệ thống."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class MissingReferenceError(MatrixError):
    default_message = "Vui lòng nhập tư liệu tham chiếu."


class GenerationInProgressError(MatrixError):
    default_message = "Đang xử lý một yêu cầu khác. Vui lòng chờ."


class GenerationError(MatrixError):
    default_message = "Lỗi xử lý hệ thống."


class EmptyResultError(MatrixError):
    default_message = (
        "AI không thể khởi tạo dữ liệu. Vui lòng kiểm tra lại tư liệu đầu vào."
    )


# -------------------------------------------------------------------
# Pipeline
# -------------------------------------------------------------------


class MatrixPipeline:
    """
    Builds matrices from a ``MatrixRequest``.

    The AI service is injectable; when omitted it is created from the
    environment on first use.
    """

    def __init__(self, service: Optional[AIService] = None) -> None:
        self._service = service
        self._in_flight = threading.Lock()

    @property
    def service(self) -> AIService:
        if self._service is None:
            from ai.factory import get_generation_service

            self._service = get_generation_service()
        return self._service

    @property
    def busy(self) -> bool:
        return self._in_flight.locked()

    def build_prompt(self, request: MatrixRequest) -> str:
        return get_matrix_generation_prompt(
            headers=request.headers,
            custom_instructions=request.custom_instructions,
            reference_text=request.reference_text,
            file_texts=[f.text_content for f in request.reference_files],
        )

    def run(self, request: MatrixRequest) -> List[MatrixTable]:
        if not request.has_reference_material:
            raise MissingReferenceError()

        headers = request.headers
        prompt = self.build_prompt(request)
        logger.info(
            "Generating matrix: %d template column(s), %d reference file(s), %d-char prompt",
            len(headers),
            len(request.reference_files),
            len(prompt),
        )

        if not self._in_flight.acquire(blocking=False):
            logger.warning("Rejected generation request: another one is in flight")
            raise GenerationInProgressError()
        try:
            text = self._generate(prompt)
            matrices = parse_matrix_response(text, headers)
        finally:
            self._in_flight.release()

        if not matrices:
            logger.warning("Reply contained no sections: %s", text[:200])
            raise EmptyResultError()
        return matrices

    def _generate(self, prompt: str) -> str:
        try:
            text = self.service.get_decision(prompt)
        except Exception as exc:
            logger.exception("Generation call failed")
            raise GenerationError() from exc
        if not text or not text.strip():
            logger.warning("Generation returned no text")
            raise GenerationError()
        return text
