"""
Tests for MatrixPipeline: validation, error taxonomy, single-flight guard.
"""
import threading

import pytest

from conftest import BlockingAIService, FakeAIService
from dto.matrix import MatrixRequest, ReferenceFile
from pipeline import (
    EmptyResultError,
    GenerationError,
    GenerationInProgressError,
    MatrixError,
    MatrixPipeline,
    MissingReferenceError,
)


def _request(**overrides):
    values = dict(
        reference_text="Bài 1: Đọc hiểu. Bài 2: Viết.",
        template_structure="STT, Nội dung; Số câu",
    )
    values.update(overrides)
    return MatrixRequest(**values)


class TestValidation:

    def test_no_reference_material_fails_before_network(self, fake_service):
        pipeline = MatrixPipeline(fake_service)

        with pytest.raises(MissingReferenceError) as exc_info:
            pipeline.run(_request(reference_text="   "))

        assert fake_service.prompts == []
        assert "tư liệu tham chiếu" in exc_info.value.message

    def test_file_text_alone_is_enough(self, fake_service):
        request = _request(
            reference_text="",
            reference_files=[ReferenceFile(name="a.txt", text_content="Nội dung")],
        )
        matrices = MatrixPipeline(fake_service).run(request)

        assert len(matrices) == 2

    def test_files_without_text_do_not_count(self, fake_service):
        request = _request(
            reference_text="",
            reference_files=[ReferenceFile(name="empty.pdf", text_content="  \n")],
        )
        with pytest.raises(MissingReferenceError):
            MatrixPipeline(fake_service).run(request)


class TestRun:

    def test_prompt_contains_columns_instructions_and_material(self, fake_service):
        request = _request(
            custom_instructions="Tỉ lệ 7/3",
            reference_files=[
                ReferenceFile(name="a.txt", text_content="FILE-A"),
                ReferenceFile(name="b.txt", text_content="FILE-B"),
            ],
        )
        MatrixPipeline(fake_service).run(request)

        prompt = fake_service.prompts[0]
        assert "STT | Nội dung | Số câu" in prompt
        assert '"Tỉ lệ 7/3"' in prompt
        assert "Bài 1: Đọc hiểu." in prompt
        assert "FILE-A\n\nFILE-B" in prompt

    def test_template_headers_are_the_fallback(self):
        service = FakeAIService("SECTION: Only\nROW: 1 ||| a")
        matrices = MatrixPipeline(service).run(_request())

        assert matrices[0].headers == ["STT", "Nội dung", "Số câu"]
        assert matrices[0].rows == [["1", "a", ""]]

    def test_service_exception_becomes_generation_error(self):
        service = FakeAIService(error=RuntimeError("quota exceeded"))

        with pytest.raises(GenerationError) as exc_info:
            MatrixPipeline(service).run(_request())

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "quota" not in exc_info.value.message

    def test_blank_reply_is_generation_error(self):
        with pytest.raises(GenerationError):
            MatrixPipeline(FakeAIService("  \n")).run(_request())

    def test_reply_without_sections_is_empty_result(self):
        service = FakeAIService("Xin lỗi, tôi không thể giúp.")

        with pytest.raises(EmptyResultError) as exc_info:
            MatrixPipeline(service).run(_request())

        assert "kiểm tra lại tư liệu" in exc_info.value.message

    def test_all_errors_share_a_base(self):
        for cls in (MissingReferenceError, GenerationInProgressError,
                    GenerationError, EmptyResultError):
            assert issubclass(cls, MatrixError)


class TestSingleFlight:

    def test_second_request_rejected_while_first_in_flight(self):
        service = BlockingAIService()
        pipeline = MatrixPipeline(service)
        results = {}

        def _first():
            results["first"] = pipeline.run(_request())

        worker = threading.Thread(target=_first)
        worker.start()
        assert service.entered.wait(timeout=5)
        assert pipeline.busy

        with pytest.raises(GenerationInProgressError):
            pipeline.run(_request())

        service.release.set()
        worker.join(timeout=5)

        assert len(results["first"]) == 2
        assert not pipeline.busy

    def test_guard_released_after_failure(self):
        service = FakeAIService(error=RuntimeError("boom"))
        pipeline = MatrixPipeline(service)

        with pytest.raises(GenerationError):
            pipeline.run(_request())

        assert not pipeline.busy
        service.error = None
        assert len(pipeline.run(_request())) == 2
