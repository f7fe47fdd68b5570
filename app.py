"""
Specification matrix builder — web front end and entry point.

Usage:
    python app.py [--host 0.0.0.0] [--port 8080] [--debug]

Routes:
    GET  /              input form
    POST /generate      extract uploads, generate, render matrices (HTML)
    POST /api/generate  same pipeline, JSON response
    POST /export        matrices JSON → .xlsx download
"""

from __future__ import annotations

import argparse
import io
import logging
import os
from typing import List, Optional, Tuple

import dotenv
from flask import Flask, jsonify, render_template_string, request, send_file
from pydantic import ValidationError

from dto.matrix import MatrixRequest, MatrixResult, MatrixTable
from extractors import ExtractorRegistry, extract_document_text, extract_reference_files
from pipeline import (
    EmptyResultError,
    GenerationError,
    GenerationInProgressError,
    MatrixError,
    MatrixPipeline,
    MissingReferenceError,
)
from prompts.matrix import DEFAULT_TEMPLATE_STRUCTURE
from utils.html import render_matrix_html
from utils.workbook import EXPORT_FILENAME, XLSX_MIMETYPE, export_matrices_xlsx

logger = logging.getLogger(__name__)

_DEFAULT_MAX_UPLOAD_MB = 25

_ERROR_STATUS = {
    MissingReferenceError: 400,
    GenerationInProgressError: 409,
    GenerationError: 502,
    EmptyResultError: 502,
}


PAGE = """
<!doctype html>
<html lang="vi">
<head>
  <meta charset="utf-8" />
  <title>Ma trận Đặc tả</title>
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <style>
    body { font-family: system-ui, sans-serif; max-width: 1200px; margin: 0 auto; padding: 24px; background: #f0f4f8; }
    section { background: #fff; border-radius: 10px; padding: 16px; margin-bottom: 16px; }
    textarea { width: 100%; min-height: 120px; }
    .error { background: #fff1f2; border-left: 8px solid #f43f5e; padding: 12px; }
    table.matrix { border-collapse: collapse; width: 100%; }
    table.matrix th { background: #eef2ff; }
    button:disabled { opacity: .5; }
  </style>
</head>
<body>
  <h1>Hệ thống Ma trận Đặc tả</h1>

  <form method="post" action="{{ url_for('generate') }}" enctype="multipart/form-data"
        onsubmit="this.querySelector('button[type=submit]').disabled = true;">
    <section>
      <h2>1. Tư liệu tham chiếu</h2>
      <input type="file" name="reference_files" multiple />
      <textarea name="reference_text">{{ form.reference_text }}</textarea>
      {% if file_names %}<p>Đã nạp: {{ file_names|join(", ") }}</p>{% endif %}
    </section>
    <section>
      <h2>2. Khung ma trận mẫu</h2>
      <input type="file" name="template_file" />
      <textarea name="template_structure">{{ form.template_structure }}</textarea>
    </section>
    <section>
      <h2>3. Yêu cầu tinh chỉnh</h2>
      <textarea name="custom_instructions">{{ form.custom_instructions }}</textarea>
    </section>
    <button type="submit">Thiết lập Ma trận</button>
  </form>

  {% if error %}
  <div class="error"><strong>Phát hiện lỗi xử lý</strong><p>{{ error }}</p></div>
  {% endif %}

  {% if matrices %}
  <form method="post" action="{{ url_for('export') }}">
    <input type="hidden" name="matrices" value="{{ matrices_json }}" />
    <button type="submit">Xuất file Excel (.xlsx)</button>
  </form>
  {% for matrix in matrices %}
  <section>
    <h3>{{ loop.index }}. {{ matrix.title }}</h3>
    {{ tables[loop.index0]|safe }}
  </section>
  {% endfor %}
  {% endif %}
</body>
</html>
"""


# -------------------------------------------------------------------
# Request helpers
# -------------------------------------------------------------------


def _read_uploads(field: str) -> List[Tuple[str, bytes]]:
    return [
        (f.filename, f.read())
        for f in request.files.getlist(field)
        if f and f.filename
    ]


def _template_from_upload(registry: Optional[ExtractorRegistry]) -> Optional[str]:
    """Text of the uploaded template file, or None if absent or unreadable."""
    upload = request.files.get("template_file")
    if not upload or not upload.filename:
        return None
    try:
        return extract_document_text(upload.filename, upload.read(), registry=registry)
    except Exception:
        logger.exception("Failed to extract template file '%s'", upload.filename)
        return None


def _build_request(registry: Optional[ExtractorRegistry]) -> MatrixRequest:
    files = extract_reference_files(_read_uploads("reference_files"), registry=registry)
    template = _template_from_upload(registry)
    if template is None:
        template = request.form.get("template_structure", DEFAULT_TEMPLATE_STRUCTURE)
    return MatrixRequest(
        reference_text=request.form.get("reference_text", ""),
        reference_files=files,
        template_structure=template,
        custom_instructions=request.form.get("custom_instructions", ""),
    )


def _run(pipeline: MatrixPipeline, matrix_request: MatrixRequest):
    """Return ``(matrices, error_message, status)``."""
    try:
        return pipeline.run(matrix_request), None, 200
    except MatrixError as exc:
        return [], exc.message, _ERROR_STATUS.get(type(exc), 500)


def _load_export_payload() -> MatrixResult:
    if request.is_json:
        return MatrixResult.model_validate(request.get_json())
    return MatrixResult.model_validate_json(request.form.get("matrices", ""))


# -------------------------------------------------------------------
# App factory
# -------------------------------------------------------------------


def create_app(
    pipeline: Optional[MatrixPipeline] = None,
    registry: Optional[ExtractorRegistry] = None,
) -> Flask:
    app = Flask(__name__)
    max_mb = int(os.getenv("MATRIX_MAX_UPLOAD_MB", str(_DEFAULT_MAX_UPLOAD_MB)))
    app.config["MAX_CONTENT_LENGTH"] = max_mb * 1024 * 1024
    app.secret_key = os.getenv("FLASK_SECRET_KEY", os.urandom(16))

    pipeline = pipeline or MatrixPipeline()

    def _render(form: MatrixRequest, matrices: List[MatrixTable], error: Optional[str]) -> str:
        return render_template_string(
            PAGE,
            form=form,
            file_names=[f.name for f in form.reference_files],
            matrices=matrices,
            tables=[render_matrix_html(m) for m in matrices],
            matrices_json=MatrixResult(matrices=matrices).model_dump_json(),
            error=error,
        )

    @app.route("/", methods=["GET"])
    def index():
        return _render(MatrixRequest(), [], None)

    @app.route("/generate", methods=["POST"])
    def generate():
        matrix_request = _build_request(registry)
        matrices, error, status = _run(pipeline, matrix_request)
        return _render(matrix_request, matrices, error), status

    @app.route("/api/generate", methods=["POST"])
    def api_generate():
        matrix_request = _build_request(registry)
        matrices, error, status = _run(pipeline, matrix_request)
        if error:
            return jsonify({"error": error}), status
        return jsonify(MatrixResult(matrices=matrices).model_dump())

    @app.route("/export", methods=["POST"])
    def export():
        try:
            result = _load_export_payload()
        except ValidationError as exc:
            logger.warning("Rejected export payload: %s", exc)
            return jsonify({"error": "Dữ liệu ma trận không hợp lệ."}), 400
        if not result.matrices:
            return jsonify({"error": "Không có ma trận để xuất."}), 400

        logger.info("Exporting %d matrix table(s)", len(result.matrices))
        return send_file(
            io.BytesIO(export_matrices_xlsx(result.matrices)),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=EXPORT_FILENAME,
        )

    return app


# -------------------------------------------------------------------
# CLI
# -------------------------------------------------------------------


def main() -> None:
    dotenv.load_dotenv()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )

    parser = argparse.ArgumentParser(
        description="Web tool that builds specification matrices from reference material.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", "8080")),
        help="Port to listen on (default: $PORT or 8080)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable the Flask debugger")
    args = parser.parse_args()

    app = create_app()
    # Werkzeug's dev server is threaded; the pipeline's single-flight
    # guard rejects overlapping generate requests.
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
