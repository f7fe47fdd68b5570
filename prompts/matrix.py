"""
Prompt for the specification-matrix generator.

The reply format requested here (SECTION / HEADERS / ROW lines with
``|||`` separated cells) is the one ``ai.response_parser`` reads back.
"""

from __future__ import annotations

import re
from typing import Iterable, List

SECTION_MARKER = "SECTION:"
HEADER_PREFIX = "HEADERS:"
ROW_PREFIX = "ROW:"
CELL_DELIMITER = "|||"

DEFAULT_TEMPLATE_STRUCTURE = (
    "STT, Nội dung kiến thức, Đơn vị kiến thức, Chuẩn cần đánh giá, "
    "Nhận biết (Số câu), Thông hiểu (Số câu), Vận dụng (Số câu), "
    "Vận dụng cao (Số câu), Tổng số câu, Ghi chú"
)

DEFAULT_CUSTOM_INSTRUCTIONS = "Ưu tiên độ phủ 100% kiến thức."

_TEMPLATE_SPLIT_RE = re.compile(r"[,;\t\n]")


def parse_template_structure(text: str) -> List[str]:
    """Split a free-form column template into trimmed, non-empty names."""
    return [s.strip() for s in _TEMPLATE_SPLIT_RE.split(text or "") if s.strip()]


def get_matrix_generation_prompt(
    headers: List[str],
    custom_instructions: str,
    reference_text: str,
    file_texts: Iterable[str],
) -> str:
    instructions = custom_instructions.strip() or DEFAULT_CUSTOM_INSTRUCTIONS
    columns = " | ".join(headers)
    files_text = "\n\n".join(file_texts)
    return f"""BẠN LÀ CHUYÊN GIA KHẢO THÍ VÀ XÂY DỰNG CHƯƠNG TRÌNH GIÁO DỤC CẤP CAO.
NHIỆM VỤ TỐI THƯỢNG: Lập Ma trận đặc tả ĐỀ KIỂM TRA ĐẦY ĐỦ 100% NỘI DUNG từ tư liệu tham chiếu.

QUY TẮC CỐ ĐỊNH (KHÔNG ĐƯỢC THAY ĐỔI):
1. PHÂN TÁCH TUYỆT ĐỐI 2 PHẦN: Ma trận phải có đủ: "MA TRẬN ĐỌC" và "MA TRẬN VIẾT".
2. CAM KẾT ĐẦY ĐỦ 100%:
   - Bạn PHẢI quét từng dòng trong tư liệu tham chiếu.
   - Mỗi đơn vị kiến thức, mỗi kỹ năng, mỗi bài học xuất hiện trong tư liệu PHẢI được chuyển hóa thành một dòng (ROW) trong ma trận.
   - TUYỆT ĐỐI KHÔNG ĐƯỢC tóm tắt gộp, không bỏ sót bất kỳ chi tiết nào.
3. THIẾT LẬP NỘI DUNG TỰ ĐỘNG CHUẨN XÁC:
   - Tự động điền "Chuẩn cần đánh giá" khớp với yêu cầu cần đạt của chương trình.
   - Tự động tính toán "Số câu" cho các mức độ Nhận biết, Thông hiểu, Vận dụng, Vận dụng cao sao cho tổng điểm và tỉ lệ logic với cấu trúc đề thi phổ thông hiện hành.
4. THỰC HIỆN YÊU CẦU RIÊNG BIỆT (NẾU CÓ):
   "{instructions}"

5. CẤU TRÚC CỘT (GIỮ NGUYÊN KHUNG):
   {columns}

ĐỊNH DẠNG ĐẦU RA BẮT BUỘC:
{SECTION_MARKER} [Tên phần - VD: MA TRẬN ĐỌC]
{HEADER_PREFIX} [Danh sách cột cách nhau bằng {CELL_DELIMITER}]
{ROW_PREFIX} [Nội dung chi tiết từng cột cách nhau bằng {CELL_DELIMITER}]
... (lặp lại cho mọi dòng kiến thức)
{SECTION_MARKER} [Tên phần - VD: MA TRẬN VIẾT]
{HEADER_PREFIX} [Danh sách cột cách nhau bằng {CELL_DELIMITER}]
{ROW_PREFIX} [Nội dung chi tiết từng cột cách nhau bằng {CELL_DELIMITER}]

TƯ LIỆU THAM CHIẾU (PHẢI QUÉT 100%):
{reference_text}
{files_text}
"""
