# src/utils/image_validator.py
from typing import Optional

from src.config import get_settings
from src.services.exceptions import ImageValidationError

ALLOWED_MIME_TYPES = frozenset({"image/png", "image/jpeg", "image/jpg", "image/gif"})


def validate_image(content_type: str, size: int, max_size: Optional[int] = None) -> None:
    """
    업로드된 이미지의 MIME 타입과 크기를 검사합니다.

    Args:
        content_type: 업로드 핸들러가 판별한 MIME 타입.
        size: 파일 크기 (바이트).
        max_size: 허용 최대 크기. 생략하면 설정의 MAX_IMAGE_SIZE_BYTES를 사용합니다.

    Raises:
        ImageValidationError: 허용되지 않은 형식이거나 파일이 너무 클 때.
    """
    if max_size is None:
        max_size = get_settings().MAX_IMAGE_SIZE_BYTES

    if (content_type or "").lower() not in ALLOWED_MIME_TYPES:
        raise ImageValidationError("You must upload a jpg, png or gif file.")
    if size > max_size:
        raise ImageValidationError(f"File is too large ({size} bytes, max {max_size}).")
