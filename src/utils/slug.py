# src/utils/slug.py
import random

from slugify import slugify

# 32비트 부호 있는 정수의 최댓값
SALT_MAX = 2 ** 31 - 1


def make_slug(source: str) -> str:
    """
    문자열을 URL에 안전한 슬러그로 변환합니다.
    소문자화, 비 ASCII 문자 음역, 공백/구두점을 하이픈 하나로 축약, 양 끝 하이픈 제거.

    예: "Tarte aux Pommes!" -> "tarte-aux-pommes"
    """
    return slugify(source or "")


def random_salt() -> int:
    """사용자 슬러그에 덧붙일 난수를 반환합니다."""
    return random.randint(0, SALT_MAX)
