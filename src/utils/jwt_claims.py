# src/utils/jwt_claims.py
from typing import Any, Dict, Mapping


def enrich_claims(user, claims: Mapping[str, Any]) -> Dict[str, Any]:
    """
    토큰 발급 시점에 기본 클레임에 사용자 프로필 정보를 덧붙입니다.

    입력 매핑은 변경하지 않고 새 딕셔너리를 반환합니다.
    picture, presentation이 비어 있어도 키는 항상 포함됩니다 (값은 None).

    Args:
        user: 인증된 사용자 (models.User).
        claims: 표준 신원 클레임이 이미 들어 있는 기본 페이로드.

    Returns:
        id, firstName, lastName, picture, presentation, email이 추가된 페이로드.
    """
    data = dict(claims)
    data["id"] = user.id
    data["firstName"] = user.first_name
    data["lastName"] = user.last_name
    data["picture"] = user.picture
    data["presentation"] = user.presentation
    data["email"] = user.email
    return data
