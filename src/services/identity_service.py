import hashlib
import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, List, Optional

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError

from src.config import Settings, get_settings
from src.database import models
from src.repositories.interfaces import IUserRepository
from src.schemas import UserRegister, UserUpdate, PasswordUpdate, UserView
from src.services.exceptions import (
    UserCreationError, UserNotFoundError, PasswordMismatchError,
    AuthenticationError, TokenInvalidError
)
from src.utils.image_validator import validate_image
from src.utils.jwt_claims import enrich_claims

logger = logging.getLogger(__name__)


class IdentityService:
    """회원 가입, 프로필 관리, 인증 토큰 발급 및 검증 서비스를 제공합니다."""

    def __init__(self, user_repo: IUserRepository, settings: Optional[Settings] = None):
        """
        IdentityService를 초기화합니다.

        Args:
            user_repo: 사용자 데이터에 접근하기 위한 리포지토리.
            settings: JWT 비밀키/만료 시간 등 설정. 생략하면 환경 설정을 사용합니다.
        """
        self.user_repo = user_repo
        self.settings = settings or get_settings()

    @staticmethod
    def _hash_password(password: str) -> str:
        return hashlib.sha256(password.encode('utf-8')).hexdigest()

    def _get_user_or_raise(self, user_id: int) -> models.User:
        user = self.user_repo.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(f"User with id '{user_id}' not found.")
        return user

    def register(self, data: UserRegister) -> Dict[str, Any]:
        """
        새로운 사용자를 등록합니다. 비밀번호는 해시하여 저장하고,
        슬러그는 저장 시점에 '이름 성 난수'로부터 생성됩니다.

        Raises:
            UserCreationError: 동일한 이메일의 사용자가 이미 존재할 때.
        """
        if self.user_repo.find_by_email(data.email):
            logger.warning("Registration rejected: email already in use.")
            raise UserCreationError(f"Email '{data.email}' is already in use.")

        new_user = models.User(
            email=data.email,
            roles=[],
            password=self._hash_password(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            picture=data.picture,
            presentation=data.presentation,
        )
        created_user = self.user_repo.create(new_user)
        logger.info("User %s registered (slug=%s).", created_user.id, created_user.slug)
        return UserView.model_validate(created_user).model_dump()

    def get_user(self, user_id: int) -> Dict[str, Any]:
        """
        ID로 특정 사용자를 조회합니다. (비밀번호 제외)

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
        """
        return UserView.model_validate(self._get_user_or_raise(user_id)).model_dump()

    def get_user_by_slug(self, slug: str) -> Dict[str, Any]:
        """슬러그로 특정 사용자를 조회합니다."""
        user = self.user_repo.find_by_slug(slug)
        if not user:
            raise UserNotFoundError(f"User with slug '{slug}' not found.")
        return UserView.model_validate(user).model_dump()

    def list_users(self) -> List[Dict[str, Any]]:
        """모든 사용자의 목록을 조회합니다. (비밀번호 제외)"""
        return [UserView.model_validate(u).model_dump() for u in self.user_repo.list_all()]

    def update_profile(self, user_id: int, data: UserUpdate) -> Dict[str, Any]:
        """이름, 소개글 등 프로필 정보를 수정합니다. 전달된 필드만 반영됩니다."""
        user = self._get_user_or_raise(user_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in ("first_name", "last_name"):
                continue
            setattr(user, field, value)
        updated_user = self.user_repo.update(user)
        logger.info("User %s updated profile.", user_id)
        return UserView.model_validate(updated_user).model_dump()

    def update_avatar(self, user_id: int, picture: str, content_type: str, size: int) -> Dict[str, Any]:
        """
        업로드 핸들러가 저장한 아바타 이미지의 참조를 사용자에게 기록합니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
            ImageValidationError: 이미지 형식이나 크기가 허용되지 않을 때.
        """
        user = self._get_user_or_raise(user_id)
        validate_image(content_type, size, self.settings.MAX_IMAGE_SIZE_BYTES)
        user.picture = picture
        updated_user = self.user_repo.update(user)
        return UserView.model_validate(updated_user).model_dump()

    def update_password(self, user_id: int, data: PasswordUpdate) -> bool:
        """
        기존 비밀번호를 확인한 뒤 새 비밀번호로 변경합니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
            PasswordMismatchError: 기존 비밀번호가 일치하지 않을 때.
        """
        user = self._get_user_or_raise(user_id)
        if user.password != self._hash_password(data.old_password):
            logger.warning("Password change rejected for user %s.", user_id)
            raise PasswordMismatchError("Current password is incorrect.")
        user.password = self._hash_password(data.new_password)
        self.user_repo.update(user)
        logger.info("User %s changed password.", user_id)
        return True

    def delete_user(self, user_id: int) -> bool:
        """
        사용자를 삭제합니다. 사용자가 작성한 레시피와 댓글도 함께 삭제됩니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
        """
        user = self._get_user_or_raise(user_id)
        self.user_repo.delete(user)
        logger.info("User %s deleted.", user_id)
        return True

    def build_claims(self, user: models.User, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        토큰에 담을 클레임을 만듭니다.
        표준 클레임(username, roles, iat, exp)에 프로필 정보를 덧붙입니다.
        """
        now = now or datetime.now(timezone.utc)
        base_claims = {
            "username": user.email,
            "roles": user.granted_roles,
            "iat": now,
            "exp": now + timedelta(minutes=self.settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES),
        }
        return enrich_claims(user, base_claims)

    def _encode(self, claims: Dict[str, Any]) -> str:
        return jwt.encode(dict(claims), self.settings.JWT_SECRET_KEY, algorithm=self.settings.JWT_ALGORITHM)

    def issue_token(self, user: models.User) -> str:
        """인증된 사용자에게 서명된 JWT를 발급합니다."""
        return self._encode(self.build_claims(user))

    def authenticate(self, email: str, password: str) -> Dict[str, str]:
        """
        자격증명을 검증하고, 성공 시 JWT를 발급합니다.

        Raises:
            AuthenticationError: 이메일 또는 비밀번호가 틀렸을 때.
        """
        user = self.user_repo.find_by_email(email)
        if not user or user.password != self._hash_password(password):
            logger.warning("Authentication failed.")
            raise AuthenticationError("Invalid email or password.")

        claims = self.build_claims(user)
        expires_at = claims["exp"]
        return {"token": self._encode(claims), "expires_at": expires_at.isoformat()}

    def validate_token(self, token: str) -> Dict[str, Any]:
        """
        JWT의 서명과 만료 시간을 검증하고, 유효하면 클레임을 반환합니다.

        Raises:
            TokenInvalidError: 토큰이 위조되었거나 만료되었을 때.
        """
        try:
            return jwt.decode(token, self.settings.JWT_SECRET_KEY, algorithms=[self.settings.JWT_ALGORITHM])
        except ExpiredSignatureError as e:
            logger.warning("Rejected expired token.")
            raise TokenInvalidError("Token has expired.") from e
        except JWTError as e:
            logger.warning("Rejected invalid token.")
            raise TokenInvalidError("Token not found or invalid.") from e
