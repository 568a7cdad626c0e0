from abc import ABC, abstractmethod
from typing import List, Optional
from src.database import models

class IUserRepository(ABC):
    @abstractmethod
    def create(self, user_model: models.User) -> models.User:
        """새로운 사용자를 데이터베이스에 생성합니다. 슬러그가 비어 있으면 먼저 생성합니다."""
        pass

    @abstractmethod
    def update(self, user_model: models.User) -> models.User:
        """변경된 사용자 정보를 데이터베이스에 반영합니다."""
        pass

    @abstractmethod
    def find_by_id(self, user_id: int) -> Optional[models.User]:
        """고유 ID로 특정 사용자를 조회합니다."""
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[models.User]:
        """이메일로 특정 사용자를 조회합니다."""
        pass

    @abstractmethod
    def find_by_slug(self, slug: str) -> Optional[models.User]:
        """슬러그로 특정 사용자를 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.User]:
        """모든 사용자의 목록을 조회합니다."""
        pass

    @abstractmethod
    def delete(self, user: models.User) -> bool:
        """특정 사용자를 삭제합니다. 작성한 레시피와 댓글도 함께 삭제됩니다."""
        pass
