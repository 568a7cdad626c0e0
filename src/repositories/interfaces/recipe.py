from abc import ABC, abstractmethod
from typing import List, Optional
from src.database import models

class IRecipeRepository(ABC):
    @abstractmethod
    def create(self, recipe_model: models.Recipe) -> models.Recipe:
        """새로운 레시피를 데이터베이스에 생성합니다. 슬러그가 비어 있으면 먼저 생성합니다."""
        pass

    @abstractmethod
    def update(self, recipe_model: models.Recipe) -> models.Recipe:
        """
        변경된 레시피(재료/댓글 컬렉션 포함)를 데이터베이스에 반영합니다.
        컬렉션에서 제거된 댓글은 이 시점에 삭제됩니다.
        """
        pass

    @abstractmethod
    def find_by_id(self, recipe_id: int) -> Optional[models.Recipe]:
        """고유 ID로 특정 레시피를 조회합니다."""
        pass

    @abstractmethod
    def find_by_titre(self, titre: str) -> Optional[models.Recipe]:
        """제목으로 특정 레시피를 조회합니다."""
        pass

    @abstractmethod
    def find_by_slug(self, slug: str) -> Optional[models.Recipe]:
        """슬러그로 특정 레시피를 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.Recipe]:
        """모든 레시피를 최신순으로 조회합니다."""
        pass

    @abstractmethod
    def list_by_author(self, author_id: int) -> List[models.Recipe]:
        """특정 사용자가 작성한 레시피를 최신순으로 조회합니다."""
        pass

    @abstractmethod
    def delete(self, recipe: models.Recipe) -> bool:
        """특정 레시피를 삭제합니다. 달린 댓글도 함께 삭제됩니다."""
        pass
