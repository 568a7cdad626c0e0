from abc import ABC, abstractmethod
from typing import List, Optional
from src.database import models

class ICommentRepository(ABC):
    @abstractmethod
    def find_by_id(self, comment_id: int) -> Optional[models.Comment]:
        """고유 ID로 특정 댓글을 조회합니다."""
        pass

    @abstractmethod
    def list_by_recipe(self, recipe_id: int) -> List[models.Comment]:
        """특정 레시피에 달린 댓글을 작성순으로 조회합니다."""
        pass
