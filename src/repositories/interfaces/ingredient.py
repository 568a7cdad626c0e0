from abc import ABC, abstractmethod
from typing import List, Optional
from src.database import models

class IIngredientRepository(ABC):
    @abstractmethod
    def create(self, ingredient_model: models.Ingredient) -> models.Ingredient:
        """새로운 재료를 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def find_by_id(self, ingredient_id: int) -> Optional[models.Ingredient]:
        """고유 ID로 특정 재료를 조회합니다."""
        pass

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[models.Ingredient]:
        """이름으로 특정 재료를 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.Ingredient]:
        """모든 재료의 목록을 이름순으로 조회합니다."""
        pass
