from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from src.database import models
from src.repositories.interfaces import IIngredientRepository

class SqlalchemyIngredientRepository(IIngredientRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, ingredient_model: models.Ingredient) -> models.Ingredient:
        self.db.add(ingredient_model)
        self._commit()
        self.db.refresh(ingredient_model)
        return ingredient_model

    def find_by_id(self, ingredient_id: int) -> Optional[models.Ingredient]:
        return self.db.query(models.Ingredient).filter(models.Ingredient.id == ingredient_id).first()

    def find_by_name(self, name: str) -> Optional[models.Ingredient]:
        return self.db.query(models.Ingredient).filter(models.Ingredient.name == name).first()

    def list_all(self) -> List[models.Ingredient]:
        return self.db.query(models.Ingredient).order_by(models.Ingredient.name.asc()).all()

    def _commit(self):
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise

