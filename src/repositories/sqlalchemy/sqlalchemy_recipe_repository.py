from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from src.database import models
from src.repositories.interfaces import IRecipeRepository

class SqlalchemyRecipeRepository(IRecipeRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, recipe_model: models.Recipe) -> models.Recipe:
        recipe_model.ensure_slug()
        self.db.add(recipe_model)
        self._commit()
        self.db.refresh(recipe_model)
        return recipe_model

    def update(self, recipe_model: models.Recipe) -> models.Recipe:
        recipe_model.ensure_slug()
        self._commit()
        self.db.refresh(recipe_model)
        return recipe_model

    def find_by_id(self, recipe_id: int) -> Optional[models.Recipe]:
        return self.db.query(models.Recipe).filter(models.Recipe.id == recipe_id).first()

    def find_by_titre(self, titre: str) -> Optional[models.Recipe]:
        return self.db.query(models.Recipe).filter(models.Recipe.titre == titre).first()

    def find_by_slug(self, slug: str) -> Optional[models.Recipe]:
        return self.db.query(models.Recipe).filter(models.Recipe.slug == slug).first()

    def list_all(self) -> List[models.Recipe]:
        return self.db.query(models.Recipe).order_by(models.Recipe.date.desc(), models.Recipe.id.desc()).all()

    def list_by_author(self, author_id: int) -> List[models.Recipe]:
        return (
            self.db.query(models.Recipe)
            .filter(models.Recipe.author_id == author_id)
            .order_by(models.Recipe.date.desc(), models.Recipe.id.desc())
            .all()
        )

    def delete(self, recipe: models.Recipe) -> bool:
        if recipe:
            self.db.delete(recipe)
            self.db.commit()
            return True
        return False

    def _commit(self):
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
