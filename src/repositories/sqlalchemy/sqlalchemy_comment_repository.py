from typing import List, Optional
from sqlalchemy.orm import Session
from src.database import models
from src.repositories.interfaces import ICommentRepository

class SqlalchemyCommentRepository(ICommentRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def find_by_id(self, comment_id: int) -> Optional[models.Comment]:
        return self.db.query(models.Comment).filter(models.Comment.id == comment_id).first()

    def list_by_recipe(self, recipe_id: int) -> List[models.Comment]:
        return (
            self.db.query(models.Comment)
            .filter(models.Comment.recipe_id == recipe_id)
            .order_by(models.Comment.created_at.asc(), models.Comment.id.asc())
            .all()
        )
