import logging
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from src.config import get_settings
from src.database import models
from src.repositories.interfaces import IUserRepository
from src.services.exceptions import SlugGenerationError

logger = logging.getLogger(__name__)

class SqlalchemyUserRepository(IUserRepository):
    def __init__(self, db_session: Session, slug_max_attempts: Optional[int] = None):
        self.db = db_session
        if slug_max_attempts is None:
            slug_max_attempts = get_settings().SLUG_MAX_ATTEMPTS
        self.slug_max_attempts = slug_max_attempts

    def create(self, user_model: models.User) -> models.User:
        self._assign_unique_slug(user_model)
        self.db.add(user_model)
        self._commit()
        self.db.refresh(user_model)
        return user_model

    def update(self, user_model: models.User) -> models.User:
        self._assign_unique_slug(user_model)
        self._commit()
        self.db.refresh(user_model)
        return user_model

    def find_by_id(self, user_id: int) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.id == user_id).first()

    def find_by_email(self, email: str) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.email == email).first()

    def find_by_slug(self, slug: str) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.slug == slug).first()

    def list_all(self) -> List[models.User]:
        return self.db.query(models.User).order_by(models.User.last_name.asc(), models.User.first_name.asc()).all()

    def delete(self, user: models.User) -> bool:
        if user:
            self.db.delete(user)
            self.db.commit()
            return True
        return False

    def _assign_unique_slug(self, user_model: models.User):
        # 명시적으로 지정된 슬러그는 덮어쓰지 않음
        if user_model.slug:
            return
        with self.db.no_autoflush:
            for attempt in range(1, self.slug_max_attempts + 1):
                user_model.ensure_slug()
                existing = self.find_by_slug(user_model.slug)
                if existing is None or existing is user_model:
                    return
                logger.debug("Slug '%s' already taken (attempt %d).", user_model.slug, attempt)
                user_model.slug = None
        raise SlugGenerationError(
            f"Could not generate a unique slug for '{user_model.full_name}' "
            f"after {self.slug_max_attempts} attempts."
        )

    def _commit(self):
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
