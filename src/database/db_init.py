import hashlib
import logging
from .database import engine, SessionLocal, Base
from .models import *
from src.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_INGREDIENTS = ["Farine", "Sucre", "Beurre", "Oeufs", "Lait", "Pommes", "Sel"]

def initialize_db():
    """
    DB와 테이블을 생성하고, 기본 데이터를 삽입합니다.
    SQLAlchemy 모델을 사용하여 모든 작업을 수행합니다.
    """
    logger.info("Initializing database...")

    # 모든 테이블을 생성합니다. (이미 존재하면 생성하지 않음)
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created.")

    db = SessionLocal()
    try:
        # 기본 데이터가 이미 있는지 확인
        if db.query(User).first():
            logger.info("Seed data already present, skipping.")
            return

        logger.info("Inserting seed data...")

        # Admin user
        password_hash = hashlib.sha256('admin'.encode('utf-8')).hexdigest()
        admin_user = User(
            email='admin@example.com',
            roles=['ROLE_ADMIN'],
            password=password_hash,
            first_name='Admin',
            last_name='Cuisine',
        )
        admin_user.ensure_slug()
        db.add(admin_user)

        # Ingredients
        for name in DEFAULT_INGREDIENTS:
            db.add(Ingredient(name=name))

        db.commit()
        logger.info("Database initialized.")

    except Exception:
        logger.exception("Database initialization failed.")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == '__main__':
    logging.basicConfig(level=get_settings().LOG_LEVEL)
    initialize_db()
