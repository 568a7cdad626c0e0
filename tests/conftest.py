# tests/conftest.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.database.database import Base
from src.database import models  # noqa: F401  (테이블 등록)


@pytest.fixture
def db_session():
    """테스트마다 새로 만드는 인메모리 SQLite 세션."""
    # StaticPool로 같은 인메모리 DB를 모든 커넥션이 공유하도록 함
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
