# tests/database/test_db_init.py
import hashlib

import pytest
from unittest.mock import patch
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.database import db_init, models
from tests.factories import make_user

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def bootstrap_session_factory():
    """db_init이 사용하는 engine/SessionLocal을 인메모리 SQLite로 바꿔치기합니다."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    with patch.object(db_init, "engine", engine), patch.object(db_init, "SessionLocal", factory):
        yield factory
    engine.dispose()

# ===================================================================
#  DB 초기화 테스트
# ===================================================================
class TestInitializeDb:
    def test_seeds_admin_and_default_ingredients(self, bootstrap_session_factory):
        """빈 DB에는 관리자 계정과 기본 재료가 삽입되어야 합니다."""
        # === Act ===
        db_init.initialize_db()

        # === Assert ===
        session = bootstrap_session_factory()
        try:
            admin = session.query(models.User).one()
            assert admin.email == "admin@example.com"
            assert admin.roles == ["ROLE_ADMIN"]
            assert admin.granted_roles == ["ROLE_ADMIN", "ROLE_USER"]
            assert admin.password == hashlib.sha256(b"admin").hexdigest()
            assert admin.slug.startswith("admin-cuisine-")

            names = sorted(i.name for i in session.query(models.Ingredient).all())
            assert names == sorted(db_init.DEFAULT_INGREDIENTS)
        finally:
            session.close()

    def test_running_twice_does_not_duplicate_seed(self, bootstrap_session_factory):
        db_init.initialize_db()
        db_init.initialize_db()

        session = bootstrap_session_factory()
        try:
            assert session.query(models.User).count() == 1
            assert session.query(models.Ingredient).count() == len(db_init.DEFAULT_INGREDIENTS)
        finally:
            session.close()

    def test_skips_seed_when_users_exist(self, bootstrap_session_factory):
        """사용자가 이미 있으면 기본 데이터를 넣지 않습니다."""
        # === Arrange ===
        db_init.Base.metadata.create_all(bind=db_init.engine)
        session = bootstrap_session_factory()
        session.add(make_user(slug="ada-lovelace-1"))
        session.commit()
        session.close()

        # === Act ===
        db_init.initialize_db()

        # === Assert ===
        session = bootstrap_session_factory()
        try:
            assert [u.email for u in session.query(models.User).all()] == ["ada.lovelace@example.com"]
            assert session.query(models.Ingredient).count() == 0
        finally:
            session.close()
