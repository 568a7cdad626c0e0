# tests/repositories/test_sqlalchemy_repositories.py
import pytest
from datetime import datetime, timedelta
from unittest.mock import patch
from sqlalchemy.exc import IntegrityError

from src.database import models
from src.repositories.sqlalchemy import (
    SqlalchemyUserRepository, SqlalchemyRecipeRepository,
    SqlalchemyIngredientRepository, SqlalchemyCommentRepository,
)
from src.services.exceptions import SlugGenerationError
from tests.factories import make_user, make_recipe, make_comment

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def user_repo(db_session) -> SqlalchemyUserRepository:
    return SqlalchemyUserRepository(db_session, slug_max_attempts=3)

@pytest.fixture
def recipe_repo(db_session) -> SqlalchemyRecipeRepository:
    return SqlalchemyRecipeRepository(db_session)

@pytest.fixture
def ingredient_repo(db_session) -> SqlalchemyIngredientRepository:
    return SqlalchemyIngredientRepository(db_session)

@pytest.fixture
def comment_repo(db_session) -> SqlalchemyCommentRepository:
    return SqlalchemyCommentRepository(db_session)

@pytest.fixture
def author(user_repo) -> models.User:
    return user_repo.create(make_user())

@pytest.fixture
def recipe(recipe_repo, author) -> models.Recipe:
    recipe = make_recipe()
    author.add_recipe(recipe)
    return recipe_repo.create(recipe)

# ===================================================================
#  사용자 저장소 테스트
# ===================================================================
class TestUserRepository:
    def test_create_generates_salted_slug(self, user_repo):
        """저장 시 비어 있는 슬러그가 '이름-성-난수' 형태로 생성됩니다."""
        user = user_repo.create(make_user())

        assert user.id is not None
        assert user.slug.startswith("ada-lovelace-")
        assert user.slug != "ada-lovelace-"

    def test_same_names_do_not_collide(self, user_repo):
        first = user_repo.create(make_user(email="ada1@example.com"))
        second = user_repo.create(make_user(email="ada2@example.com"))

        assert first.slug != second.slug

    def test_retries_when_generated_slug_is_taken(self, user_repo):
        # === Arrange ===
        # 시나리오: 두 번째 사용자의 첫 난수가 첫 번째 사용자와 같음
        with patch("src.database.models.user.random_salt", side_effect=[7, 7, 8]):
            first = user_repo.create(make_user(email="ada1@example.com"))
            # === Act ===
            second = user_repo.create(make_user(email="ada2@example.com"))

        # === Assert ===
        assert first.slug == "ada-lovelace-7"
        assert second.slug == "ada-lovelace-8"

    def test_gives_up_after_max_attempts(self, user_repo):
        with patch("src.database.models.user.random_salt", return_value=7):
            user_repo.create(make_user(email="ada1@example.com"))
            with pytest.raises(SlugGenerationError):
                user_repo.create(make_user(email="ada2@example.com"))

    def test_zero_max_attempts_is_respected(self, db_session):
        """0회 시도로 설정하면 기본값으로 대체되지 않고 곧바로 실패해야 합니다."""
        repo = SqlalchemyUserRepository(db_session, slug_max_attempts=0)

        assert repo.slug_max_attempts == 0
        with pytest.raises(SlugGenerationError):
            repo.create(make_user())

    def test_explicit_slug_is_never_overwritten(self, user_repo):
        user = user_repo.create(make_user(slug="la-comtesse"))
        assert user.slug == "la-comtesse"

        user.presentation = "Première programmeuse de l'histoire."
        updated = user_repo.update(user)
        assert updated.slug == "la-comtesse"

    def test_duplicate_email_raises_integrity_error(self, user_repo, db_session):
        user_repo.create(make_user())
        with pytest.raises(IntegrityError):
            user_repo.create(make_user())
        # 롤백 후에도 세션을 계속 사용할 수 있어야 함
        assert db_session.query(models.User).count() == 1

    def test_find_by_email_and_slug(self, user_repo, author):
        assert user_repo.find_by_email("ada.lovelace@example.com") is author
        assert user_repo.find_by_slug(author.slug) is author
        assert user_repo.find_by_email("nobody@example.com") is None

    def test_delete_cascades_recipes_and_comments(self, user_repo, recipe_repo, db_session, author, recipe):
        """사용자를 삭제하면 그의 레시피와 댓글도 삭제됩니다."""
        # === Arrange ===
        grace = user_repo.create(make_user("Grace", "Hopper"))
        other_recipe = make_recipe("Crème Brûlée")
        grace.add_recipe(other_recipe)
        recipe_repo.create(other_recipe)

        own_comment = make_comment(5)
        author.add_comment(own_comment)
        other_recipe.add_comment(own_comment)
        recipe_repo.update(other_recipe)

        # === Act ===
        user_repo.delete(author)

        # === Assert ===
        assert db_session.query(models.Recipe).all() == [other_recipe]
        assert db_session.query(models.Comment).count() == 0


# ===================================================================
#  레시피 저장소 테스트
# ===================================================================
class TestRecipeRepository:
    def test_create_generates_slug_from_title(self, recipe):
        assert recipe.slug == "tarte-aux-pommes"
        assert recipe.date is not None

    def test_find_by_titre_and_slug(self, recipe_repo, recipe):
        assert recipe_repo.find_by_titre("Tarte aux Pommes") is recipe
        assert recipe_repo.find_by_slug("tarte-aux-pommes") is recipe
        assert recipe_repo.find_by_titre("Quiche") is None

    def test_duplicate_titre_raises_integrity_error(self, recipe_repo, author, recipe):
        duplicate = make_recipe()
        author.add_recipe(duplicate)
        with pytest.raises(IntegrityError):
            recipe_repo.create(duplicate)

    def test_ingredients_persist_on_both_sides(self, recipe_repo, ingredient_repo, db_session, recipe):
        apple = ingredient_repo.create(models.Ingredient(name="Pommes"))

        recipe.add_ingredient(apple)
        recipe.add_ingredient(apple)
        recipe_repo.update(recipe)
        db_session.expire_all()

        assert [i.name for i in recipe.ingredients] == ["Pommes"]
        assert apple.recipes == [recipe]

    def test_removed_comment_is_deleted(self, recipe_repo, comment_repo, db_session, author, recipe):
        """레시피 컬렉션에서 제거된 댓글은 고아로 간주되어 삭제됩니다."""
        comment = make_comment(4)
        author.add_comment(comment)
        recipe.add_comment(comment)
        recipe_repo.update(recipe)
        comment_id = comment.id
        assert comment_repo.find_by_id(comment_id) is comment

        recipe.remove_comment(comment)
        recipe_repo.update(recipe)

        assert comment_repo.find_by_id(comment_id) is None
        assert recipe.comments == []

    def test_delete_recipe_deletes_comments_keeps_ingredients(self, recipe_repo, ingredient_repo, db_session, author, recipe):
        apple = ingredient_repo.create(models.Ingredient(name="Pommes"))
        recipe.add_ingredient(apple)
        comment = make_comment(3)
        author.add_comment(comment)
        recipe.add_comment(comment)
        recipe_repo.update(recipe)

        recipe_repo.delete(recipe)

        assert db_session.query(models.Comment).count() == 0
        assert ingredient_repo.find_by_name("Pommes") is not None
        assert apple.recipes == []

    def test_list_by_author(self, recipe_repo, user_repo, author, recipe):
        grace = user_repo.create(make_user("Grace", "Hopper"))
        assert recipe_repo.list_by_author(author.id) == [recipe]
        assert recipe_repo.list_by_author(grace.id) == []

    def test_list_all_newest_first_with_id_tiebreak(self, recipe_repo, author):
        """날짜 내림차순, 같은 날짜면 나중에 생성된(id가 큰) 레시피가 먼저 옵니다."""
        # === Arrange ===
        now = datetime(2024, 5, 1, 12, 0, 0)
        for titre, date in (("Old", now - timedelta(days=1)), ("New", now), ("Same", now)):
            item = make_recipe(titre, date=date)
            author.add_recipe(item)
            recipe_repo.create(item)

        # === Act ===
        titres = [r.titre for r in recipe_repo.list_all()]

        # === Assert ===
        assert titres == ["Same", "New", "Old"]

    def test_list_by_author_newest_first(self, recipe_repo, user_repo, author):
        grace = user_repo.create(make_user("Grace", "Hopper"))
        now = datetime(2024, 5, 1, 12, 0, 0)
        for titre, date, owner in (
            ("Quiche", now - timedelta(days=2), author),
            ("Crumble", now, author),
            ("Clafoutis", now - timedelta(days=1), grace),
        ):
            item = make_recipe(titre, date=date)
            owner.add_recipe(item)
            recipe_repo.create(item)

        assert [r.titre for r in recipe_repo.list_by_author(author.id)] == ["Crumble", "Quiche"]
        assert [r.titre for r in recipe_repo.list_by_author(grace.id)] == ["Clafoutis"]


class TestCommentRepository:
    def test_list_by_recipe(self, recipe_repo, comment_repo, user_repo, author, recipe):
        grace = user_repo.create(make_user("Grace", "Hopper"))
        first, second = make_comment(5), make_comment(3)
        author.add_comment(first)
        recipe.add_comment(first)
        grace.add_comment(second)
        recipe.add_comment(second)
        recipe_repo.update(recipe)

        assert comment_repo.list_by_recipe(recipe.id) == [first, second]


class TestIngredientRepository:
    def test_list_all_sorted_by_name(self, ingredient_repo):
        for name in ("Sucre", "Beurre", "Farine"):
            ingredient_repo.create(models.Ingredient(name=name))

        assert [i.name for i in ingredient_repo.list_all()] == ["Beurre", "Farine", "Sucre"]

    def test_duplicate_name_rolls_back(self, ingredient_repo, db_session):
        """중복 이름은 IntegrityError를 내고, 세션은 롤백되어 계속 사용할 수 있어야 합니다."""
        ingredient_repo.create(models.Ingredient(name="Pommes"))

        with pytest.raises(IntegrityError):
            ingredient_repo.create(models.Ingredient(name="Pommes"))

        created = ingredient_repo.create(models.Ingredient(name="Poires"))
        assert created.id is not None
        assert db_session.query(models.Ingredient).count() == 2
