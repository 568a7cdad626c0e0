import logging
from datetime import datetime
from typing import Dict, Any, List, Optional

from src.config import Settings, get_settings
from src.database import models
from src.repositories.interfaces import (
    IRecipeRepository, IIngredientRepository, ICommentRepository, IUserRepository
)
from src.schemas import (
    RecipeCreate, RecipeUpdate, CommentCreate,
    RecipeSummaryView, RecipeDetailView, CommentView, IngredientView
)
from src.services.exceptions import (
    RecipeNotFoundError, UserNotFoundError, IngredientNotFoundError, CommentNotFoundError,
    RecipeAlreadyExistsError, IngredientAlreadyExistsError, CommentAlreadyExistsError,
    PermissionDeniedError
)
from src.utils.image_validator import validate_image

logger = logging.getLogger(__name__)


class RecipeService:
    """레시피 작성/수정/삭제, 재료 연결, 댓글과 평점 관리 서비스를 제공합니다."""

    def __init__(self, recipe_repo: IRecipeRepository, ingredient_repo: IIngredientRepository,
                 comment_repo: ICommentRepository, user_repo: IUserRepository,
                 settings: Optional[Settings] = None):
        """
        RecipeService를 초기화합니다.

        Args:
            recipe_repo: 레시피 데이터에 접근하기 위한 리포지토리.
            ingredient_repo: 재료 데이터에 접근하기 위한 리포지토리.
            comment_repo: 댓글 데이터에 접근하기 위한 리포지토리.
            user_repo: 작성자(사용자) 조회용 리포지토리.
            settings: 이미지 크기 제한 등 설정. 생략하면 환경 설정을 사용합니다.
        """
        self.recipe_repo = recipe_repo
        self.ingredient_repo = ingredient_repo
        self.comment_repo = comment_repo
        self.user_repo = user_repo
        self.settings = settings or get_settings()

    # --- 조회 헬퍼 ---

    def _get_recipe_or_raise(self, recipe_id: int) -> models.Recipe:
        recipe = self.recipe_repo.find_by_id(recipe_id)
        if not recipe:
            raise RecipeNotFoundError(f"Recipe with id '{recipe_id}' not found.")
        return recipe

    def _get_user_or_raise(self, user_id: int) -> models.User:
        user = self.user_repo.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(f"User with id '{user_id}' not found.")
        return user

    def _get_ingredient_or_raise(self, ingredient_id: int) -> models.Ingredient:
        ingredient = self.ingredient_repo.find_by_id(ingredient_id)
        if not ingredient:
            raise IngredientNotFoundError(f"Ingredient with id '{ingredient_id}' not found.")
        return ingredient

    def _get_own_recipe(self, recipe_id: int, user_id: int) -> models.Recipe:
        """작성자 본인의 레시피만 반환합니다."""
        recipe = self._get_recipe_or_raise(recipe_id)
        if recipe.author is None or recipe.author.id != user_id:
            raise PermissionDeniedError(f"User '{user_id}' is not the author of recipe '{recipe_id}'.")
        return recipe

    # --- 레시피 ---

    def create_recipe(self, author_id: int, data: RecipeCreate) -> Dict[str, Any]:
        """
        새로운 레시피를 작성합니다. 슬러그가 없으면 저장 시점에 제목으로부터 생성됩니다.

        Raises:
            UserNotFoundError: 작성자를 찾을 수 없을 때.
            RecipeAlreadyExistsError: 동일한 제목의 레시피가 이미 존재할 때.
            IngredientNotFoundError: 지정한 재료 중 존재하지 않는 것이 있을 때.
        """
        author = self._get_user_or_raise(author_id)
        if self.recipe_repo.find_by_titre(data.titre):
            raise RecipeAlreadyExistsError(f"Recipe with titre '{data.titre}' already exists.")
        ingredients = [self._get_ingredient_or_raise(i) for i in data.ingredient_ids]

        recipe = models.Recipe(
            titre=data.titre,
            date=datetime.now(),
            description=data.description,
            etapes=data.etapes,
            types=data.types,
            preptime=data.preptime,
            cooktime=data.cooktime,
            portion=data.portion,
            img_recette=data.img_recette,
            slug=data.slug,
        )
        author.add_recipe(recipe)
        recipe.add_ingredients(ingredients)
        created_recipe = self.recipe_repo.create(recipe)
        logger.info("Recipe %s created by user %s.", created_recipe.id, author_id)
        return RecipeDetailView.model_validate(created_recipe).model_dump()

    def get_recipe(self, recipe_id: int) -> Dict[str, Any]:
        """
        ID로 레시피 상세 정보를 조회합니다.

        Raises:
            RecipeNotFoundError: 해당 ID의 레시피를 찾을 수 없을 때.
        """
        return RecipeDetailView.model_validate(self._get_recipe_or_raise(recipe_id)).model_dump()

    def get_recipe_by_slug(self, slug: str) -> Dict[str, Any]:
        recipe = self.recipe_repo.find_by_slug(slug)
        if not recipe:
            raise RecipeNotFoundError(f"Recipe with slug '{slug}' not found.")
        return RecipeDetailView.model_validate(recipe).model_dump()

    def list_recipes(self) -> List[Dict[str, Any]]:
        """모든 레시피를 최신순 요약 목록으로 조회합니다."""
        return [RecipeSummaryView.model_validate(r).model_dump() for r in self.recipe_repo.list_all()]

    def list_recipes_by_author(self, author_id: int) -> List[Dict[str, Any]]:
        self._get_user_or_raise(author_id)
        return [RecipeSummaryView.model_validate(r).model_dump() for r in self.recipe_repo.list_by_author(author_id)]

    def update_recipe(self, recipe_id: int, user_id: int, data: RecipeUpdate) -> Dict[str, Any]:
        """
        레시피를 수정합니다. 작성자만 수정할 수 있고, 전달된 필드만 반영됩니다.
        이미 설정된 슬러그는 제목이 바뀌어도 유지됩니다.

        Raises:
            RecipeNotFoundError: 해당 ID의 레시피를 찾을 수 없을 때.
            PermissionDeniedError: 작성자가 아닐 때.
            RecipeAlreadyExistsError: 바꾸려는 제목을 다른 레시피가 쓰고 있을 때.
        """
        recipe = self._get_own_recipe(recipe_id, user_id)
        changes = data.model_dump(exclude_unset=True)

        new_titre = changes.get("titre")
        if new_titre and new_titre != recipe.titre:
            existing = self.recipe_repo.find_by_titre(new_titre)
            if existing and existing is not recipe:
                raise RecipeAlreadyExistsError(f"Recipe with titre '{new_titre}' already exists.")

        for field, value in changes.items():
            # 필수 컬럼은 None으로 덮어쓰지 않음
            if value is None and field in ("titre", "etapes"):
                continue
            setattr(recipe, field, value)
        updated_recipe = self.recipe_repo.update(recipe)
        logger.info("Recipe %s updated by user %s.", recipe_id, user_id)
        return RecipeDetailView.model_validate(updated_recipe).model_dump()

    def update_recipe_image(self, recipe_id: int, user_id: int, img_recette: str,
                            content_type: str, size: int) -> Dict[str, Any]:
        """
        업로드 핸들러가 저장한 레시피 이미지의 참조를 기록합니다.

        Raises:
            ImageValidationError: png/jpeg/jpg/gif가 아니거나 크기 제한을 넘을 때.
        """
        recipe = self._get_own_recipe(recipe_id, user_id)
        validate_image(content_type, size, self.settings.MAX_IMAGE_SIZE_BYTES)
        recipe.img_recette = img_recette
        updated_recipe = self.recipe_repo.update(recipe)
        return RecipeDetailView.model_validate(updated_recipe).model_dump()

    def delete_recipe(self, recipe_id: int, user_id: int) -> bool:
        """
        레시피를 삭제합니다. 달린 댓글도 함께 삭제됩니다.

        Raises:
            RecipeNotFoundError: 해당 ID의 레시피를 찾을 수 없을 때.
            PermissionDeniedError: 작성자가 아닐 때.
        """
        recipe = self._get_own_recipe(recipe_id, user_id)
        self.recipe_repo.delete(recipe)
        logger.info("Recipe %s deleted by user %s.", recipe_id, user_id)
        return True

    # --- 재료 ---

    def create_ingredient(self, name: str) -> Dict[str, Any]:
        if self.ingredient_repo.find_by_name(name):
            raise IngredientAlreadyExistsError(f"Ingredient '{name}' already exists.")
        created = self.ingredient_repo.create(models.Ingredient(name=name))
        return IngredientView.model_validate(created).model_dump()

    def list_ingredients(self) -> List[Dict[str, Any]]:
        return [IngredientView.model_validate(i).model_dump() for i in self.ingredient_repo.list_all()]

    def add_ingredient(self, recipe_id: int, user_id: int, ingredient_id: int) -> Dict[str, Any]:
        """레시피에 재료를 연결합니다. 이미 연결된 재료면 아무 일도 일어나지 않습니다."""
        recipe = self._get_own_recipe(recipe_id, user_id)
        recipe.add_ingredient(self._get_ingredient_or_raise(ingredient_id))
        updated_recipe = self.recipe_repo.update(recipe)
        return RecipeDetailView.model_validate(updated_recipe).model_dump()

    def remove_ingredient(self, recipe_id: int, user_id: int, ingredient_id: int) -> Dict[str, Any]:
        """레시피와 재료의 연결을 양쪽 모두에서 끊습니다."""
        recipe = self._get_own_recipe(recipe_id, user_id)
        recipe.remove_ingredient(self._get_ingredient_or_raise(ingredient_id))
        updated_recipe = self.recipe_repo.update(recipe)
        return RecipeDetailView.model_validate(updated_recipe).model_dump()

    # --- 댓글 / 평점 ---

    def add_comment(self, recipe_id: int, user_id: int, data: CommentCreate) -> Dict[str, Any]:
        """
        레시피에 평점과 댓글을 남깁니다. 한 사용자는 레시피당 하나의 댓글만 남길 수 있습니다.

        Raises:
            RecipeNotFoundError: 해당 ID의 레시피를 찾을 수 없을 때.
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
            CommentAlreadyExistsError: 이미 이 레시피에 댓글을 남겼을 때.
        """
        recipe = self._get_recipe_or_raise(recipe_id)
        author = self._get_user_or_raise(user_id)
        if recipe.comment_from_author(author) is not None:
            raise CommentAlreadyExistsError(f"User '{user_id}' already commented on recipe '{recipe_id}'.")

        comment = models.Comment(rating=data.rating, content=data.content)
        author.add_comment(comment)
        recipe.add_comment(comment)
        self.recipe_repo.update(recipe)
        logger.info("User %s commented on recipe %s.", user_id, recipe_id)
        return CommentView.model_validate(comment).model_dump()

    def remove_comment(self, recipe_id: int, comment_id: int, user_id: int) -> bool:
        """
        댓글을 레시피와 작성자 양쪽 컬렉션에서 떼어냅니다. 떼어낸 댓글은 삭제됩니다.

        Raises:
            RecipeNotFoundError: 해당 ID의 레시피를 찾을 수 없을 때.
            CommentNotFoundError: 댓글이 없거나 이 레시피의 댓글이 아닐 때.
            PermissionDeniedError: 댓글 작성자가 아닐 때.
        """
        recipe = self._get_recipe_or_raise(recipe_id)
        comment = self.comment_repo.find_by_id(comment_id)
        if not comment or comment.recipe is not recipe:
            raise CommentNotFoundError(f"Comment '{comment_id}' not found on recipe '{recipe_id}'.")
        author = comment.author
        if author is None or author.id != user_id:
            raise PermissionDeniedError(f"User '{user_id}' is not the author of comment '{comment_id}'.")

        recipe.remove_comment(comment)
        author.remove_comment(comment)
        self.recipe_repo.update(recipe)
        logger.info("Comment %s removed from recipe %s.", comment_id, recipe_id)
        return True

    def list_comments(self, recipe_id: int) -> List[Dict[str, Any]]:
        """레시피에 달린 댓글을 작성순으로 조회합니다."""
        self._get_recipe_or_raise(recipe_id)
        return [CommentView.model_validate(c).model_dump() for c in self.comment_repo.list_by_recipe(recipe_id)]

    def average_rating(self, recipe_id: int) -> int:
        """레시피의 평균 평점 (댓글이 없으면 0)."""
        return self._get_recipe_or_raise(recipe_id).average_rating

    def comment_from_author(self, recipe_id: int, user_id: int) -> Optional[Dict[str, Any]]:
        """해당 사용자가 이 레시피에 남긴 댓글을 반환합니다. 없으면 None."""
        recipe = self._get_recipe_or_raise(recipe_id)
        author = self._get_user_or_raise(user_id)
        comment = recipe.comment_from_author(author)
        if comment is None:
            return None
        return CommentView.model_validate(comment).model_dump()
