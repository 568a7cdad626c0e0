from .sqlalchemy_user_repository import SqlalchemyUserRepository
from .sqlalchemy_recipe_repository import SqlalchemyRecipeRepository
from .sqlalchemy_ingredient_repository import SqlalchemyIngredientRepository
from .sqlalchemy_comment_repository import SqlalchemyCommentRepository

__all__ = [
    "SqlalchemyUserRepository",
    "SqlalchemyRecipeRepository",
    "SqlalchemyIngredientRepository",
    "SqlalchemyCommentRepository",
]
