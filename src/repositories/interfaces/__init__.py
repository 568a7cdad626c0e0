from .user import IUserRepository
from .recipe import IRecipeRepository
from .ingredient import IIngredientRepository
from .comment import ICommentRepository

__all__ = ["IUserRepository", "IRecipeRepository", "IIngredientRepository", "ICommentRepository"]
