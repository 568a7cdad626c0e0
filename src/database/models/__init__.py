from .association import recipe_ingredients
from .user import User
from .recipe import Recipe
from .ingredient import Ingredient
from .comment import Comment

__all__ = ["recipe_ingredients", "User", "Recipe", "Ingredient", "Comment"]
