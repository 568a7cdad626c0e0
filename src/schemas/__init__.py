from .user import UserRegister, UserUpdate, PasswordUpdate, AuthorView, UserView
from .recipe import (
    RecipeCreate, RecipeUpdate, CommentCreate,
    IngredientView, CommentView, RecipeSummaryView, RecipeDetailView,
)
