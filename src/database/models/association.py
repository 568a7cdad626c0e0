from sqlalchemy import Column, Integer, ForeignKey, Table
from ..database import Base

# 레시피(Recipe)와 재료(Ingredient) 사이의 다대다(many-to-many) 관계를 연결하는 연관 테이블입니다.
# 한 레시피는 여러 재료를 쓰고, 한 재료는 여러 레시피에 쓰입니다.
recipe_ingredients = Table(
    "recipe_ingredients",
    Base.metadata,
    Column("recipe_id", Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True),
    Column("ingredient_id", Integer, ForeignKey("ingredients.id", ondelete="CASCADE"), primary_key=True),
)
