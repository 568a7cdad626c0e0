from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from ..database import Base
from .association import recipe_ingredients


class Ingredient(Base):
    """
    레시피에 사용되는 재료(식재료/상품)를 나타냅니다.
    레시피와의 다대다 관계에서 역방향(recipes) 컬렉션을 가집니다.
    """
    __tablename__ = "ingredients"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False, index=True)

    recipes = relationship("Recipe", secondary=recipe_ingredients, back_populates="ingredients")

    def add_recipe(self, recipe):
        if recipe not in self.recipes:
            self.recipes.append(recipe)
            recipe.add_ingredient(self)
        return self

    def remove_recipe(self, recipe):
        if recipe in self.recipes:
            self.recipes.remove(recipe)
            recipe.remove_ingredient(self)
        return self

    def __str__(self):
        return self.name
