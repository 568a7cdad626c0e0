from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ..database import Base
from .association import recipe_ingredients
from src.utils.slug import make_slug


class Recipe(Base):
    """
    사용자가 작성한 요리 레시피입니다.
    조리 단계(etapes), 부가 정보, 재료(다대다), 댓글(일대다, 소유)을 가집니다.
    제목(titre)은 전체 레시피에서 고유합니다.
    """
    __tablename__ = "recipes"
    id = Column(Integer, primary_key=True, index=True)
    titre = Column(String(255), unique=True, nullable=False, index=True)
    date = Column(DateTime, nullable=False, server_default=func.now())
    description = Column(Text, nullable=True)
    etapes = Column(Text, nullable=False)
    types = Column(String(255), nullable=True)
    slug = Column(String(255), nullable=False, index=True)
    img_recette = Column(String(255), nullable=True)
    preptime = Column(String(255), nullable=True)
    cooktime = Column(String(255), nullable=True)
    portion = Column(String(255), nullable=True)

    author_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    author = relationship("User", back_populates="recipes")

    ingredients = relationship("Ingredient", secondary=recipe_ingredients, back_populates="recipes")
    comments = relationship("Comment", back_populates="recipe", cascade="all, delete-orphan")

    def ensure_slug(self):
        """슬러그가 비어 있을 때만 제목으로부터 슬러그를 만듭니다."""
        if not self.slug:
            self.slug = make_slug(self.titre)
        return self.slug

    @property
    def average_rating(self) -> int:
        """
        현재 로드된 댓글들의 평균 평점을 정수로 반올림해 반환합니다. (x.5는 올림)
        댓글이 없으면 0을 반환합니다.
        """
        if not self.comments:
            return 0
        total = sum(comment.rating for comment in self.comments)
        average = Decimal(total) / Decimal(len(self.comments))
        return int(average.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    def comment_from_author(self, author):
        """해당 작성자가 이 레시피에 남긴 첫 번째 댓글을 찾습니다. 없으면 None."""
        for comment in self.comments:
            if comment.author is author:
                return comment
        return None

    def add_ingredient(self, ingredient):
        if ingredient not in self.ingredients:
            self.ingredients.append(ingredient)
            ingredient.add_recipe(self)
        return self

    def add_ingredients(self, ingredients):
        for ingredient in ingredients:
            self.add_ingredient(ingredient)
        return self

    def remove_ingredient(self, ingredient):
        if ingredient in self.ingredients:
            self.ingredients.remove(ingredient)
            ingredient.remove_recipe(self)
        return self

    def add_comment(self, comment):
        if comment not in self.comments:
            self.comments.append(comment)
            comment.recipe = self
        return self

    def remove_comment(self, comment):
        if comment in self.comments:
            self.comments.remove(comment)
            # 다른 레시피로 재할당되지 않은 경우에만 역참조를 지움
            if comment.recipe is self:
                comment.recipe = None
        return self

    def __str__(self):
        return self.titre
