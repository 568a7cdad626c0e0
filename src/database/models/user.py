from sqlalchemy import Column, Integer, String, Text, JSON
from sqlalchemy.orm import relationship
from ..database import Base
from src.utils.slug import make_slug, random_salt

DEFAULT_ROLE = "ROLE_USER"


class User(Base):
    """
    레시피를 작성하고 다른 사용자의 레시피에 댓글/평점을 남기는 회원을 나타냅니다.
    사용자를 삭제하면 그가 작성한 레시피와 댓글도 함께 삭제됩니다.
    """
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(180), unique=True, nullable=False, index=True)
    roles = Column(JSON, nullable=False, default=list)
    password = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    picture = Column(String(255), nullable=True)
    presentation = Column(Text, nullable=True)

    recipes = relationship("Recipe", back_populates="author", cascade="all")
    comments = relationship("Comment", back_populates="author", cascade="all, delete-orphan")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def granted_roles(self):
        """저장된 역할에 ROLE_USER를 항상 포함시킨 역할 목록."""
        roles = list(self.roles or [])
        roles.append(DEFAULT_ROLE)
        return list(dict.fromkeys(roles))

    def ensure_slug(self, salt=None):
        """
        슬러그가 비어 있을 때만 '이름 성 난수'로부터 슬러그를 만듭니다.
        저장소(repository)가 insert/update 직전에 호출합니다.
        """
        if not self.slug:
            if salt is None:
                salt = random_salt()
            self.slug = make_slug(f"{self.first_name or ''} {self.last_name or ''} {salt}")
        return self.slug

    def add_recipe(self, recipe):
        if recipe not in self.recipes:
            self.recipes.append(recipe)
            recipe.author = self
        return self

    def remove_recipe(self, recipe):
        if recipe in self.recipes:
            self.recipes.remove(recipe)
            # 다른 사용자에게 재할당되지 않은 경우에만 소유 관계를 끊음
            if recipe.author is self:
                recipe.author = None
        return self

    def add_comment(self, comment):
        if comment not in self.comments:
            self.comments.append(comment)
            comment.author = self
        return self

    def remove_comment(self, comment):
        if comment in self.comments:
            self.comments.remove(comment)
            if comment.author is self:
                comment.author = None
        return self

    def __str__(self):
        return self.full_name
