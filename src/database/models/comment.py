from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ..database import Base


class Comment(Base):
    """
    사용자가 레시피에 남긴 평점과 댓글입니다.
    레시피나 작성자의 컬렉션에서 제거되면 고아(orphan)로 간주되어 삭제됩니다.
    """
    __tablename__ = "comments"
    id = Column(Integer, primary_key=True, index=True)
    rating = Column(Integer, nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    author_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    recipe_id = Column(Integer, ForeignKey("recipes.id"), nullable=False)

    author = relationship("User", back_populates="comments")
    recipe = relationship("Recipe", back_populates="comments")
