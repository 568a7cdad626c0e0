from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .user import AuthorView


# ============== INPUT SCHEMAS ==============

class RecipeCreate(BaseModel):
    titre: str = Field(..., min_length=2, max_length=40)
    description: Optional[str] = Field(None, min_length=2, max_length=250)
    etapes: str = Field(..., min_length=20)
    types: Optional[str] = Field(None, max_length=255)
    preptime: Optional[str] = Field(None, max_length=255)
    cooktime: Optional[str] = Field(None, max_length=255)
    portion: Optional[str] = Field(None, max_length=255)
    img_recette: Optional[str] = Field(None, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    ingredient_ids: List[int] = []


class RecipeUpdate(BaseModel):
    """설정된 필드만 반영됩니다 (exclude_unset)."""
    titre: Optional[str] = Field(None, min_length=2, max_length=40)
    description: Optional[str] = Field(None, min_length=2, max_length=250)
    etapes: Optional[str] = Field(None, min_length=20)
    types: Optional[str] = Field(None, max_length=255)
    preptime: Optional[str] = Field(None, max_length=255)
    cooktime: Optional[str] = Field(None, max_length=255)
    portion: Optional[str] = Field(None, max_length=255)


class CommentCreate(BaseModel):
    rating: int = Field(..., ge=0, le=5)
    content: str = Field(..., min_length=1)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


# ============== VIEWS ==============

class IngredientView(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class CommentView(BaseModel):
    id: int
    rating: int
    content: str
    created_at: Optional[datetime] = None
    author: AuthorView

    model_config = ConfigDict(from_attributes=True)


class RecipeSummaryView(BaseModel):
    """목록용 공개 레시피 정보"""
    id: int
    titre: str
    slug: str
    date: Optional[datetime] = None
    description: Optional[str] = None
    types: Optional[str] = None
    img_recette: Optional[str] = None
    average_rating: int = 0
    author: Optional[AuthorView] = None

    model_config = ConfigDict(from_attributes=True)


class RecipeDetailView(RecipeSummaryView):
    """레시피 상세 정보 (조리 단계, 재료, 댓글 포함)"""
    etapes: str
    preptime: Optional[str] = None
    cooktime: Optional[str] = None
    portion: Optional[str] = None
    ingredients: List[IngredientView] = []
    comments: List[CommentView] = []
