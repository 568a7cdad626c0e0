from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator


def _not_blank(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value


# ============== INPUT SCHEMAS ==============

class UserRegister(BaseModel):
    """회원가입 요청. password_confirm은 저장되지 않고 검증에만 쓰입니다."""
    email: EmailStr
    password: str = Field(..., min_length=1)
    password_confirm: str
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    picture: Optional[str] = Field(None, max_length=255)
    presentation: Optional[str] = Field(None, min_length=10)

    @field_validator("password", "first_name", "last_name")
    @classmethod
    def not_blank(cls, value):
        return _not_blank(value)

    @model_validator(mode="after")
    def check_passwords_match(self):
        if self.password != self.password_confirm:
            raise ValueError("password confirmation does not match")
        return self


class UserUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=255)
    last_name: Optional[str] = Field(None, min_length=1, max_length=255)
    presentation: Optional[str] = Field(None, min_length=10)

    @field_validator("first_name", "last_name")
    @classmethod
    def not_blank(cls, value):
        return _not_blank(value)


class PasswordUpdate(BaseModel):
    old_password: str
    new_password: str = Field(..., min_length=1)
    new_password_confirm: str

    @field_validator("new_password")
    @classmethod
    def not_blank(cls, value):
        return _not_blank(value)

    @model_validator(mode="after")
    def check_passwords_match(self):
        if self.new_password != self.new_password_confirm:
            raise ValueError("password confirmation does not match")
        return self


# ============== VIEWS ==============

class AuthorView(BaseModel):
    """레시피/댓글에 함께 노출되는 작성자 요약"""
    id: int
    first_name: str
    last_name: str
    full_name: str
    slug: str
    picture: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserView(AuthorView):
    """사용자 상세 정보 (비밀번호 제외)"""
    email: str
    presentation: Optional[str] = None
    granted_roles: List[str] = []
