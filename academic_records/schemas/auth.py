from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from .core import PartialUpdate, UserRole


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    user_id: Optional[int] = None
    username: Optional[str] = None
    role: Optional[str] = None


class UserBase(BaseModel):
    username: str = Field(..., min_length=1)
    name: str
    email: EmailStr
    profile_image: Optional[str] = None


class UserCreate(UserBase):
    password: str = Field(..., min_length=1)
    role: UserRole


class UserUpdate(PartialUpdate):
    nullable_fields = ("profile_image",)

    username: Optional[str] = Field(None, min_length=1)
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    profile_image: Optional[str] = None
    role: Optional[UserRole] = None


class UserOut(UserBase):
    id: int
    role: str


class LoginResponse(Token):
    user: UserOut


class PasswordChange(BaseModel):
    current_password: Optional[str] = None
    new_password: str = Field(..., min_length=6)
