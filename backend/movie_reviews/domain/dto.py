from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Generic, Optional, List, TypeVar
import re

from movie_reviews.domain.models import Role

T = TypeVar("T")

USERNAME_PATTERN = re.compile(r'[a-zA-Z0-9_]+')
PASSWORD_SPECIAL_CHARS = "!@#$"


def _normalize_types(types: List[str]) -> List[str]:
    # keep first occurrence order, drop blanks and repeats
    seen = []
    for genre in types:
        genre = genre.strip()
        if not genre:
            raise ValueError('Movie types must not contain empty values')
        if genre not in seen:
            seen.append(genre)
    if not seen:
        raise ValueError('Movie types must be a non-empty list')
    return seen


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class SuccessResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T


class Token(BaseModel):
    token: str

class TokenData(BaseModel):
    """The authenticated actor carried by a bearer token."""
    user_id: int
    role: Role

class UserCreate(BaseModel):
    username: str
    password: str

    @field_validator('username')
    @classmethod
    def username_rules(cls, v):
        if len(v) < 6:
            raise ValueError('Username must be at least 6 characters long')
        if len(v) > 20:
            raise ValueError('Username must not exceed 20 characters')
        if not USERNAME_PATTERN.fullmatch(v):
            raise ValueError('Username may only contain letters, numbers, and underscores (_)')
        return v

    @field_validator('password')
    @classmethod
    def password_strength(cls, v):
        if len(v) < 8:
            raise ValueError('Password must be at least 8 characters long')
        if not re.search(r'[A-Z]', v):
            raise ValueError('Password must contain at least one uppercase letter')
        if not re.search(r'[a-z]', v):
            raise ValueError('Password must contain at least one lowercase letter')
        if not re.search(r'[0-9]', v):
            raise ValueError('Password must contain at least one digit')
        if not any(char in PASSWORD_SPECIAL_CHARS for char in v):
            raise ValueError(f'Password must contain at least one special character ({PASSWORD_SPECIAL_CHARS})')
        return v

class UserLogin(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class MovieCreate(BaseModel):
    title: str
    description: str
    types: List[str]

    @field_validator('title', 'description')
    @classmethod
    def not_blank(cls, v, info):
        v = v.strip() if info.field_name == 'title' else v
        if not v.strip():
            raise ValueError(f'Movie {info.field_name} is required')
        return v

    @field_validator('types')
    @classmethod
    def validate_types(cls, v):
        return _normalize_types(v)

class MovieUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    types: Optional[List[str]] = None

    @field_validator('title', 'description')
    @classmethod
    def not_blank(cls, v, info):
        if v is None:
            return v
        v = v.strip() if info.field_name == 'title' else v
        if not v.strip():
            raise ValueError(f'Movie {info.field_name} must not be empty')
        return v

    @field_validator('types')
    @classmethod
    def validate_types(cls, v):
        if v is None:
            return v
        return _normalize_types(v)

class ReviewCreate(BaseModel):
    content: str = ""
    rating: int = Field(..., ge=1, le=5, strict=True)

class ReviewUpdate(BaseModel):
    content: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5, strict=True)


class ReviewResponse(CamelModel):
    id: int
    content: str
    rating: int
    author_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class MovieResponse(CamelModel):
    id: int
    title: str
    description: str
    types: List[str]
    average_rating: float
    reviews: List[ReviewResponse]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
