from datetime import datetime
from enum import Enum
from typing import Optional, List


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


class Review:
    def __init__(
        self,
        rating: int,
        author_id: int,
        content: str = "",
        id: Optional[int] = None,
        created_at: datetime = None,
        updated_at: datetime = None
    ):
        self.rating = rating
        self.author_id = author_id
        self.content = content
        self.id = id
        self.created_at = created_at
        self.updated_at = updated_at

class User:
    def __init__(
        self,
        username: str,
        hashed_password: str,
        id: Optional[int] = None,
        role: Role = Role.USER,
        created_at: datetime = None,
        updated_at: datetime = None
    ):
        self.username = username
        self.hashed_password = hashed_password
        self.id = id
        self.role = Role(role)
        self.created_at = created_at
        self.updated_at = updated_at

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

class Movie:
    def __init__(
        self,
        title: str,
        description: str,
        types: List[str],
        id: Optional[int] = None,
        average_rating: float = 0.0,
        reviews: Optional[List[Review]] = None,
        version: Optional[int] = None,
        created_at: datetime = None,
        updated_at: datetime = None
    ):
        self.title = title
        self.description = description
        self.types = types
        self.id = id
        self.average_rating = average_rating
        self.reviews = reviews if reviews is not None else []
        self.version = version
        self.created_at = created_at
        self.updated_at = updated_at

    def find_review(self, review_id: int) -> Optional[Review]:
        return next((review for review in self.reviews if review.id == review_id), None)
