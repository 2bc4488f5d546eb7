from abc import ABC, abstractmethod
from typing import Optional

from movie_reviews.domain.models import User


class UserRepository(ABC):
    @abstractmethod
    def get_by_username(self, username: str) -> Optional["User"]:
        pass

    @abstractmethod
    def create(self, user: "User") -> "User":
        pass 
    
    @abstractmethod
    def update(self, user: "User") -> "User":
        pass 
