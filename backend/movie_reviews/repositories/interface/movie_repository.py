from abc import ABC, abstractmethod
from typing import List, Optional

from movie_reviews.domain.models import Movie


class MovieRepository(ABC):
    @abstractmethod
    def get_by_id(self, movie_id: int) -> Optional["Movie"]:
        pass

    @abstractmethod
    def get_by_review_id(self, review_id: int) -> Optional["Movie"]:
        pass

    @abstractmethod
    def find(
        self,
        keyword: Optional[str] = None,
        sort: Optional[str] = None,
        page: int = 1,
        limit: int = 10
    ) -> List["Movie"]:
        pass

    @abstractmethod
    def create(self, movie: "Movie") -> "Movie":
        pass

    @abstractmethod
    def save(self, movie: "Movie") -> "Movie":
        """Persist the movie together with its reviews and average rating as one unit."""
        pass

    @abstractmethod
    def delete_by_id(self, movie_id: int) -> bool:
        pass
