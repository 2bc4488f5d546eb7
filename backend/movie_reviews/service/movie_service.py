import logging
from typing import Any, Dict, List, Optional

from movie_reviews.auth.policy import Action, authorize
from movie_reviews.domain.dto import TokenData
from movie_reviews.domain.models import Movie
from movie_reviews.domain.ratings import compute_average_rating
from movie_reviews.exceptions.service import ResourceNotFoundException, InvalidRequestException
from movie_reviews.repositories.interface.movie_repository import MovieRepository

logger = logging.getLogger(__name__)

SORT_OPTIONS = ("rating", "-rating")
UPDATABLE_FIELDS = ("title", "description", "types")


class MovieService:
    def __init__(self, movie_repository: MovieRepository):
        self.movie_repository = movie_repository

    def list_movies(
        self,
        keyword: Optional[str] = None,
        sort: Optional[str] = None,
        page: int = 1,
        limit: int = 10
    ) -> List[Movie]:
        authorize(None, Action.READ_MOVIES)
        if sort is not None and sort not in SORT_OPTIONS:
            raise InvalidRequestException(f"sort must be one of {', '.join(SORT_OPTIONS)}")
        if page < 1 or limit < 1:
            raise InvalidRequestException("page and limit must be positive")
        return self.movie_repository.find(keyword=keyword, sort=sort, page=page, limit=limit)

    def get_movie(self, movie_id: int) -> Movie:
        authorize(None, Action.READ_MOVIES)
        movie = self.movie_repository.get_by_id(movie_id)
        if movie is None:
            raise ResourceNotFoundException("Movie not found", payload={"movie_id": movie_id})
        return movie

    def create_movie(self, actor: Optional[TokenData], title: str, description: str, types: List[str]) -> Movie:
        authorize(actor, Action.CREATE_MOVIE)

        movie = Movie(title=title, description=description, types=list(types))
        movie.average_rating = compute_average_rating(movie.reviews)
        movie = self.movie_repository.create(movie)

        logger.info(f"User {actor.user_id} created movie {movie.id}")
        return movie

    def update_movie(self, actor: Optional[TokenData], movie_id: int, changes: Dict[str, Any]) -> Movie:
        authorize(actor, Action.UPDATE_MOVIE)

        movie = self.get_movie(movie_id)
        for field in UPDATABLE_FIELDS:
            if changes.get(field) is not None:
                setattr(movie, field, changes[field])

        return self.movie_repository.save(movie)

    def delete_movie(self, actor: Optional[TokenData], movie_id: int) -> None:
        authorize(actor, Action.DELETE_MOVIE)

        if not self.movie_repository.delete_by_id(movie_id):
            raise ResourceNotFoundException("Movie not found", payload={"movie_id": movie_id})
        logger.info(f"User {actor.user_id} deleted movie {movie_id}")
