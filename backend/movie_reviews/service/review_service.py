import logging
from typing import List, Optional

from movie_reviews.auth.policy import Action, authorize
from movie_reviews.domain.dto import TokenData
from movie_reviews.domain.models import Movie, Review
from movie_reviews.domain.ratings import compute_average_rating
from movie_reviews.exceptions.service import ResourceNotFoundException
from movie_reviews.repositories.interface.movie_repository import MovieRepository

logger = logging.getLogger(__name__)


class ReviewService:
    """Review mutations.

    Every mutation follows the same unit of work: authorize, load the parent
    movie, change its reviews, recompute ``average_rating`` and persist the
    movie in a single ``save`` call. The average is therefore never stored
    apart from the review list it was derived from.
    """

    def __init__(self, movie_repository: MovieRepository):
        self.movie_repository = movie_repository

    def _get_movie(self, movie_id: int) -> Movie:
        movie = self.movie_repository.get_by_id(movie_id)
        if movie is None:
            raise ResourceNotFoundException("Movie not found", payload={"movie_id": movie_id})
        return movie

    def _get_movie_and_review(self, review_id: int) -> tuple[Movie, Review]:
        movie = self.movie_repository.get_by_review_id(review_id)
        review = movie.find_review(review_id) if movie else None
        if review is None:
            raise ResourceNotFoundException("Review not found", payload={"review_id": review_id})
        return movie, review

    def _save(self, movie: Movie) -> Movie:
        movie.average_rating = compute_average_rating(movie.reviews)
        return self.movie_repository.save(movie)

    def get_movie_reviews(self, movie_id: int) -> List[Review]:
        authorize(None, Action.READ_REVIEWS)
        return self._get_movie(movie_id).reviews

    def create_review(self, actor: Optional[TokenData], movie_id: int, rating: int, content: str = "") -> Review:
        authorize(actor, Action.CREATE_REVIEW)

        movie = self._get_movie(movie_id)
        movie.reviews.append(Review(rating=rating, content=content, author_id=actor.user_id))
        saved = self._save(movie)

        logger.info(f"User {actor.user_id} reviewed movie {movie_id}, average now {saved.average_rating}")
        return saved.reviews[-1]

    def update_review(
        self,
        actor: Optional[TokenData],
        review_id: int,
        content: Optional[str] = None,
        rating: Optional[int] = None
    ) -> Review:
        movie, review = self._get_movie_and_review(review_id)
        authorize(actor, Action.UPDATE_REVIEW, review.author_id)

        if content is not None:
            review.content = content
        if rating is not None:
            review.rating = rating

        saved = self._save(movie)
        return saved.find_review(review_id)

    def delete_review(self, actor: Optional[TokenData], review_id: int) -> None:
        movie, review = self._get_movie_and_review(review_id)
        authorize(actor, Action.DELETE_REVIEW, review.author_id)

        movie.reviews = [r for r in movie.reviews if r.id != review_id]
        self._save(movie)
        logger.info(f"User {actor.user_id} deleted review {review_id} of movie {movie.id}")
