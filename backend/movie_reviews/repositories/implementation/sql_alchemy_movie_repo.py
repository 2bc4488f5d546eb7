from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.exc import StaleDataError
from typing import List, Optional
import json

from movie_reviews.db.models import MovieORM, ReviewORM, utcnow
from movie_reviews.domain.models import Movie, Review
from movie_reviews.repositories.interface.movie_repository import MovieRepository
from movie_reviews.exceptions.repository import (
    EntityNotFoundException,
    ConcurrentModificationException,
    RepositoryOperationException,
    InvalidEntityDataException
)


# largest value the INTEGER primary keys can hold
MAX_ID = 2**31 - 1


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _valid_id(value: int) -> bool:
    return 1 <= value <= MAX_ID


class SQLAlchemyMovieRepo(MovieRepository):
    def __init__(self, session: Session):
        self.session = session

    def _review_to_domain(self, review_orm: ReviewORM) -> Review:
        return Review(
            id=review_orm.id,
            content=review_orm.content,
            rating=review_orm.rating,
            author_id=review_orm.author_id,
            created_at=review_orm.created_at,
            updated_at=review_orm.updated_at
        )

    def _to_domain(self, movie_orm: MovieORM) -> Movie:
        try:
            return Movie(
                id=movie_orm.id,
                title=movie_orm.title,
                description=movie_orm.description,
                types=json.loads(movie_orm.types),
                average_rating=movie_orm.average_rating,
                reviews=[self._review_to_domain(r) for r in movie_orm.reviews],
                version=movie_orm.version,
                created_at=movie_orm.created_at,
                updated_at=movie_orm.updated_at
            )
        except Exception as e:
            raise InvalidEntityDataException(f"Failed to convert movie data: {str(e)}")

    def _to_orm(self, movie: Movie) -> MovieORM:
        try:
            return MovieORM(
                id=movie.id,
                title=movie.title,
                description=movie.description,
                types=json.dumps(list(movie.types)),
                average_rating=movie.average_rating,
                reviews=[
                    ReviewORM(content=r.content, rating=r.rating, author_id=r.author_id)
                    for r in movie.reviews
                ]
            )
        except Exception as e:
            raise InvalidEntityDataException(f"Failed to convert to ORM: {str(e)}")

    def get_by_id(self, movie_id: int) -> Optional[Movie]:
        try:
            if not isinstance(movie_id, int):
                raise RepositoryOperationException(f"Invalid movie_id type. Expected int, got {type(movie_id)}")
            if not _valid_id(movie_id):
                return None

            movie_orm = self.session.get(MovieORM, movie_id)
            if not movie_orm:
                return None
            return self._to_domain(movie_orm)
        except (InvalidEntityDataException, RepositoryOperationException):
            raise
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get movie by ID: {str(e)}")

    def get_by_review_id(self, review_id: int) -> Optional[Movie]:
        if not _valid_id(review_id):
            return None
        try:
            movie_orm = (
                self.session.query(MovieORM)
                .join(MovieORM.reviews)
                .filter(ReviewORM.id == review_id)
                .first()
            )
            return self._to_domain(movie_orm) if movie_orm else None
        except InvalidEntityDataException:
            raise
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get movie by review ID: {str(e)}")

    def find(
        self,
        keyword: Optional[str] = None,
        sort: Optional[str] = None,
        page: int = 1,
        limit: int = 10
    ) -> List[Movie]:
        try:
            query = self.session.query(MovieORM).options(selectinload(MovieORM.reviews))

            if keyword:
                pattern = f"%{_escape_like(keyword)}%"
                query = query.filter(or_(
                    MovieORM.title.ilike(pattern, escape="\\"),
                    MovieORM.description.ilike(pattern, escape="\\")
                ))

            if sort == "rating":
                query = query.order_by(MovieORM.average_rating.asc(), MovieORM.id.asc())
            elif sort == "-rating":
                query = query.order_by(MovieORM.average_rating.desc(), MovieORM.id.asc())
            else:
                # newest first
                query = query.order_by(MovieORM.created_at.desc(), MovieORM.id.desc())

            movies_orm = query.offset((page - 1) * limit).limit(limit).all()
            return [self._to_domain(movie_orm) for movie_orm in movies_orm]
        except InvalidEntityDataException:
            raise
        except Exception as e:
            raise RepositoryOperationException(f"Failed to find movies: {str(e)}")

    def create(self, movie: Movie) -> Movie:
        try:
            movie_orm = self._to_orm(movie)
            self.session.add(movie_orm)
            self.session.commit()
            self.session.refresh(movie_orm)
            return self._to_domain(movie_orm)
        except InvalidEntityDataException:
            self.session.rollback()
            raise
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to create movie: {str(e)}")

    def _sync_reviews(self, movie_orm: MovieORM, reviews: List[Review]) -> None:
        existing = {review_orm.id: review_orm for review_orm in movie_orm.reviews}
        keep_ids = {review.id for review in reviews if review.id is not None}

        for review_orm in list(movie_orm.reviews):
            if review_orm.id not in keep_ids:
                movie_orm.reviews.remove(review_orm)

        for review in reviews:
            if review.id is None:
                movie_orm.reviews.append(
                    ReviewORM(content=review.content, rating=review.rating, author_id=review.author_id)
                )
                continue

            review_orm = existing.get(review.id)
            if review_orm is None:
                raise ConcurrentModificationException(
                    f"Review {review.id} no longer belongs to movie {movie_orm.id}"
                )
            # author_id is immutable
            if review_orm.content != review.content or review_orm.rating != review.rating:
                review_orm.content = review.content
                review_orm.rating = review.rating

    def save(self, movie: Movie) -> Movie:
        try:
            # drop cached state so the locked read below sees the committed row
            self.session.expire_all()
            movie_orm = (
                self.session.query(MovieORM)
                .filter(MovieORM.id == movie.id)
                .with_for_update()
                .first()
            )
            if not movie_orm:
                raise EntityNotFoundException("Movie not found", payload={"movie_id": movie.id})

            if movie.version is not None and movie_orm.version != movie.version:
                raise ConcurrentModificationException(
                    "Movie was modified by another request, please retry",
                    payload={"movie_id": movie.id, "expected": movie.version, "actual": movie_orm.version}
                )

            movie_orm.title = movie.title
            movie_orm.description = movie.description
            movie_orm.types = json.dumps(list(movie.types))
            movie_orm.average_rating = movie.average_rating
            self._sync_reviews(movie_orm, movie.reviews)
            # always bump the row so the version advances with every save
            movie_orm.updated_at = utcnow()

            self.session.commit()
            self.session.refresh(movie_orm)
            return self._to_domain(movie_orm)
        except (EntityNotFoundException, ConcurrentModificationException):
            self.session.rollback()
            raise
        except StaleDataError:
            self.session.rollback()
            raise ConcurrentModificationException(
                "Movie was modified by another request, please retry",
                payload={"movie_id": movie.id}
            )
        except InvalidEntityDataException:
            raise
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to save movie: {str(e)}")

    def delete_by_id(self, movie_id: int) -> bool:
        if not _valid_id(movie_id):
            return False
        try:
            movie_orm = self.session.get(MovieORM, movie_id)
            if not movie_orm:
                return False

            # reviews go with the movie through the delete-orphan cascade
            self.session.delete(movie_orm)
            self.session.commit()
            return True
        except Exception as e:
            self.session.rollback()
            raise RepositoryOperationException(f"Failed to delete movie: {str(e)}")
