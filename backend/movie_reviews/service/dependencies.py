from fastapi import Depends
from sqlalchemy.orm import Session

from movie_reviews.db.database import get_db
from movie_reviews.repositories import SQLAlchemyUserRepo, SQLAlchemyMovieRepo
from movie_reviews.service.auth_service import AuthService
from movie_reviews.service.movie_service import MovieService
from movie_reviews.service.review_service import ReviewService

def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(SQLAlchemyUserRepo(db))

def get_movie_service(db: Session = Depends(get_db)) -> MovieService:
    return MovieService(SQLAlchemyMovieRepo(db))

def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(SQLAlchemyMovieRepo(db))
