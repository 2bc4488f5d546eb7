from movie_reviews.repositories.interface.user_repository import UserRepository
from movie_reviews.repositories.interface.movie_repository import MovieRepository
from movie_reviews.repositories.implementation.sql_alchemy_user_repo import SQLAlchemyUserRepo
from movie_reviews.repositories.implementation.sql_alchemy_movie_repo import SQLAlchemyMovieRepo
