from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status

from movie_reviews.auth.dependencies import get_current_actor
from movie_reviews.domain.dto import (
    MovieCreate,
    MovieUpdate,
    MovieResponse,
    ReviewCreate,
    ReviewResponse,
    SuccessResponse,
    TokenData,
)
from movie_reviews.service.dependencies import get_movie_service, get_review_service
from movie_reviews.service.movie_service import MovieService
from movie_reviews.service.review_service import ReviewService

# keeps the row offset inside a 64-bit integer
MAX_PAGE = 2**31 - 1


router = APIRouter(
    prefix="/movies",
    tags=["Movies"],
    responses={404: {"description": "Not found"}}
)


@router.get("", response_model=SuccessResponse[List[MovieResponse]])
def list_movies(
    keyword: Optional[str] = None,
    sort: Optional[str] = Query(None, pattern="^-?rating$"),
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(10, ge=1, le=100),
    movie_service: MovieService = Depends(get_movie_service)
):
    movies = movie_service.list_movies(keyword=keyword, sort=sort, page=page, limit=limit)
    return SuccessResponse[List[MovieResponse]](
        data=[MovieResponse.model_validate(movie) for movie in movies]
    )


@router.get("/{movie_id}", response_model=SuccessResponse[MovieResponse])
def get_movie(
    movie_id: int,
    movie_service: MovieService = Depends(get_movie_service)
):
    movie = movie_service.get_movie(movie_id)
    return SuccessResponse[MovieResponse](data=MovieResponse.model_validate(movie))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse[MovieResponse])
def create_movie(
    movie_data: MovieCreate,
    actor: TokenData = Depends(get_current_actor),
    movie_service: MovieService = Depends(get_movie_service)
):
    movie = movie_service.create_movie(actor, movie_data.title, movie_data.description, movie_data.types)
    return SuccessResponse[MovieResponse](data=MovieResponse.model_validate(movie))


@router.patch("/{movie_id}", response_model=SuccessResponse[MovieResponse])
def update_movie(
    movie_id: int,
    movie_data: MovieUpdate,
    actor: TokenData = Depends(get_current_actor),
    movie_service: MovieService = Depends(get_movie_service)
):
    movie = movie_service.update_movie(actor, movie_id, movie_data.model_dump(exclude_none=True))
    return SuccessResponse[MovieResponse](data=MovieResponse.model_validate(movie))


@router.delete("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_movie(
    movie_id: int,
    actor: TokenData = Depends(get_current_actor),
    movie_service: MovieService = Depends(get_movie_service)
):
    movie_service.delete_movie(actor, movie_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{movie_id}/reviews", response_model=SuccessResponse[List[ReviewResponse]])
def get_movie_reviews(
    movie_id: int,
    review_service: ReviewService = Depends(get_review_service)
):
    reviews = review_service.get_movie_reviews(movie_id)
    return SuccessResponse[List[ReviewResponse]](
        data=[ReviewResponse.model_validate(review) for review in reviews]
    )


@router.post("/{movie_id}/reviews", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse[ReviewResponse])
def create_review(
    movie_id: int,
    review_data: ReviewCreate,
    actor: TokenData = Depends(get_current_actor),
    review_service: ReviewService = Depends(get_review_service)
):
    review = review_service.create_review(actor, movie_id, review_data.rating, review_data.content)
    return SuccessResponse[ReviewResponse](data=ReviewResponse.model_validate(review))
