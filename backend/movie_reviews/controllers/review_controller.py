from fastapi import APIRouter, Depends, Response, status

from movie_reviews.auth.dependencies import get_current_actor
from movie_reviews.domain.dto import ReviewUpdate, ReviewResponse, SuccessResponse, TokenData
from movie_reviews.service.dependencies import get_review_service
from movie_reviews.service.review_service import ReviewService

router = APIRouter(
    prefix="/reviews",
    tags=["Reviews"],
    responses={404: {"description": "Not found"}}
)

@router.patch("/{review_id}", response_model=SuccessResponse[ReviewResponse])
def update_review(
    review_id: int,
    review_data: ReviewUpdate,
    actor: TokenData = Depends(get_current_actor),
    review_service: ReviewService = Depends(get_review_service)
):
    review = review_service.update_review(actor, review_id, review_data.content, review_data.rating)
    return SuccessResponse[ReviewResponse](data=ReviewResponse.model_validate(review))

@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_review(
    review_id: int,
    actor: TokenData = Depends(get_current_actor),
    review_service: ReviewService = Depends(get_review_service)
):
    review_service.delete_review(actor, review_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
