from fastapi import APIRouter, Depends, status

from movie_reviews.domain.dto import UserCreate, UserLogin, Token, SuccessResponse
from movie_reviews.service.dependencies import get_auth_service
from movie_reviews.service.auth_service import AuthService

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
)

@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse[Token])
def register(
    user_data: UserCreate,
    auth_service: AuthService = Depends(get_auth_service)
):
    _, access_token = auth_service.register_user(user_data.username, user_data.password)
    return SuccessResponse[Token](data=Token(token=access_token))

@router.post("/login", response_model=SuccessResponse[Token])
def login(
    credentials: UserLogin,
    auth_service: AuthService = Depends(get_auth_service)
):
    _, access_token = auth_service.authenticate_user(credentials.username, credentials.password)
    return SuccessResponse[Token](data=Token(token=access_token))
