from typing import Optional

from fastapi import Depends, Header
from fastapi.security.utils import get_authorization_scheme_param

from movie_reviews.auth.tokens import decode_access_token
from movie_reviews.domain.dto import TokenData
from movie_reviews.exceptions.auth import AuthenticationException


def get_optional_actor(authorization: Optional[str] = Header(None)) -> Optional[TokenData]:
    """Resolve the actor from an ``Authorization: Bearer`` header, if one was sent."""
    if not authorization:
        return None

    scheme, token = get_authorization_scheme_param(authorization)
    if scheme != "Bearer" or not token:
        raise AuthenticationException("Invalid token format")

    return decode_access_token(token)


def get_current_actor(actor: Optional[TokenData] = Depends(get_optional_actor)) -> TokenData:
    if actor is None:
        raise AuthenticationException("Missing authorization header")
    return actor
