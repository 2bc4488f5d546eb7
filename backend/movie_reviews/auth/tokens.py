import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import ValidationError

from movie_reviews.config.environment import JWT_SECRET_KEY, JWT_ALGORITHM, JWT_ACCESS_TOKEN_EXPIRE_MINUTES
from movie_reviews.domain.dto import TokenData
from movie_reviews.domain.models import Role
from movie_reviews.exceptions.auth import AuthenticationException

logger = logging.getLogger(__name__)


def create_access_token(user_id: int, role: Role, expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=JWT_ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": str(user_id),
        "role": Role(role).value,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(to_encode, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> TokenData:
    """Validate a bearer token and return the actor it identifies."""
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
        return TokenData(user_id=payload.get("sub"), role=payload.get("role"))
    except (JWTError, ValidationError) as e:
        logger.warning(f"Token validation failed: {e}")
        raise AuthenticationException("Invalid token")
