import logging
from passlib.context import CryptContext

from movie_reviews.auth.tokens import create_access_token
from movie_reviews.config.environment import BCRYPT_ROUNDS
from movie_reviews.domain.models import User, Role
from movie_reviews.repositories import UserRepository
from movie_reviews.exceptions.auth import UserAlreadyExistsException, InvalidCredentialsException
from movie_reviews.exceptions.repository import DuplicateEntityException

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


class AuthService:
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    def register_user(self, username: str, password: str) -> tuple[User, str]:
        if self.user_repository.get_by_username(username):
            raise UserAlreadyExistsException("Username already exists", payload={"username": username})

        # the credential store only ever receives the hash
        user = User(
            username=username,
            hashed_password=get_password_hash(password),
            role=Role.USER
        )

        try:
            user = self.user_repository.create(user)
        except DuplicateEntityException:
            # lost a race with a concurrent registration
            raise UserAlreadyExistsException("Username already exists", payload={"username": username})

        logger.info(f"Registered user {user.id} ({user.username})")
        return user, self._create_access_token_for_user(user)

    def authenticate_user(self, username: str, password: str) -> tuple[User, str]:
        user = self.user_repository.get_by_username(username)

        # same message for unknown user and wrong password
        if not user or not verify_password(password, user.hashed_password):
            logger.info(f"Failed login attempt for username {username!r}")
            raise InvalidCredentialsException("Invalid username or password")

        return user, self._create_access_token_for_user(user)

    def create_admin(self, username: str, password: str) -> User:
        """Create an admin account, or promote an existing user to admin."""
        user = self.user_repository.get_by_username(username)
        if user:
            user.role = Role.ADMIN
            return self.user_repository.update(user)

        return self.user_repository.create(
            User(username=username, hashed_password=get_password_hash(password), role=Role.ADMIN)
        )

    def _create_access_token_for_user(self, user: User) -> str:
        return create_access_token(user.id, user.role)
