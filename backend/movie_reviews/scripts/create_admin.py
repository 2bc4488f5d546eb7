"""Create an admin account, or promote an existing user to admin.

Usage::

    python -m movie_reviews.scripts.create_admin <username> <password>

The API offers no route for granting the admin role, so this is the only way
to obtain an account that may create, update or delete movies.
"""
import argparse
import logging

from movie_reviews.db.database import SessionLocal, engine, Base
from movie_reviews.db import models  # noqa: F401
from movie_reviews.domain.dto import UserCreate
from movie_reviews.repositories import SQLAlchemyUserRepo
from movie_reviews.service.auth_service import AuthService

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_admin(username: str, password: str) -> int:
    """Returns the admin's user id."""
    # reuse the registration rules for username and password
    credentials = UserCreate(username=username, password=password)

    Base.metadata.create_all(bind=engine)
    db_session = SessionLocal()
    try:
        auth_service = AuthService(SQLAlchemyUserRepo(db_session))
        user = auth_service.create_admin(credentials.username, credentials.password)
        logger.info(f"User {user.username} (id {user.id}) is now an admin")
        return user.id
    finally:
        db_session.close()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create or promote an admin user")
    parser.add_argument("username")
    parser.add_argument("password")
    args = parser.parse_args(argv)
    create_admin(args.username, args.password)


if __name__ == "__main__":
    main()
