from sqlalchemy.orm import Session
from typing import Optional
from sqlalchemy.exc import IntegrityError

from movie_reviews.domain.models import User, Role
from movie_reviews.db.models import UserORM
from movie_reviews.repositories.interface.user_repository import UserRepository
from movie_reviews.exceptions.repository import (
    EntityNotFoundException,
    DuplicateEntityException,
    RepositoryOperationException,
)

class SQLAlchemyUserRepo(UserRepository):
    def __init__(self, db: Session):
        self.db = db

    def _to_domain(self, user_orm: UserORM) -> User:
        return User(
            id=user_orm.id,
            username=user_orm.username,
            hashed_password=user_orm.hashed_password,
            role=Role(user_orm.role),
            created_at=user_orm.created_at,
            updated_at=user_orm.updated_at
        )
    
    def _to_orm(self, user: User) -> UserORM:
        return UserORM(
            id=user.id,
            username=user.username,
            hashed_password=user.hashed_password,
            role=user.role.value,
        )
    
    def get_by_username(self, username: str) -> Optional[User]:
        """Get a user by username"""
        try:
            user_orm = self.db.query(UserORM).filter(UserORM.username == username).first()
            return self._to_domain(user_orm) if user_orm else None
        except Exception as e:
            raise RepositoryOperationException(f"Failed to get user by username: {str(e)}")
    
    def create(self, user: User) -> User:
        """Create a new user. ``user.hashed_password`` must already be hashed."""
        try:
            user_orm = self._to_orm(user)
            self.db.add(user_orm)
            self.db.commit()
            self.db.refresh(user_orm)
            return self._to_domain(user_orm)
        except IntegrityError:
            self.db.rollback()
            raise DuplicateEntityException("Username already exists", payload={"username": user.username})
        except Exception as e:
            self.db.rollback()
            raise RepositoryOperationException(f"Failed to create user: {str(e)}")
    
    def update(self, user: User) -> User:
        try:
            user_orm = self.db.get(UserORM, user.id)
            if not user_orm:
                raise EntityNotFoundException(f"User {user.id} not found")
            
            user_orm.username = user.username
            user_orm.role = user.role.value
            # only touch the stored hash when the caller supplied a new one
            if user.hashed_password != user_orm.hashed_password:
                user_orm.hashed_password = user.hashed_password
            
            self.db.commit()
            self.db.refresh(user_orm)
            return self._to_domain(user_orm)
        except EntityNotFoundException:
            raise
        except IntegrityError:
            self.db.rollback()
            raise DuplicateEntityException("Username already exists", payload={"username": user.username})
        except Exception as e:
            self.db.rollback()
            raise RepositoryOperationException(f"Failed to update user: {str(e)}")
