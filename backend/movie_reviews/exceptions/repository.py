from movie_reviews.exceptions.base import AppException, ErrorKind

class RepositoryException(AppException):
    """Base exception for all repository-related errors."""
    kind = ErrorKind.UNEXPECTED

class EntityNotFoundException(RepositoryException):
    """Raised when an entity cannot be found in the repository."""
    kind = ErrorKind.NOT_FOUND

class DuplicateEntityException(RepositoryException):
    """Raised when attempting to create a duplicate entity."""
    kind = ErrorKind.CONFLICT

class ConcurrentModificationException(RepositoryException):
    """Raised when an entity was changed by someone else since it was read."""
    kind = ErrorKind.CONFLICT

class InvalidEntityDataException(RepositoryException):
    """Raised when entity data is invalid or malformed."""
    pass

class RepositoryOperationException(RepositoryException):
    """Raised when a repository operation fails for any reason not covered by other exceptions."""
    pass
