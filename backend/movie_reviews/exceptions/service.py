from movie_reviews.exceptions.base import AppException, ErrorKind

class ServiceException(AppException):
    """Base exception for service operation errors."""
    kind = ErrorKind.UNEXPECTED

class ResourceNotFoundException(ServiceException):
    """Raised when a requested movie or review does not exist."""
    kind = ErrorKind.NOT_FOUND

class InvalidRequestException(ServiceException):
    """Raised when request parameters are invalid."""
    kind = ErrorKind.VALIDATION
