from movie_reviews.exceptions.base import AppException, ErrorKind

class AuthException(AppException):
    """Base exception for authentication and authorization errors"""
    kind = ErrorKind.AUTHENTICATION

class AuthenticationException(AuthException):
    """Raised when no valid credentials were presented"""
    pass

class InvalidCredentialsException(AuthenticationException):
    """Raised when login credentials are invalid"""
    pass

class AuthorizationException(AuthException):
    """Raised when an authenticated actor is not allowed to perform an action"""
    kind = ErrorKind.AUTHORIZATION

class UserAlreadyExistsException(AuthException):
    """Raised when attempting to register a user with an existing username"""
    kind = ErrorKind.CONFLICT
