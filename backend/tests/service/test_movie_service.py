import pytest
from unittest.mock import Mock

from movie_reviews.domain.dto import TokenData
from movie_reviews.domain.models import Movie, Role
from movie_reviews.service.movie_service import MovieService
from movie_reviews.exceptions.auth import AuthenticationException, AuthorizationException
from movie_reviews.exceptions.service import ResourceNotFoundException, InvalidRequestException

ADMIN = TokenData(user_id=1, role=Role.ADMIN)
USER = TokenData(user_id=2, role=Role.USER)


@pytest.fixture
def mock_movie_repo():
    return Mock()


@pytest.fixture
def movie_service(mock_movie_repo):
    return MovieService(mock_movie_repo)


@pytest.fixture
def movie():
    return Movie(id=1, title="The Matrix", description="Red pill", types=["Action"], version=1)


def test_list_movies_passes_filters(movie_service, mock_movie_repo, movie):
    mock_movie_repo.find.return_value = [movie]

    result = movie_service.list_movies(keyword="matrix", sort="-rating", page=2, limit=5)

    assert result == [movie]
    mock_movie_repo.find.assert_called_once_with(keyword="matrix", sort="-rating", page=2, limit=5)


def test_list_movies_rejects_unknown_sort(movie_service):
    with pytest.raises(InvalidRequestException):
        movie_service.list_movies(sort="title")


def test_get_movie_not_found(movie_service, mock_movie_repo):
    mock_movie_repo.get_by_id.return_value = None

    with pytest.raises(ResourceNotFoundException, match="Movie not found"):
        movie_service.get_movie(99)


def test_create_movie_as_admin(movie_service, mock_movie_repo):
    mock_movie_repo.create.side_effect = lambda m: m

    created = movie_service.create_movie(ADMIN, "Heat", "Cops and robbers", ["Crime"])

    assert created.average_rating == 0
    assert created.reviews == []
    mock_movie_repo.create.assert_called_once()


def test_create_movie_as_user_is_forbidden(movie_service, mock_movie_repo):
    with pytest.raises(AuthorizationException):
        movie_service.create_movie(USER, "Heat", "Cops and robbers", ["Crime"])
    mock_movie_repo.create.assert_not_called()


def test_create_movie_anonymous_is_unauthenticated(movie_service, mock_movie_repo):
    with pytest.raises(AuthenticationException):
        movie_service.create_movie(None, "Heat", "Cops and robbers", ["Crime"])
    mock_movie_repo.create.assert_not_called()


def test_update_movie_applies_only_given_fields(movie_service, mock_movie_repo, movie):
    mock_movie_repo.get_by_id.return_value = movie
    mock_movie_repo.save.side_effect = lambda m: m

    updated = movie_service.update_movie(ADMIN, 1, {"title": "The Matrix Reloaded"})

    assert updated.title == "The Matrix Reloaded"
    assert updated.description == "Red pill"
    assert updated.types == ["Action"]


def test_update_movie_checks_role_before_lookup(movie_service, mock_movie_repo):
    with pytest.raises(AuthorizationException):
        movie_service.update_movie(USER, 1, {"title": "Nope"})
    mock_movie_repo.get_by_id.assert_not_called()


def test_delete_movie(movie_service, mock_movie_repo):
    mock_movie_repo.delete_by_id.return_value = True

    movie_service.delete_movie(ADMIN, 1)

    mock_movie_repo.delete_by_id.assert_called_once_with(1)


def test_delete_missing_movie(movie_service, mock_movie_repo):
    mock_movie_repo.delete_by_id.return_value = False

    with pytest.raises(ResourceNotFoundException):
        movie_service.delete_movie(ADMIN, 1)
