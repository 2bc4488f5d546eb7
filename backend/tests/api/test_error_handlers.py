import logging
from unittest.mock import Mock

from fastapi.testclient import TestClient

from movie_reviews.exceptions.handlers import GENERIC_ERROR_MESSAGE, format_validation_errors
from movie_reviews.main import app
from movie_reviews.service.dependencies import get_movie_service


def test_unexpected_error_is_hidden_from_client(caplog):
    broken_service = Mock()
    broken_service.list_movies.side_effect = RuntimeError("connection string leaked: postgres://secret")
    app.dependency_overrides[get_movie_service] = lambda: broken_service
    try:
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/movies")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": GENERIC_ERROR_MESSAGE}
    assert "secret" not in response.text
    assert any("secret" in record.getMessage() for record in caplog.records)


def test_unexpected_error_is_still_request_logged(caplog):
    caplog.set_level(logging.INFO)
    broken_service = Mock()
    broken_service.get_movie.side_effect = RuntimeError("boom")
    app.dependency_overrides[get_movie_service] = lambda: broken_service
    try:
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/movies/1")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert any(
        record.name == "movie_reviews.main" and record.getMessage().startswith("GET /movies/1 500 ")
        for record in caplog.records
    )


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/no-such-route")

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_malformed_json_body(client, admin):
    _, headers = admin
    response = client.post(
        "/movies",
        content=b"{not json",
        headers={**headers, "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Request body is not valid JSON"}


def test_format_validation_errors_uses_validator_message():
    errors = [
        {"type": "value_error", "loc": ("body", "username"), "msg": "Value error, too short",
         "ctx": {"error": ValueError("Username must be at least 6 characters long")}},
        {"type": "missing", "loc": ("body", "password"), "msg": "Field required"},
    ]

    assert format_validation_errors(errors) == (
        "Username must be at least 6 characters long; password: Field required"
    )


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
