from movie_reviews.db.models import MovieORM

MOVIE = {
    "title": "The Matrix",
    "description": "A hacker learns the truth about reality",
    "types": ["Science Fiction", "Action"],
}


def create_movie(client, headers, **overrides):
    return client.post("/movies", json={**MOVIE, **overrides}, headers=headers)


def test_anonymous_list_empty(client):
    response = client.get("/movies")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": []}


def test_anonymous_list_with_movies(client, admin):
    _, headers = admin
    create_movie(client, headers)
    create_movie(client, headers, title="Titanic", description="A ship", types=["Drama"])

    response = client.get("/movies")

    assert response.status_code == 200
    titles = [movie["title"] for movie in response.json()["data"]]
    assert titles == ["Titanic", "The Matrix"]


def test_admin_creates_movie(client, session, admin):
    _, headers = admin
    response = create_movie(client, headers)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    movie = body["data"]
    assert movie["title"] == "The Matrix"
    assert movie["types"] == ["Science Fiction", "Action"]
    assert movie["averageRating"] == 0
    assert movie["reviews"] == []
    assert "createdAt" in movie and "updatedAt" in movie
    assert session.query(MovieORM).count() == 1


def test_client_cannot_set_average_rating(client, admin):
    _, headers = admin
    response = create_movie(client, headers, averageRating=5)

    assert response.json()["data"]["averageRating"] == 0


def test_user_cannot_create_movie(client, session, alice):
    _, headers = alice
    response = create_movie(client, headers)

    assert response.status_code == 403
    assert response.json() == {
        "success": False,
        "message": "Forbidden: You do not have permission to perform this action",
    }
    assert session.query(MovieORM).count() == 0


def test_anonymous_cannot_create_movie(client, session):
    response = client.post("/movies", json=MOVIE)

    assert response.status_code == 401
    assert response.json() == {"message": "Missing authorization header"}
    assert session.query(MovieORM).count() == 0


def test_malformed_authorization_header(client):
    response = client.post("/movies", json=MOVIE, headers={"Authorization": "Token abc"})

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid token format"}


def test_invalid_token(client):
    response = client.post("/movies", json=MOVIE, headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid token"}


def test_create_movie_validation(client, admin):
    _, headers = admin
    response = create_movie(client, headers, types=[])

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "types" in response.json()["error"]


def test_get_movie(client, admin):
    _, headers = admin
    movie_id = create_movie(client, headers).json()["data"]["id"]

    response = client.get(f"/movies/{movie_id}")

    assert response.status_code == 200
    assert response.json()["data"]["id"] == movie_id


def test_get_missing_movie(client):
    response = client.get("/movies/999")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Movie not found"}


def test_get_movie_with_non_numeric_id(client):
    response = client.get("/movies/abc")

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_admin_updates_movie(client, admin):
    _, headers = admin
    movie_id = create_movie(client, headers).json()["data"]["id"]

    response = client.patch(f"/movies/{movie_id}", json={"title": "The Matrix Reloaded"}, headers=headers)

    assert response.status_code == 200
    movie = response.json()["data"]
    assert movie["title"] == "The Matrix Reloaded"
    assert movie["description"] == MOVIE["description"]


def test_user_cannot_update_movie(client, admin, alice):
    _, admin_headers = admin
    _, alice_headers = alice
    movie_id = create_movie(client, admin_headers).json()["data"]["id"]

    response = client.patch(f"/movies/{movie_id}", json={"title": "Mine now"}, headers=alice_headers)

    assert response.status_code == 403
    assert client.get(f"/movies/{movie_id}").json()["data"]["title"] == "The Matrix"


def test_update_missing_movie(client, admin):
    _, headers = admin
    response = client.patch("/movies/999", json={"title": "Nothing"}, headers=headers)

    assert response.status_code == 404


def test_admin_deletes_movie(client, admin, alice):
    _, admin_headers = admin
    _, alice_headers = alice
    movie_id = create_movie(client, admin_headers).json()["data"]["id"]
    review_id = client.post(
        f"/movies/{movie_id}/reviews", json={"rating": 3}, headers=alice_headers
    ).json()["data"]["id"]

    response = client.delete(f"/movies/{movie_id}", headers=admin_headers)

    assert response.status_code == 204
    assert response.content == b""
    assert client.get(f"/movies/{movie_id}").status_code == 404
    # the review went with its movie
    assert client.patch(f"/reviews/{review_id}", json={"rating": 1}, headers=admin_headers).status_code == 404


def test_user_cannot_delete_movie(client, admin, alice):
    _, admin_headers = admin
    _, alice_headers = alice
    movie_id = create_movie(client, admin_headers).json()["data"]["id"]

    response = client.delete(f"/movies/{movie_id}", headers=alice_headers)

    assert response.status_code == 403
    assert client.get(f"/movies/{movie_id}").status_code == 200


def test_delete_missing_movie(client, admin):
    _, headers = admin
    assert client.delete("/movies/999", headers=headers).status_code == 404


def test_search_sort_and_paginate(client, admin, alice):
    _, admin_headers = admin
    _, alice_headers = alice
    ids = {}
    for title, rating in [("Alien", 5), ("Aliens", 3), ("Heat", 4)]:
        movie_id = create_movie(client, admin_headers, title=title).json()["data"]["id"]
        client.post(f"/movies/{movie_id}/reviews", json={"rating": rating}, headers=alice_headers)
        ids[title] = movie_id

    found = client.get("/movies", params={"keyword": "alien"}).json()["data"]
    assert {m["title"] for m in found} == {"Alien", "Aliens"}

    by_rating = client.get("/movies", params={"sort": "-rating"}).json()["data"]
    assert [m["title"] for m in by_rating] == ["Alien", "Heat", "Aliens"]

    page = client.get("/movies", params={"sort": "rating", "page": 2, "limit": 2}).json()["data"]
    assert [m["title"] for m in page] == ["Alien"]


def test_invalid_sort_parameter(client):
    response = client.get("/movies", params={"sort": "title"})

    assert response.status_code == 400
    assert "sort" in response.json()["error"]


def test_keyword_wildcards_match_literally(client, admin):
    _, headers = admin
    create_movie(client, headers, title="Alien")
    create_movie(client, headers, title="Heat")

    assert client.get("/movies", params={"keyword": "_"}).json()["data"] == []
    assert client.get("/movies", params={"keyword": "%"}).json()["data"] == []


def test_oversized_movie_id_is_not_found(client, admin):
    _, headers = admin
    huge = 2**70

    response = client.get(f"/movies/{huge}")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Movie not found"}

    assert client.get(f"/movies/{huge}/reviews").status_code == 404
    assert client.delete(f"/movies/{huge}", headers=headers).status_code == 404


def test_oversized_page_is_rejected(client):
    response = client.get("/movies", params={"page": 2**70})

    assert response.status_code == 400
    assert "page" in response.json()["error"]
