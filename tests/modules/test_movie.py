import pytest_asyncio
from fastapi.testclient import TestClient

from marquee.modules.address import models_address
from marquee.modules.cinema import models_cinema
from marquee.modules.movie import models_movie
from marquee.modules.session import models_session
from tests.commons import add_object_to_db

screened_movie: models_movie.Movie
unscreened_movie: models_movie.Movie
movie_to_update: models_movie.Movie
movie_to_patch: models_movie.Movie
movie_to_delete: models_movie.Movie
cinema: models_cinema.Cinema


@pytest_asyncio.fixture(scope="module", autouse=True)
async def init_objects() -> None:
    global screened_movie
    screened_movie = models_movie.Movie(
        title="Les Tuche",
        genre="Comedy",
        duration=95,
    )
    await add_object_to_db(screened_movie)

    global unscreened_movie
    unscreened_movie = models_movie.Movie(
        title="Titanic",
        genre="Drama",
        duration=194,
    )
    await add_object_to_db(unscreened_movie)

    global movie_to_update
    movie_to_update = models_movie.Movie(
        title="Alien",
        genre="Horror",
        duration=117,
    )
    await add_object_to_db(movie_to_update)

    global movie_to_patch
    movie_to_patch = models_movie.Movie(
        title="Le Grand Bleu",
        genre="Drama",
        duration=168,
    )
    await add_object_to_db(movie_to_patch)

    global movie_to_delete
    movie_to_delete = models_movie.Movie(
        title="Taxi",
        genre="Action",
        duration=86,
    )
    await add_object_to_db(movie_to_delete)

    global cinema
    cinema = models_cinema.Cinema(
        name="Le Grand Rex",
        address=models_address.Address(street="Boulevard Poissonnière", number=1),
    )
    await add_object_to_db(cinema)

    await add_object_to_db(
        models_session.Session(movie_id=screened_movie.id, cinema_id=cinema.id),
    )


def test_create_movie(client: TestClient) -> None:
    response = client.post(
        "/movies",
        json={"title": "Amélie", "genre": "Romance", "duration": 122},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Amélie"
    assert data["sessions"] == []
    assert response.headers["location"].endswith(f"/movies/{data['id']}")

    response = client.get(f"/movies/{data['id']}")
    assert response.status_code == 200
    assert response.json() == {
        "id": data["id"],
        "title": "Amélie",
        "genre": "Romance",
        "duration": 122,
        "sessions": [],
    }


def test_create_movie_with_invalid_fields(client: TestClient) -> None:
    response = client.post(
        "/movies",
        json={"title": "", "genre": "Romance", "duration": 0},
    )
    assert response.status_code == 400
    data = response.json()
    assert data["status"] == 400
    assert data["title"] == "One or more validation errors occurred."
    assert set(data["errors"]) == {"title", "duration"}


def test_create_movie_with_missing_field(client: TestClient) -> None:
    response = client.post(
        "/movies",
        json={"title": "Amélie", "duration": 122},
    )
    assert response.status_code == 400
    assert list(response.json()["errors"]) == ["genre"]


def test_create_movie_with_too_long_genre(client: TestClient) -> None:
    response = client.post(
        "/movies",
        json={"title": "Amélie", "genre": "a" * 51, "duration": 122},
    )
    assert response.status_code == 400
    assert "genre" in response.json()["errors"]


def test_get_movies(client: TestClient) -> None:
    response = client.get("/movies")
    assert response.status_code == 200
    ids = [movie["id"] for movie in response.json()]
    assert screened_movie.id in ids
    assert unscreened_movie.id in ids
    assert ids == sorted(ids)


def test_get_movies_with_pagination(client: TestClient) -> None:
    response = client.get("/movies", params={"skip": 1, "take": 2})
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 2
    assert data[0]["id"] == unscreened_movie.id


def test_get_movies_with_negative_take(client: TestClient) -> None:
    response = client.get("/movies", params={"take": -1})
    assert response.status_code == 400
    assert "take" in response.json()["errors"]


def test_get_movies_screened_in_cinema(client: TestClient) -> None:
    response = client.get("/movies", params={"nomeCinema": "Le Grand Rex"})
    assert response.status_code == 200
    data = response.json()
    assert [movie["id"] for movie in data] == [screened_movie.id]
    assert data[0]["sessions"] == [
        {"movie_id": screened_movie.id, "cinema_id": cinema.id},
    ]


def test_get_movies_screened_in_unknown_cinema(client: TestClient) -> None:
    response = client.get("/movies", params={"nomeCinema": "Le Grand"})
    assert response.status_code == 200
    assert response.json() == []


def test_get_movie(client: TestClient) -> None:
    response = client.get(f"/movies/{unscreened_movie.id}")
    assert response.status_code == 200
    assert response.json()["title"] == "Titanic"


def test_get_unknown_movie(client: TestClient) -> None:
    response = client.get("/movies/4242")
    assert response.status_code == 404
    assert response.json()["detail"] == "Movie not found"


def test_get_movie_with_out_of_range_id(client: TestClient) -> None:
    response = client.get(f"/movies/{2**70}")
    assert response.status_code == 404
    assert response.json()["detail"] == "Movie not found"


def test_get_movies_with_out_of_range_take(client: TestClient) -> None:
    response = client.get("/movies", params={"take": 2**40})
    assert response.status_code == 400
    assert "take" in response.json()["errors"]


def test_update_movie(client: TestClient) -> None:
    response = client.put(
        f"/movies/{movie_to_update.id}",
        json={"title": "Aliens", "genre": "Science fiction", "duration": 137},
    )
    assert response.status_code == 204

    response = client.get(f"/movies/{movie_to_update.id}")
    data = response.json()
    assert data["title"] == "Aliens"
    assert data["genre"] == "Science fiction"
    assert data["duration"] == 137


def test_update_movie_with_invalid_fields(client: TestClient) -> None:
    response = client.put(
        f"/movies/{movie_to_update.id}",
        json={"title": "Aliens", "genre": "Science fiction", "duration": 601},
    )
    assert response.status_code == 400
    assert "duration" in response.json()["errors"]


def test_update_unknown_movie(client: TestClient) -> None:
    response = client.put(
        "/movies/4242",
        json={"title": "Aliens", "genre": "Science fiction", "duration": 137},
    )
    assert response.status_code == 404


def test_patch_movie(client: TestClient) -> None:
    response = client.patch(
        f"/movies/{movie_to_patch.id}",
        json=[{"op": "replace", "path": "/title", "value": "The Big Blue"}],
    )
    assert response.status_code == 204

    response = client.get(f"/movies/{movie_to_patch.id}")
    data = response.json()
    assert data["title"] == "The Big Blue"
    assert data["genre"] == "Drama"
    assert data["duration"] == 168


def test_patch_movie_with_json_patch_content_type(client: TestClient) -> None:
    response = client.patch(
        f"/movies/{movie_to_patch.id}",
        content='[{"op": "test", "path": "/genre", "value": "Drama"}, {"op": "replace", "path": "/duration", "value": 163}]',
        headers={"Content-Type": "application/json-patch+json"},
    )
    assert response.status_code == 204

    response = client.get(f"/movies/{movie_to_patch.id}")
    assert response.json()["duration"] == 163


def test_patch_movie_with_invalid_result(client: TestClient) -> None:
    response = client.patch(
        f"/movies/{movie_to_patch.id}",
        json=[{"op": "replace", "path": "/duration", "value": -5}],
    )
    assert response.status_code == 400
    assert "duration" in response.json()["errors"]

    response = client.get(f"/movies/{movie_to_patch.id}")
    assert response.json()["duration"] == 163


def test_patch_movie_removing_required_field(client: TestClient) -> None:
    response = client.patch(
        f"/movies/{movie_to_patch.id}",
        json=[{"op": "remove", "path": "/genre"}],
    )
    assert response.status_code == 400
    assert "genre" in response.json()["errors"]


def test_patch_movie_with_failed_test(client: TestClient) -> None:
    response = client.patch(
        f"/movies/{movie_to_patch.id}",
        json=[
            {"op": "test", "path": "/title", "value": "Le Grand Bleu"},
            {"op": "replace", "path": "/title", "value": "Nikita"},
        ],
    )
    assert response.status_code == 400
    assert "/title" in response.json()["errors"]

    response = client.get(f"/movies/{movie_to_patch.id}")
    assert response.json()["title"] == "The Big Blue"


def test_patch_movie_with_unknown_member(client: TestClient) -> None:
    response = client.patch(
        f"/movies/{movie_to_patch.id}",
        json=[{"op": "add", "path": "/rating", "value": 5}],
    )
    assert response.status_code == 400
    assert "/rating" in response.json()["errors"]


def test_patch_movie_with_unknown_operation(client: TestClient) -> None:
    response = client.patch(
        f"/movies/{movie_to_patch.id}",
        json=[{"op": "increment", "path": "/duration", "value": 1}],
    )
    assert response.status_code == 400


def test_patch_unknown_movie(client: TestClient) -> None:
    response = client.patch(
        "/movies/4242",
        json=[{"op": "replace", "path": "/title", "value": "Nikita"}],
    )
    assert response.status_code == 404


def test_patch_movie_with_non_ascii_index(client: TestClient) -> None:
    response = client.patch(
        f"/movies/{movie_to_patch.id}",
        json=[
            {"op": "add", "path": "/title", "value": ["a"]},
            {"op": "replace", "path": "/title/²", "value": "x"},
        ],
    )
    assert response.status_code == 400
    assert "/title/²" in response.json()["errors"]


def test_patch_movie_testing_boolean_against_number(client: TestClient) -> None:
    response = client.post(
        "/movies",
        json={"title": "Short", "genre": "Animation", "duration": 1},
    )
    assert response.status_code == 201
    movie_id = response.json()["id"]

    response = client.patch(
        f"/movies/{movie_id}",
        json=[
            {"op": "test", "path": "/duration", "value": True},
            {"op": "replace", "path": "/title", "value": "Long"},
        ],
    )
    assert response.status_code == 400
    assert "/duration" in response.json()["errors"]

    response = client.get(f"/movies/{movie_id}")
    assert response.json()["title"] == "Short"


def test_patch_movie_testing_equal_number(client: TestClient) -> None:
    response = client.post(
        "/movies",
        json={"title": "Shorter", "genre": "Animation", "duration": 2},
    )
    movie_id = response.json()["id"]

    response = client.patch(
        f"/movies/{movie_id}",
        json=[
            {"op": "test", "path": "/duration", "value": 2.0},
            {"op": "replace", "path": "/title", "value": "Longer"},
        ],
    )
    assert response.status_code == 204


def test_update_movie_with_out_of_range_id(client: TestClient) -> None:
    response = client.put(
        f"/movies/{2**70}",
        json={"title": "Nikita", "genre": "Action", "duration": 117},
    )
    assert response.status_code == 404


def test_patch_movie_with_out_of_range_id(client: TestClient) -> None:
    response = client.patch(
        f"/movies/{2**70}",
        json=[{"op": "replace", "path": "/title", "value": "Nikita"}],
    )
    assert response.status_code == 404


def test_delete_screened_movie(client: TestClient) -> None:
    response = client.delete(f"/movies/{screened_movie.id}")
    assert response.status_code == 409

    response = client.get(f"/movies/{screened_movie.id}")
    assert response.status_code == 200


def test_delete_movie(client: TestClient) -> None:
    response = client.delete(f"/movies/{movie_to_delete.id}")
    assert response.status_code == 204

    response = client.get(f"/movies/{movie_to_delete.id}")
    assert response.status_code == 404


def test_delete_unknown_movie(client: TestClient) -> None:
    response = client.delete("/movies/4242")
    assert response.status_code == 404


def test_delete_movie_with_out_of_range_id(client: TestClient) -> None:
    response = client.delete(f"/movies/{-(2**70)}")
    assert response.status_code == 404
