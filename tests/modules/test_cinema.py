import pytest_asyncio
from fastapi.testclient import TestClient

from marquee.modules.address import models_address
from marquee.modules.cinema import models_cinema
from marquee.modules.movie import models_movie
from marquee.modules.session import models_session
from tests.commons import add_object_to_db

cinema: models_cinema.Cinema
cinema_to_update: models_cinema.Cinema
cinema_to_patch: models_cinema.Cinema
screening_cinema: models_cinema.Cinema
movie: models_movie.Movie


@pytest_asyncio.fixture(scope="module", autouse=True)
async def init_objects() -> None:
    global cinema
    cinema = models_cinema.Cinema(
        name="Pathé Bellecour",
        address=models_address.Address(street="Rue de la République", number=79),
    )
    await add_object_to_db(cinema)

    global cinema_to_update
    cinema_to_update = models_cinema.Cinema(
        name="Comoedia",
        address=models_address.Address(street="Avenue Berthelot", number=13),
    )
    await add_object_to_db(cinema_to_update)

    global cinema_to_patch
    cinema_to_patch = models_cinema.Cinema(
        name="Le Zola",
        address=models_address.Address(street="Cours Émile Zola", number=117),
    )
    await add_object_to_db(cinema_to_patch)

    global screening_cinema
    screening_cinema = models_cinema.Cinema(
        name="Institut Lumière",
        address=models_address.Address(street="Rue du Premier Film", number=25),
    )
    await add_object_to_db(screening_cinema)

    global movie
    movie = models_movie.Movie(
        title="La Sortie de l'usine Lumière",
        genre="Documentary",
        duration=1,
    )
    await add_object_to_db(movie)

    await add_object_to_db(
        models_session.Session(movie_id=movie.id, cinema_id=screening_cinema.id),
    )


def test_create_get_and_delete_cinema(client: TestClient) -> None:
    response = client.post(
        "/cinemas",
        json={"name": "Cineplex", "address": {"street": "Main St", "number": 10}},
    )
    assert response.status_code == 201
    cinema_id = response.json()["id"]
    assert response.headers["location"].endswith(f"/cinemas/{cinema_id}")

    response = client.get(f"/cinemas/{cinema_id}")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Cineplex"
    assert data["address"]["street"] == "Main St"
    assert data["address"]["number"] == 10
    assert data["sessions"] == []
    address_id = data["address"]["id"]

    response = client.delete(f"/cinemas/{cinema_id}")
    assert response.status_code == 204

    response = client.get(f"/cinemas/{cinema_id}")
    assert response.status_code == 404

    # The address is owned by the cinema, it is deleted along with it
    response = client.get(f"/addresses/{address_id}")
    assert response.status_code == 404


def test_create_cinema_without_address(client: TestClient) -> None:
    response = client.post(
        "/cinemas",
        json={"name": "Cineplex"},
    )
    assert response.status_code == 400
    assert "address" in response.json()["errors"]


def test_create_cinema_with_invalid_address(client: TestClient) -> None:
    response = client.post(
        "/cinemas",
        json={"name": "Cineplex", "address": {"street": "", "number": 10}},
    )
    assert response.status_code == 400
    assert "address.street" in response.json()["errors"]


def test_get_cinemas(client: TestClient) -> None:
    response = client.get("/cinemas")
    assert response.status_code == 200
    names = [cinema["name"] for cinema in response.json()]
    assert "Pathé Bellecour" in names
    assert "Institut Lumière" in names


def test_get_cinemas_with_pagination(client: TestClient) -> None:
    response = client.get("/cinemas", params={"skip": 0, "take": 1})
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["id"] == cinema.id


def test_get_cinemas_with_negative_skip(client: TestClient) -> None:
    response = client.get("/cinemas", params={"skip": -1})
    assert response.status_code == 400
    assert "skip" in response.json()["errors"]


def test_get_cinema(client: TestClient) -> None:
    response = client.get(f"/cinemas/{screening_cinema.id}")
    assert response.status_code == 200
    data = response.json()
    assert data["address"]["id"] == screening_cinema.address_id
    assert data["sessions"] == [
        {"movie_id": movie.id, "cinema_id": screening_cinema.id},
    ]


def test_get_unknown_cinema(client: TestClient) -> None:
    response = client.get("/cinemas/4242")
    assert response.status_code == 404
    assert response.json()["detail"] == "Cinema not found"


def test_update_cinema(client: TestClient) -> None:
    response = client.put(
        f"/cinemas/{cinema_to_update.id}",
        json={
            "name": "Cinéma Comoedia",
            "address": {"street": "Avenue Berthelot", "number": 15},
        },
    )
    assert response.status_code == 204

    response = client.get(f"/cinemas/{cinema_to_update.id}")
    data = response.json()
    assert data["name"] == "Cinéma Comoedia"
    assert data["address"] == {
        "id": cinema_to_update.address_id,
        "street": "Avenue Berthelot",
        "number": 15,
    }


def test_update_unknown_cinema(client: TestClient) -> None:
    response = client.put(
        "/cinemas/4242",
        json={"name": "Nowhere", "address": {"street": "Nowhere", "number": 1}},
    )
    assert response.status_code == 404


def test_patch_cinema_address(client: TestClient) -> None:
    response = client.patch(
        f"/cinemas/{cinema_to_patch.id}",
        json=[{"op": "replace", "path": "/address/number", "value": 118}],
    )
    assert response.status_code == 204

    response = client.get(f"/cinemas/{cinema_to_patch.id}")
    data = response.json()
    assert data["name"] == "Le Zola"
    assert data["address"]["street"] == "Cours Émile Zola"
    assert data["address"]["number"] == 118


def test_patch_cinema_with_invalid_address(client: TestClient) -> None:
    response = client.patch(
        f"/cinemas/{cinema_to_patch.id}",
        json=[{"op": "replace", "path": "/address/number", "value": 0}],
    )
    assert response.status_code == 400
    assert "address.number" in response.json()["errors"]

    response = client.get(f"/cinemas/{cinema_to_patch.id}")
    assert response.json()["address"]["number"] == 118


def test_patch_cinema_with_unknown_address_member(client: TestClient) -> None:
    response = client.patch(
        f"/cinemas/{cinema_to_patch.id}",
        json=[{"op": "add", "path": "/address/city", "value": "Villeurbanne"}],
    )
    assert response.status_code == 400
    assert "/address/city" in response.json()["errors"]


def test_patch_unknown_cinema(client: TestClient) -> None:
    response = client.patch(
        "/cinemas/4242",
        json=[{"op": "replace", "path": "/name", "value": "Nowhere"}],
    )
    assert response.status_code == 404


def test_delete_cinema_with_sessions(client: TestClient) -> None:
    response = client.delete(f"/cinemas/{screening_cinema.id}")
    assert response.status_code == 409

    response = client.get(f"/cinemas/{screening_cinema.id}")
    assert response.status_code == 200


def test_delete_unknown_cinema(client: TestClient) -> None:
    response = client.delete("/cinemas/4242")
    assert response.status_code == 404


def test_get_cinemas_with_out_of_range_skip(client: TestClient) -> None:
    response = client.get("/cinemas", params={"skip": 2**63})
    assert response.status_code == 400
    assert "skip" in response.json()["errors"]


def test_cinema_with_out_of_range_id(client: TestClient) -> None:
    response = client.get(f"/cinemas/{2**70}")
    assert response.status_code == 404

    response = client.put(
        f"/cinemas/{2**70}",
        json={"name": "Nowhere", "address": {"street": "Nowhere", "number": 1}},
    )
    assert response.status_code == 404

    response = client.patch(
        f"/cinemas/{2**70}",
        json=[{"op": "replace", "path": "/name", "value": "Nowhere"}],
    )
    assert response.status_code == 404

    response = client.delete(f"/cinemas/{2**70}")
    assert response.status_code == 404
