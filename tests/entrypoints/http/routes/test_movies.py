"""
Test suite for the /v1/movies routes.

Route tests swap the use cases for mocks through dependency overrides. The
lifecycle tests at the bottom wire the real use cases to an in-memory
repository and drive the API end to end.
"""

from __future__ import annotations

from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from reel_catalog.adapters.in_memory_movie_repository import InMemoryMovieRepository
from reel_catalog.domain.errors import (
    InvalidIdError,
    NotFoundError,
    StoreError,
    StoreTimeoutError,
    ValidationError,
)
from reel_catalog.domain.filters import Filters, Metadata
from reel_catalog.domain.movie import Movie
from reel_catalog.entrypoints.http.dependencies import (
    get_create_movie_use_case,
    get_delete_movie_use_case,
    get_get_movie_use_case,
    get_list_movies_use_case,
    get_movie_repository,
    get_update_movie_use_case,
)
from reel_catalog.entrypoints.http.exception_handlers import register_exception_handlers
from reel_catalog.entrypoints.http.routes.movies import router
from reel_catalog.use_cases.create_movie import CreateMovieRequest, CreateMovieResponse
from reel_catalog.use_cases.get_movie import GetMovieRequest, GetMovieResponse
from reel_catalog.use_cases.list_movies import ListMoviesRequest, ListMoviesResponse
from reel_catalog.use_cases.update_movie import UpdateMovieRequest, UpdateMovieResponse

MOVIE_ID = "0190a1b2c3d47e8f9a0b1c2d3e4f5a6b"


@pytest.fixture
def app() -> FastAPI:
    """Create a test FastAPI app with movies router and exception handlers."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def mock_use_case() -> Mock:
    """Mock use case for testing routes in isolation."""
    return Mock()


@pytest.fixture
def deadpool() -> Movie:
    return Movie(
        id=MOVIE_ID,
        title="Deadpool",
        year=2016,
        runtime=108,
        genres=["action", "comedy"],
        version=1,
    )


def _body(**overrides: object) -> dict[str, object]:
    body: dict[str, object] = {
        "title": "Deadpool",
        "year": 2016,
        "runtime": "108 mins",
        "genres": ["action", "comedy"],
    }
    body.update(overrides)
    return body


# ==============================================================================
# GET /v1/movies
# ==============================================================================


def test_list_movies_maps_query_to_request(
    app: FastAPI, client: TestClient, mock_use_case: Mock, deadpool: Movie
) -> None:
    """Query parameters reach the use case as a ListMoviesRequest."""
    mock_use_case.execute.return_value = ListMoviesResponse(
        movies=[deadpool],
        metadata=Metadata(current_page=2, page_size=5, first_page=1, last_page=3, total_records=12),
    )
    app.dependency_overrides[get_list_movies_use_case] = lambda: mock_use_case

    response = client.get(
        "/v1/movies",
        params={"title": "dead", "genres": "action, comedy,", "page": 2, "page_size": 5, "sort": "-year"},
    )

    assert response.status_code == 200
    mock_use_case.execute.assert_called_once_with(
        ListMoviesRequest(
            filters=Filters(page=2, page_size=5, sort="-year"),
            title="dead",
            genres=["action", "comedy"],
        )
    )
    assert response.json() == {
        "movies": [
            {
                "id": MOVIE_ID,
                "title": "Deadpool",
                "year": 2016,
                "runtime": "108 mins",
                "genres": ["action", "comedy"],
            }
        ],
        "metadata": {
            "current_page": 2,
            "page_size": 5,
            "first_page": 1,
            "last_page": 3,
            "total_records": 12,
        },
    }


def test_list_movies_defaults(app: FastAPI, client: TestClient, mock_use_case: Mock) -> None:
    """Without query parameters the first page of 20, sorted by id, is requested."""
    mock_use_case.execute.return_value = ListMoviesResponse(movies=[], metadata=Metadata())
    app.dependency_overrides[get_list_movies_use_case] = lambda: mock_use_case

    response = client.get("/v1/movies")

    assert response.status_code == 200
    request = mock_use_case.execute.call_args.args[0]
    assert request == ListMoviesRequest(filters=Filters(page=1, page_size=20, sort="id"))
    assert response.json()["metadata"]["total_records"] == 0


def test_list_movies_non_integer_page(app: FastAPI, client: TestClient, mock_use_case: Mock) -> None:
    """Type errors in query parameters are rejected before the use case runs."""
    app.dependency_overrides[get_list_movies_use_case] = lambda: mock_use_case

    response = client.get("/v1/movies", params={"page": "abc"})

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert response.json()["errors"][0]["field"] == "page"
    mock_use_case.execute.assert_not_called()


def test_list_movies_filter_errors(app: FastAPI, client: TestClient, mock_use_case: Mock) -> None:
    """Domain filter validation errors come back field by field."""
    mock_use_case.execute.side_effect = ValidationError.from_field_errors({"sort": "invalid sort value"})
    app.dependency_overrides[get_list_movies_use_case] = lambda: mock_use_case

    response = client.get("/v1/movies", params={"sort": "budget"})

    assert response.status_code == 422
    assert response.json() == {
        "detail": "Validation failed",
        "code": "VALIDATION_ERROR",
        "errors": [{"field": "sort", "message": "invalid sort value"}],
    }


# ==============================================================================
# POST /v1/movies
# ==============================================================================


def test_create_movie(app: FastAPI, client: TestClient, mock_use_case: Mock, deadpool: Movie) -> None:
    """A created movie is answered with 201 and a Location header."""
    mock_use_case.execute.return_value = CreateMovieResponse(movie=deadpool)
    app.dependency_overrides[get_create_movie_use_case] = lambda: mock_use_case

    response = client.post("/v1/movies", json=_body())

    assert response.status_code == 201
    assert response.headers["location"] == f"/v1/movies/{MOVIE_ID}"
    assert response.json()["runtime"] == "108 mins"
    mock_use_case.execute.assert_called_once_with(
        CreateMovieRequest(title="Deadpool", year=2016, runtime=108, genres=["action", "comedy"])
    )


@pytest.mark.parametrize("runtime", ["108 minutes", "108", "mins", 108])
def test_create_movie_rejects_bad_runtime(
    app: FastAPI, client: TestClient, mock_use_case: Mock, runtime: object
) -> None:
    """Runtime must be sent as '<N> mins'."""
    app.dependency_overrides[get_create_movie_use_case] = lambda: mock_use_case

    response = client.post("/v1/movies", json=_body(runtime=runtime))

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "runtime"
    mock_use_case.execute.assert_not_called()


@pytest.mark.parametrize("year", ["2016", 2016.0])
def test_create_movie_rejects_non_integer_year(
    app: FastAPI, client: TestClient, mock_use_case: Mock, year: object
) -> None:
    """Year must be a JSON integer; numeric strings are not coerced."""
    app.dependency_overrides[get_create_movie_use_case] = lambda: mock_use_case

    response = client.post("/v1/movies", json=_body(year=year))

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "year"
    mock_use_case.execute.assert_not_called()


def test_create_movie_rejects_unknown_fields(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    app.dependency_overrides[get_create_movie_use_case] = lambda: mock_use_case

    response = client.post("/v1/movies", json=_body(rating=5))

    assert response.status_code == 422
    mock_use_case.execute.assert_not_called()


def test_create_movie_missing_fields_reach_domain_validation(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    """An empty body becomes zero values so the domain reports every field."""
    mock_use_case.execute.side_effect = ValidationError.from_field_errors({"title": "must be provided"})
    app.dependency_overrides[get_create_movie_use_case] = lambda: mock_use_case

    response = client.post("/v1/movies", json={})

    assert response.status_code == 422
    mock_use_case.execute.assert_called_once_with(
        CreateMovieRequest(title="", year=0, runtime=0, genres=None)
    )


# ==============================================================================
# GET /v1/movies/{id}
# ==============================================================================


def test_show_movie(app: FastAPI, client: TestClient, mock_use_case: Mock, deadpool: Movie) -> None:
    mock_use_case.execute.return_value = GetMovieResponse(movie=deadpool)
    app.dependency_overrides[get_get_movie_use_case] = lambda: mock_use_case

    response = client.get(f"/v1/movies/{MOVIE_ID}")

    assert response.status_code == 200
    assert response.json()["title"] == "Deadpool"
    mock_use_case.execute.assert_called_once_with(GetMovieRequest(movie_id=MOVIE_ID))


def test_show_movie_not_found(app: FastAPI, client: TestClient, mock_use_case: Mock) -> None:
    mock_use_case.execute.side_effect = NotFoundError("Movie", MOVIE_ID)
    app.dependency_overrides[get_get_movie_use_case] = lambda: mock_use_case

    response = client.get(f"/v1/movies/{MOVIE_ID}")

    assert response.status_code == 404
    assert response.json() == {
        "detail": f"Movie with identifier '{MOVIE_ID}' not found",
        "code": "NOT_FOUND",
    }


def test_show_movie_malformed_id(app: FastAPI, client: TestClient, mock_use_case: Mock) -> None:
    """A malformed id names no resource and is answered with 404."""
    mock_use_case.execute.side_effect = InvalidIdError("deadpool")
    app.dependency_overrides[get_get_movie_use_case] = lambda: mock_use_case

    response = client.get("/v1/movies/deadpool")

    assert response.status_code == 404
    assert response.json()["code"] == "INVALID_ID"


def test_store_error_is_answered_generically(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    """Store failures never leak driver details."""
    mock_use_case.execute.side_effect = StoreError("connection refused by 10.0.0.3")
    app.dependency_overrides[get_get_movie_use_case] = lambda: mock_use_case

    response = client.get(f"/v1/movies/{MOVIE_ID}")

    assert response.status_code == 500
    assert response.json() == {
        "detail": "The server encountered a problem and could not process your request",
        "code": "STORE_ERROR",
    }


def test_store_timeout_is_service_unavailable(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    mock_use_case.execute.side_effect = StoreTimeoutError("get exceeded 5.0s deadline")
    app.dependency_overrides[get_get_movie_use_case] = lambda: mock_use_case

    response = client.get(f"/v1/movies/{MOVIE_ID}")

    assert response.status_code == 503
    assert response.json()["code"] == "STORE_TIMEOUT"


# ==============================================================================
# PUT /v1/movies/{id}
# ==============================================================================


def test_update_movie(app: FastAPI, client: TestClient, mock_use_case: Mock, deadpool: Movie) -> None:
    mock_use_case.execute.return_value = UpdateMovieResponse(movie=deadpool)
    app.dependency_overrides[get_update_movie_use_case] = lambda: mock_use_case

    response = client.put(f"/v1/movies/{MOVIE_ID}", json=_body(year=2016))

    assert response.status_code == 200
    mock_use_case.execute.assert_called_once_with(
        UpdateMovieRequest(
            movie_id=MOVIE_ID,
            title="Deadpool",
            year=2016,
            runtime=108,
            genres=["action", "comedy"],
        )
    )


# ==============================================================================
# DELETE /v1/movies/{id}
# ==============================================================================


def test_delete_movie(app: FastAPI, client: TestClient, mock_use_case: Mock) -> None:
    mock_use_case.execute.return_value = None
    app.dependency_overrides[get_delete_movie_use_case] = lambda: mock_use_case

    response = client.delete(f"/v1/movies/{MOVIE_ID}")

    assert response.status_code == 200
    assert response.json() == {"message": "movie successfully deleted"}


# ==============================================================================
# End-to-end lifecycle against the in-memory repository
# ==============================================================================


@pytest.fixture
def catalog_client(app: FastAPI) -> TestClient:
    """Client whose use cases share one in-memory repository."""
    repository = InMemoryMovieRepository()
    app.dependency_overrides[get_movie_repository] = lambda: repository
    return TestClient(app, raise_server_exceptions=False)


def test_movie_lifecycle(catalog_client: TestClient) -> None:
    """Create, read, search, replace and delete one movie."""
    created = catalog_client.post("/v1/movies", json=_body())
    assert created.status_code == 201
    movie_id = created.json()["id"]
    assert created.headers["location"] == f"/v1/movies/{movie_id}"

    shown = catalog_client.get(f"/v1/movies/{movie_id}")
    assert shown.json() == {
        "id": movie_id,
        "title": "Deadpool",
        "year": 2016,
        "runtime": "108 mins",
        "genres": ["action", "comedy"],
    }

    found = catalog_client.get("/v1/movies", params={"title": "deadpool"})
    assert [movie["id"] for movie in found.json()["movies"]] == [movie_id]

    replaced = catalog_client.put(
        f"/v1/movies/{movie_id}",
        json=_body(genres=["action", "comedy", "sci-fi"]),
    )
    assert replaced.status_code == 200
    assert replaced.json()["genres"] == ["action", "comedy", "sci-fi"]

    deleted = catalog_client.delete(f"/v1/movies/{movie_id}")
    assert deleted.json() == {"message": "movie successfully deleted"}

    gone = catalog_client.get(f"/v1/movies/{movie_id}")
    assert gone.status_code == 404
    assert gone.json()["code"] == "NOT_FOUND"


def test_invalid_movie_lists_every_field(catalog_client: TestClient) -> None:
    response = catalog_client.post("/v1/movies", json={"title": "", "genres": ["drama", "drama"]})

    assert response.status_code == 422
    assert response.json()["errors"] == [
        {"field": "title", "message": "must be provided"},
        {"field": "year", "message": "must be provided"},
        {"field": "runtime", "message": "must be provided"},
        {"field": "genres", "message": "must not contain duplicate values"},
    ]


def test_malformed_id_is_not_found(catalog_client: TestClient) -> None:
    response = catalog_client.delete("/v1/movies/not-a-movie-id")

    assert response.status_code == 404
    assert response.json()["code"] == "INVALID_ID"


def test_list_rejects_bad_filters(catalog_client: TestClient) -> None:
    response = catalog_client.get("/v1/movies", params={"page": 0, "page_size": 101, "sort": "-budget"})

    assert response.status_code == 422
    assert {error["field"] for error in response.json()["errors"]} == {"page", "page_size", "sort"}
