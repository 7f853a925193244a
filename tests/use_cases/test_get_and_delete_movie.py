"""Test suite for GetMovie and DeleteMovie use cases."""

from __future__ import annotations

import pytest

from reel_catalog.adapters.in_memory_movie_repository import InMemoryMovieRepository
from reel_catalog.domain.errors import InvalidIdError, NotFoundError
from reel_catalog.domain.movie import Movie
from reel_catalog.use_cases.delete_movie import DeleteMovie, DeleteMovieRequest
from reel_catalog.use_cases.get_movie import GetMovie, GetMovieRequest, GetMovieResponse


@pytest.fixture()
def repository() -> InMemoryMovieRepository:
    return InMemoryMovieRepository()


@pytest.fixture()
def movie_id(repository: InMemoryMovieRepository) -> str:
    return repository.insert(Movie(title="Alien", year=1979, runtime=117, genres=["horror", "sci-fi"]))


def test_get_returns_movie(repository: InMemoryMovieRepository, movie_id: str) -> None:
    result = GetMovie(movie_repository=repository).execute(GetMovieRequest(movie_id=movie_id))

    assert isinstance(result, GetMovieResponse)
    assert result.movie.id == movie_id
    assert result.movie.title == "Alien"


def test_get_missing(repository: InMemoryMovieRepository) -> None:
    with pytest.raises(NotFoundError):
        GetMovie(movie_repository=repository).execute(GetMovieRequest(movie_id="1" * 32))


def test_get_malformed_id(repository: InMemoryMovieRepository) -> None:
    with pytest.raises(InvalidIdError):
        GetMovie(movie_repository=repository).execute(GetMovieRequest(movie_id="alien"))


def test_delete_removes_movie(repository: InMemoryMovieRepository, movie_id: str) -> None:
    DeleteMovie(movie_repository=repository).execute(DeleteMovieRequest(movie_id=movie_id))

    with pytest.raises(NotFoundError):
        repository.get(movie_id)


def test_delete_twice_is_not_found(repository: InMemoryMovieRepository, movie_id: str) -> None:
    use_case = DeleteMovie(movie_repository=repository)
    use_case.execute(DeleteMovieRequest(movie_id=movie_id))

    with pytest.raises(NotFoundError):
        use_case.execute(DeleteMovieRequest(movie_id=movie_id))
