"""Get movie by ID use case."""

from __future__ import annotations

from dataclasses import dataclass

from reel_catalog.domain.movie import Movie
from reel_catalog.ports.movie_repository import MovieRepository


@dataclass(frozen=True, slots=True)
class GetMovieRequest:
    movie_id: str


@dataclass(frozen=True, slots=True)
class GetMovieResponse:
    movie: Movie


class GetMovie:
    """
    Use case for retrieving a single movie by ID.

    Id format checking and absence are reported by the repository
    (InvalidIdError, NotFoundError); this use case adds nothing on top.
    """

    def __init__(self, movie_repository: MovieRepository) -> None:
        self._repository = movie_repository

    def execute(self, request: GetMovieRequest) -> GetMovieResponse:
        """
        Raises:
            InvalidIdError: If movie_id is not a valid identifier
            NotFoundError: If no movie has that id
        """
        return GetMovieResponse(movie=self._repository.get(request.movie_id))
