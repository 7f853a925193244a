from __future__ import annotations

from dataclasses import dataclass

from reel_catalog.ports.movie_repository import MovieRepository


@dataclass(frozen=True, slots=True)
class DeleteMovieRequest:
    movie_id: str


class DeleteMovie:
    """Permanently remove a movie. Deleted ids are never reused."""

    def __init__(self, movie_repository: MovieRepository) -> None:
        self._repository = movie_repository

    def execute(self, request: DeleteMovieRequest) -> None:
        self._repository.delete(request.movie_id)
