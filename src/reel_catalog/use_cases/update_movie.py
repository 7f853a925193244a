"""Update movie use case."""

from __future__ import annotations

from dataclasses import dataclass, field

from reel_catalog.domain.movie import Movie, validate_movie
from reel_catalog.domain.validator import Validator
from reel_catalog.ports.movie_repository import MovieRepository


@dataclass(frozen=True, slots=True)
class UpdateMovieRequest:
    movie_id: str
    title: str
    year: int
    runtime: int
    genres: list[str] | None = field(default=None)


@dataclass(frozen=True, slots=True)
class UpdateMovieResponse:
    movie: Movie


class UpdateMovie:
    """
    Replace a movie's mutable fields.

    The existing movie is read first so a missing id surfaces as NotFoundError
    (the repository's update alone treats an unknown id as a no-op). There is
    no version check between the read and the write: concurrent updates are
    last-write-wins.
    """

    def __init__(self, movie_repository: MovieRepository) -> None:
        self._repository = movie_repository

    def execute(self, request: UpdateMovieRequest) -> UpdateMovieResponse:
        """
        Raises:
            InvalidIdError: If movie_id is not a valid identifier
            NotFoundError: If no movie has that id
            ValidationError: If the replacement breaks an invariant
        """
        current = self._repository.get(request.movie_id)

        replacement = Movie(
            id=current.id,
            title=request.title,
            year=request.year,
            runtime=request.runtime,
            genres=request.genres,
            version=current.version,
        )

        v = Validator()
        validate_movie(v, replacement)
        v.raise_if_invalid()

        self._repository.update(replacement, request.movie_id)

        return UpdateMovieResponse(movie=self._repository.get(request.movie_id))
