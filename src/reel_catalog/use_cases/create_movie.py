"""Create movie use case."""

from __future__ import annotations

from dataclasses import dataclass, field

from reel_catalog.domain.errors import DuplicateRecordError, ValidationError
from reel_catalog.domain.movie import Movie, validate_movie
from reel_catalog.domain.validator import Validator
from reel_catalog.ports.movie_repository import MovieRepository


@dataclass(frozen=True, slots=True)
class CreateMovieRequest:
    title: str
    year: int
    runtime: int
    genres: list[str] | None = field(default=None)


@dataclass(frozen=True, slots=True)
class CreateMovieResponse:
    movie: Movie


class CreateMovie:
    """
    Validate a new movie and persist it.

    Responsibilities:
    - Run every movie invariant through a Validator (all failures reported)
    - Delegate persistence to the repository
    - Fold duplicate-record errors into the validation response
    """

    def __init__(self, movie_repository: MovieRepository) -> None:
        self._repository = movie_repository

    def execute(self, request: CreateMovieRequest) -> CreateMovieResponse:
        """
        Raises:
            ValidationError: If the movie breaks an invariant or duplicates an existing one
            StoreError: If the store fails or times out
        """
        movie = Movie(
            title=request.title,
            year=request.year,
            runtime=request.runtime,
            genres=request.genres,
        )

        v = Validator()
        validate_movie(v, movie)
        v.raise_if_invalid()

        try:
            movie_id = self._repository.insert(movie)
        except DuplicateRecordError as exc:
            v.add_error(exc.field or "movie", "a movie with these details already exists")
            raise ValidationError.from_field_errors(v.errors) from exc

        return CreateMovieResponse(movie=self._repository.get(movie_id))
