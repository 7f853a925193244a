from __future__ import annotations

from dataclasses import dataclass, field

from reel_catalog.domain.filters import Filters, Metadata, validate_filters
from reel_catalog.domain.movie import Movie
from reel_catalog.domain.validator import Validator
from reel_catalog.ports.movie_repository import MovieRepository


@dataclass(frozen=True, slots=True)
class ListMoviesRequest:
    filters: Filters
    title: str = ""
    genres: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ListMoviesResponse:
    movies: list[Movie]
    metadata: Metadata


class ListMovies:
    """
    Movie listing with text search, sorting and pagination.

    This use case validates paging/sort parameters and delegates searching
    to the repository adapter. No filtering logic exists in the use case.
    """

    def __init__(self, movie_repository: MovieRepository) -> None:
        self._repository = movie_repository

    def execute(self, request: ListMoviesRequest) -> ListMoviesResponse:
        """
        Execute movie listing.

        Validates filters before delegating to repository.
        This is the single source of validation (contract programming).

        Raises:
            ValidationError: If page, page_size or sort are invalid
        """
        v = Validator()
        validate_filters(v, request.filters)
        v.raise_if_invalid()

        result = self._repository.get_all(
            title=request.title,
            genres=request.genres,
            filters=request.filters,
        )

        return ListMoviesResponse(movies=result.movies, metadata=result.metadata)
