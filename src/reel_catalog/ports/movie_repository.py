from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence

from reel_catalog.domain.filters import Filters, Metadata
from reel_catalog.domain.movie import Movie


@dataclass(frozen=True)
class MovieListResult:
    """One page of movies plus its paging metadata."""

    movies: list[Movie]
    metadata: Metadata = field(default_factory=Metadata)


class MovieRepository(ABC):
    """
    Port for movie persistence.

    Contract (Preconditions):
        - movies and filters must be validated by the caller (UseCase)
        - Implementations trust inputs and never re-validate invariants

    Errors:
        - InvalidIdError for ids that are not 32 hex characters
        - NotFoundError when get/delete find no record
        - DuplicateRecordError when the store rejects a write as a duplicate
        - StoreError / StoreTimeoutError for infrastructure failures
    """

    @abstractmethod
    def insert(self, movie: Movie) -> str:
        """
        Persist a new movie.

        The store assigns id and creation time; movie.id and movie.version are ignored.

        Returns:
            The new movie id
        """
        ...

    @abstractmethod
    def get(self, movie_id: str) -> Movie: ...

    @abstractmethod
    def update(self, movie: Movie, movie_id: str) -> None:
        """
        Replace title, year, runtime and genres and bump version.

        The version is advisory: it is never compared against an expected value,
        so concurrent updates are last-write-wins.
        """
        ...

    @abstractmethod
    def delete(self, movie_id: str) -> None: ...

    @abstractmethod
    def get_all(self, title: str, genres: Sequence[str], filters: Filters) -> MovieListResult:
        """
        Search, sort and paginate movies.

        Precondition: filters must be validated by caller (UseCase).

        Args:
            title: Free-text title search (empty for none)
            genres: Genre search terms (empty for none)
            filters: Paging and sort parameters - pre-validated

        Returns:
            MovieListResult with the requested page and its metadata
        """
        ...
