from __future__ import annotations

import dataclasses
import threading
import uuid
from datetime import datetime, timezone
from typing import Sequence

from reel_catalog.domain.errors import NotFoundError
from reel_catalog.domain.filters import Filters, calculate_metadata
from reel_catalog.domain.identifiers import new_record_id, parse_record_id, to_hex
from reel_catalog.domain.movie import Movie
from reel_catalog.domain.query import MatchAll, Predicate, build_predicate, resolve_sort, tokenize
from reel_catalog.ports.movie_repository import MovieListResult, MovieRepository


class InMemoryMovieRepository(MovieRepository):
    """
    Canonical contract implementation for tests.

    - Keeps movies in a dict guarded by a lock, safe to share between threads
    - Same text-search semantics as the SQL adapter (whole-word, any term)
    - Applies paging AFTER filtering and sorting
    - bounded_count mirrors the SQL adapter's count-with-limit behaviour
    """

    def __init__(self, movies: Sequence[Movie] = (), bounded_count: bool = True) -> None:
        self._movies: dict[uuid.UUID, Movie] = {}
        self._lock = threading.Lock()
        self._bounded_count = bounded_count

        for movie in movies:
            self.insert(movie)

    def insert(self, movie: Movie) -> str:
        movie_id = new_record_id()
        stored = dataclasses.replace(
            movie,
            id=to_hex(movie_id),
            genres=list(movie.genres or []),
            version=0,
            created_at=datetime.now(timezone.utc),
        )

        with self._lock:
            self._movies[movie_id] = stored
        with self._lock:
            self._movies[movie_id] = dataclasses.replace(stored, version=stored.version + 1)

        return to_hex(movie_id)

    def get(self, movie_id: str) -> Movie:
        oid = parse_record_id(movie_id)

        with self._lock:
            movie = self._movies.get(oid)

        if movie is None:
            raise NotFoundError(resource="Movie", identifier=movie_id)
        return movie

    def update(self, movie: Movie, movie_id: str) -> None:
        oid = parse_record_id(movie_id)

        with self._lock:
            current = self._movies.get(oid)
            if current is None:
                return
            self._movies[oid] = dataclasses.replace(
                current,
                title=movie.title,
                year=movie.year,
                runtime=movie.runtime,
                genres=list(movie.genres or []),
                version=current.version + 1,
            )

    def delete(self, movie_id: str) -> None:
        oid = parse_record_id(movie_id)

        with self._lock:
            removed = self._movies.pop(oid, None)

        if removed is None:
            raise NotFoundError(resource="Movie", identifier=movie_id)

    def get_all(self, title: str, genres: Sequence[str], filters: Filters) -> MovieListResult:
        predicate = build_predicate(title, genres)
        order = resolve_sort(filters.sort)

        with self._lock:
            matches = [movie for movie in self._movies.values() if self._matches(movie, predicate)]

        # Two stable sorts: id first, then the requested key, so ties stay in id order
        matches.sort(key=lambda movie: movie.id)
        matches.sort(key=lambda movie: getattr(movie, order.field), reverse=order.descending)

        start = filters.offset()
        end = start + filters.limit()
        page = matches[start:end]

        total = len(page) if self._bounded_count else len(matches)
        metadata = calculate_metadata(total, filters.page, filters.page_size)

        return MovieListResult(movies=page, metadata=metadata)

    def _matches(self, movie: Movie, predicate: Predicate) -> bool:
        if isinstance(predicate, MatchAll):
            return True

        words = set(tokenize(" ".join([movie.title, *(movie.genres or [])])))
        return any(term in words for term in predicate.terms)
