"""
Dependency injection for FastAPI routes.

Key principle: Database sessions (and the repositories bound to them) are
per-request, never cached. Only the engine behind get_session is shared.
"""

from __future__ import annotations

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from reel_catalog.adapters.sql_movie_repository import SqlMovieRepository
from reel_catalog.infra.db.config import store_timeout_seconds
from reel_catalog.infra.db.session import get_session
from reel_catalog.ports.movie_repository import MovieRepository
from reel_catalog.use_cases.create_movie import CreateMovie
from reel_catalog.use_cases.delete_movie import DeleteMovie
from reel_catalog.use_cases.get_movie import GetMovie
from reel_catalog.use_cases.list_movies import ListMovies
from reel_catalog.use_cases.update_movie import UpdateMovie


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    FastAPI will:
    1. Call this function when a request starts
    2. Inject the session into the route
    3. Commit/rollback and close the session when the request ends

    Yields:
        Session: SQLAlchemy database session (per-request)
    """
    with get_session() as session:
        yield session


def get_movie_repository(db: Session = Depends(get_db)) -> MovieRepository:
    """Repository bound to this request's session."""
    return SqlMovieRepository(session=db, timeout=store_timeout_seconds())


def get_create_movie_use_case(
    repository: MovieRepository = Depends(get_movie_repository),
) -> CreateMovie:
    return CreateMovie(movie_repository=repository)


def get_get_movie_use_case(
    repository: MovieRepository = Depends(get_movie_repository),
) -> GetMovie:
    return GetMovie(movie_repository=repository)


def get_update_movie_use_case(
    repository: MovieRepository = Depends(get_movie_repository),
) -> UpdateMovie:
    return UpdateMovie(movie_repository=repository)


def get_delete_movie_use_case(
    repository: MovieRepository = Depends(get_movie_repository),
) -> DeleteMovie:
    return DeleteMovie(movie_repository=repository)


def get_list_movies_use_case(
    repository: MovieRepository = Depends(get_movie_repository),
) -> ListMovies:
    return ListMovies(movie_repository=repository)
