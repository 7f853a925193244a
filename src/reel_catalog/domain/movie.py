from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from reel_catalog.domain.validator import Validator, unique

MAX_TITLE_BYTES = 500
EARLIEST_YEAR = 1888
MAX_GENRES = 5

RUNTIME_UNIT = "mins"


class InvalidRuntimeFormatError(ValueError):
    """Raised when a runtime string is not of the form '<N> mins'."""

    def __init__(self, value: str) -> None:
        super().__init__(f"invalid runtime format: {value!r} (expected '<minutes> mins')")


@dataclass(frozen=True, slots=True)
class Movie:
    title: str
    year: int
    runtime: int
    genres: list[str] | None
    id: str = ""
    version: int = 0
    # Assigned by the repository on insert; never leaves the core
    created_at: datetime | None = field(default=None, compare=False, repr=False)


def validate_movie(v: Validator, movie: Movie) -> None:
    """Record every invariant violation of ``movie`` on ``v``."""
    v.check(movie.title != "", "title", "must be provided")
    v.check(len(movie.title.encode("utf-8")) <= MAX_TITLE_BYTES, "title", "must not be more than 500 bytes long")

    v.check(movie.year != 0, "year", "must be provided")
    v.check(movie.year >= EARLIEST_YEAR, "year", "must be greater than 1888")
    v.check(movie.year <= datetime.now(timezone.utc).year, "year", "must not be in the future")

    v.check(movie.runtime != 0, "runtime", "must be provided")
    v.check(movie.runtime > 0, "runtime", "must be a positive integer")

    v.check(movie.genres is not None, "genres", "must be provided")
    genres = movie.genres or []
    v.check(len(genres) >= 1, "genres", "must contain at least 1 genre")
    v.check(len(genres) <= MAX_GENRES, "genres", "must not contain more than 5 genres")
    v.check(unique(genres), "genres", "must not contain duplicate values")


def format_runtime(minutes: int) -> str:
    return f"{minutes} {RUNTIME_UNIT}"


def parse_runtime(value: str) -> int:
    """
    Parse the '<N> mins' form used at the API boundary.

    Raises:
        InvalidRuntimeFormatError: If the value is not exactly '<integer> mins'
    """
    parts = value.strip('"').split(" ")
    if len(parts) != 2 or parts[1] != RUNTIME_UNIT:
        raise InvalidRuntimeFormatError(value)

    try:
        return int(parts[0])
    except ValueError:
        raise InvalidRuntimeFormatError(value) from None
