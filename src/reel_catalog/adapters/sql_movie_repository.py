"""SQLAlchemy implementation of MovieRepository."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable, Iterator, Sequence

from sqlalchemy import delete, false, func, or_, select, text, update
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from reel_catalog.domain.errors import (
    DuplicateRecordError,
    NotFoundError,
    StoreError,
    StoreTimeoutError,
)
from reel_catalog.domain.filters import Filters, calculate_metadata
from reel_catalog.domain.identifiers import new_record_id, parse_record_id, to_hex
from reel_catalog.domain.movie import Movie
from reel_catalog.domain.query import MatchAll, Predicate, SortOrder, build_predicate, resolve_sort, tokenize
from reel_catalog.infra.db.config import DEFAULT_STORE_TIMEOUT_SECONDS
from reel_catalog.infra.db.models.movie import MovieRow
from reel_catalog.ports.movie_repository import MovieListResult, MovieRepository

if TYPE_CHECKING:
    from sqlalchemy.sql import ColumnElement

logger = logging.getLogger(__name__)

# SQLSTATE codes (PostgreSQL)
_QUERY_CANCELED = "57014"
_UNIQUE_VIOLATION = "23505"


def search_document(title: str, genres: Sequence[str]) -> str:
    """Build the padded word list stored in MovieRow.search_text."""
    words = tokenize(" ".join([title, *genres]))
    return f" {' '.join(words)} "


def _word_pattern(term: str) -> str:
    # Tokens are \w+ so "_" is the only LIKE wildcard they can contain
    escaped = term.replace("_", "\\_")
    return f"% {escaped} %"


def _sqlstate(exc: SQLAlchemyError) -> str | None:
    orig = getattr(exc, "orig", None)
    # psycopg 3 exposes .sqlstate, psycopg2 exposes .pgcode
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _is_unique_violation(exc: IntegrityError) -> bool:
    return _sqlstate(exc) == _UNIQUE_VIOLATION or "UNIQUE constraint failed" in str(exc.orig)


def _duplicate_field(exc: IntegrityError) -> str | None:
    """Best-effort name of the column behind a unique violation."""
    message = str(exc.orig)
    # SQLite: "UNIQUE constraint failed: movies.title"
    if "UNIQUE constraint failed:" in message:
        column = message.split("UNIQUE constraint failed:", 1)[1].strip().split(",")[0]
        return column.rsplit(".", 1)[-1] or None

    # PostgreSQL: constraint named "<table>_<column>_key"
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    prefix = f"{MovieRow.__tablename__}_"
    if constraint and constraint.startswith(prefix) and constraint.endswith("_key"):
        return constraint[len(prefix) : -len("_key")]

    return None


class SqlMovieRepository(MovieRepository):
    """
    SQLAlchemy implementation of MovieRepository.

    - One instance per request, bound to that request's session
    - Every call runs under a deadline; overruns raise StoreTimeoutError and
      roll the session back so no partial write is visible
    - Text search runs against the denormalised search_text column
    - Converts MovieRow (infrastructure) to Movie (domain)
    """

    def __init__(
        self,
        session: Session,
        timeout: float = DEFAULT_STORE_TIMEOUT_SECONDS,
        bounded_count: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
            timeout: Deadline in seconds for each repository call
            bounded_count: Apply the page's limit/offset to the count query,
                so total_records never exceeds one page (historical behaviour)
            clock: Monotonic clock used to measure the deadline
        """
        self._session = session
        self._timeout = timeout
        self._bounded_count = bounded_count
        self._clock = clock
        self._started = 0.0
        self._operation = ""

    def insert(self, movie: Movie) -> str:
        movie_id = new_record_id()
        genres = list(movie.genres or [])

        row = MovieRow(
            id=movie_id,
            created_at=datetime.now(timezone.utc),
            title=movie.title,
            year=movie.year,
            runtime=movie.runtime,
            genres=genres,
            version=0,
            search_text=search_document(movie.title, genres),
        )

        with self._deadline("insert"):
            self._session.add(row)
            self._statement_budget()
            self._session.flush()

            # Second physical write: version starts life at 1
            self._statement_budget()
            self._session.execute(
                update(MovieRow)
                .where(MovieRow.id == movie_id)
                .values(version=MovieRow.version + 1)
                .execution_options(synchronize_session="fetch")
            )

        return to_hex(movie_id)

    def get(self, movie_id: str) -> Movie:
        oid = parse_record_id(movie_id)

        with self._deadline("get"):
            self._statement_budget()
            query = (
                select(MovieRow)
                .where(MovieRow.id == oid)
                .execution_options(populate_existing=True)
            )
            row = self._session.execute(query).scalar_one_or_none()

        if row is None:
            raise NotFoundError(resource="Movie", identifier=movie_id)

        return self._to_domain(row)

    def update(self, movie: Movie, movie_id: str) -> None:
        oid = parse_record_id(movie_id)
        genres = list(movie.genres or [])

        # No WHERE on version: the counter is advisory, last write wins
        statement = (
            update(MovieRow)
            .where(MovieRow.id == oid)
            .values(
                title=movie.title,
                year=movie.year,
                runtime=movie.runtime,
                genres=genres,
                search_text=search_document(movie.title, genres),
                version=MovieRow.version + 1,
            )
            .execution_options(synchronize_session="fetch")
        )

        with self._deadline("update"):
            self._statement_budget()
            self._session.execute(statement)

    def delete(self, movie_id: str) -> None:
        oid = parse_record_id(movie_id)

        with self._deadline("delete"):
            self._statement_budget()
            result = self._session.execute(delete(MovieRow).where(MovieRow.id == oid))

        if result.rowcount == 0:
            raise NotFoundError(resource="Movie", identifier=movie_id)

    def get_all(self, title: str, genres: Sequence[str], filters: Filters) -> MovieListResult:
        """
        Search, sort and paginate movies.

        Executes two queries:
        1. COUNT(*) over the matching rows
        2. SELECT with ORDER BY / OFFSET / LIMIT for the page itself

        With bounded_count the COUNT query carries the same OFFSET/LIMIT as the
        page, so total_records is the size of the current page rather than the
        full match count.
        """
        where = self._translate(build_predicate(title, genres))

        with self._deadline("get_all"):
            count_source = select(MovieRow.id)
            if where is not None:
                count_source = count_source.where(where)
            if self._bounded_count:
                count_source = count_source.offset(filters.offset()).limit(filters.limit())

            count_query = select(func.count()).select_from(count_source.subquery())
            self._statement_budget()
            total = self._session.execute(count_query).scalar() or 0

            metadata = calculate_metadata(total, filters.page, filters.page_size)

            query = select(MovieRow)
            if where is not None:
                query = query.where(where)
            query = (
                query.order_by(*self._order_by(resolve_sort(filters.sort)))
                .offset(filters.offset())
                .limit(filters.limit())
            )
            self._statement_budget()
            rows = self._session.execute(query).scalars().all()

        return MovieListResult(movies=[self._to_domain(row) for row in rows], metadata=metadata)

    @contextmanager
    def _deadline(self, operation: str) -> Iterator[None]:
        """
        Run a block of store calls under the repository deadline.

        SQLAlchemy errors are wrapped into the domain taxonomy with the driver
        error chained as __cause__. The session is rolled back on any failure.
        """
        started = self._clock()
        self._started = started
        self._operation = operation
        try:
            yield
        except StoreTimeoutError:
            self._session.rollback()
            raise
        except IntegrityError as exc:
            self._session.rollback()
            if _is_unique_violation(exc):
                raise DuplicateRecordError(resource="Movie", field=_duplicate_field(exc)) from exc
            raise StoreError(f"{operation} failed: integrity error", operation=operation) from exc
        except OperationalError as exc:
            self._session.rollback()
            if _sqlstate(exc) == _QUERY_CANCELED:
                logger.warning(
                    "Store call cancelled by server timeout",
                    extra={"operation": operation, "timeout": self._timeout},
                )
                raise StoreTimeoutError(
                    f"{operation} exceeded {self._timeout}s deadline", operation=operation
                ) from exc
            raise StoreError(f"{operation} failed", operation=operation) from exc
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise StoreError(f"{operation} failed", operation=operation) from exc

        elapsed = self._clock() - started
        if elapsed > self._timeout:
            self._session.rollback()
            logger.warning(
                "Store call exceeded deadline",
                extra={"operation": operation, "elapsed": elapsed, "timeout": self._timeout},
            )
            raise StoreTimeoutError(
                f"{operation} exceeded {self._timeout}s deadline", operation=operation
            )

    def _statement_budget(self) -> None:
        """
        Cap the next statement at what is left of the current deadline.

        Only PostgreSQL honours a per-transaction statement_timeout; other
        backends rely on the elapsed-time check in _deadline alone.
        """
        if self._session.get_bind().dialect.name != "postgresql":
            return

        remaining = self._timeout - (self._clock() - self._started)
        if remaining <= 0:
            logger.warning(
                "Store call exceeded deadline",
                extra={"operation": self._operation, "timeout": self._timeout},
            )
            raise StoreTimeoutError(
                f"{self._operation} exceeded {self._timeout}s deadline", operation=self._operation
            )

        # set_config(..., true) is SET LOCAL: it lapses when the transaction ends
        self._session.execute(
            text("SELECT set_config('statement_timeout', :ms, true)"),
            {"ms": str(max(1, int(remaining * 1000)))},
        )

    def _translate(self, predicate: Predicate) -> ColumnElement[bool] | None:
        """Translate a store-independent predicate into a WHERE clause (None matches all)."""
        if isinstance(predicate, MatchAll):
            return None

        terms = list(dict.fromkeys(predicate.terms))
        if not terms:
            return false()

        return or_(*(MovieRow.search_text.like(_word_pattern(term), escape="\\") for term in terms))

    def _order_by(self, order: SortOrder) -> list[ColumnElement[object]]:
        column = getattr(MovieRow, order.field)
        clauses = [column.desc() if order.descending else column.asc()]

        # Ascending id as tie-breaker keeps pages stable across requests
        if order.field != "id":
            clauses.append(MovieRow.id.asc())
        return clauses

    def _to_domain(self, row: MovieRow) -> Movie:
        """
        Convert database model (MovieRow) to domain entity (Movie).

        Args:
            row: SQLAlchemy MovieRow model

        Returns:
            Movie domain entity
        """
        return Movie(
            id=to_hex(row.id),
            title=row.title,
            year=row.year,
            runtime=row.runtime,
            genres=list(row.genres),
            version=row.version,
            created_at=row.created_at,
        )
