import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import TypeVar

from sqlalchemy import delete, func, insert, literal_column, select, type_coerce, update
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.errors import EditConflictError, PersistenceError, RecordNotFoundError, StoreTimeoutError
from core.filters import Filters, calculate_metadata
from models.base import MAX_ID
from models.movie import Movie

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SORT_COLUMNS = {
    "id": Movie.id,
    "title": Movie.title,
    "year": Movie.year,
    "runtime": Movie.runtime,
}


class MovieStore:
    """Persistence for movies, with a version check on every update.

    Every call is bounded by a deadline: ``query_timeout`` by default, or the
    ``timeout`` passed to the call. A call that overruns is cancelled and
    surfaces as ``StoreTimeoutError``. Committing is left to the caller;
    ``core.database.get_db`` puts its commit under ``DB_QUERY_TIMEOUT`` too.

    Ids outside the BIGINT range can never match a row and are rejected
    as not found before any query runs.
    """

    def __init__(self, db: AsyncSession, query_timeout: float | None = None):
        self.db = db
        self.query_timeout = query_timeout if query_timeout is not None else settings.DB_QUERY_TIMEOUT

    async def insert(self, movie: Movie, *, timeout: float | None = None) -> Movie:
        stmt = (
            insert(Movie)
            .values(
                title=movie.title,
                year=movie.year,
                runtime=movie.runtime,
                genres=list(movie.genres),
            )
            .returning(Movie.id, Movie.created_at, Movie.version)
        )
        result = await self._run("insert", self.db.execute(stmt), timeout)
        row = result.one()
        movie.id, movie.created_at, movie.version = row.id, row.created_at, row.version
        return movie

    async def get(self, movie_id: int, *, timeout: float | None = None) -> Movie:
        if not 1 <= movie_id <= MAX_ID:
            raise RecordNotFoundError()

        stmt = select(Movie).where(Movie.id == movie_id).execution_options(populate_existing=True)
        movie = await self._run("get", self.db.scalar(stmt), timeout)
        if movie is None:
            raise RecordNotFoundError()
        # Callers merge edits into the returned row; detach it so those edits
        # only ever reach the database through update() and its version check.
        self.db.expunge(movie)
        return movie

    async def update(self, movie: Movie, *, timeout: float | None = None) -> Movie:
        stmt = (
            update(Movie)
            .where(Movie.id == movie.id, Movie.version == movie.version)
            .values(
                title=movie.title,
                year=movie.year,
                runtime=movie.runtime,
                genres=list(movie.genres),
                version=Movie.version + 1,
            )
            .returning(Movie.version)
            .execution_options(synchronize_session=False)
        )
        result = await self._run("update", self.db.execute(stmt), timeout)
        new_version = result.scalar_one_or_none()
        if new_version is None:
            # Either the row is gone or another writer bumped the version first
            logger.info("Edit conflict on movie %s at version %s", movie.id, movie.version)
            raise EditConflictError()
        movie.version = new_version
        return movie

    async def delete(self, movie_id: int, *, timeout: float | None = None) -> None:
        if not 1 <= movie_id <= MAX_ID:
            raise RecordNotFoundError()

        stmt = delete(Movie).where(Movie.id == movie_id).execution_options(synchronize_session=False)
        result = await self._run("delete", self.db.execute(stmt), timeout)
        if result.rowcount == 0:
            raise RecordNotFoundError()

    async def get_all(
        self,
        title: str,
        genres: Sequence[str],
        filters: Filters,
        *,
        timeout: float | None = None,
    ) -> tuple[list[Movie], dict]:
        sort_column = _SORT_COLUMNS[filters.sort_column()]
        order = sort_column.desc() if filters.sort_direction() == "DESC" else sort_column.asc()

        stmt = select(Movie, func.count().over().label("total_records"))
        if title:
            stmt = stmt.where(Movie.title.icontains(title, autoescape=True))
        if genres:
            stmt = stmt.where(*self._genre_clauses(genres))
        stmt = (
            stmt.order_by(order, Movie.id.asc())
            .limit(filters.limit())
            .offset(filters.offset())
            .execution_options(populate_existing=True)
        )

        result = await self._run("get_all", self.db.execute(stmt), timeout)
        rows = result.all()

        total_records = rows[0].total_records if rows else 0
        movies = [row.Movie for row in rows]
        return movies, calculate_metadata(total_records, filters.page, filters.page_size)

    def _genre_clauses(self, genres: Sequence[str]) -> list:
        if self.db.get_bind().dialect.name == "postgresql":
            return [type_coerce(Movie.genres, JSONB).contains(list(genres))]

        clauses = []
        for genre in genres:
            entries = func.json_each(Movie.genres).table_valued("value")
            clauses.append(select(literal_column("1")).select_from(entries).where(entries.c.value == genre).exists())
        return clauses

    async def _run(self, operation: str, awaitable: Awaitable[T], timeout: float | None) -> T:
        deadline = timeout if timeout is not None else self.query_timeout
        try:
            return await asyncio.wait_for(awaitable, deadline)
        except asyncio.TimeoutError as exc:
            logger.warning("Store %s timed out after %ss", operation, deadline)
            raise StoreTimeoutError(operation, deadline) from exc
        except SQLAlchemyError as exc:
            raise PersistenceError(f"store {operation} failed: {exc}") from exc
