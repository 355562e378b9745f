from datetime import date

from core.validator import Validator, unique

EARLIEST_YEAR = 1888
MAX_TITLE_BYTES = 500
MAX_GENRES = 5


def validate_movie(v: Validator, movie, current_year: int | None = None) -> None:
    """Run every movie rule against ``movie``, recording failures on ``v``.

    ``movie`` only needs ``title``, ``year``, ``runtime`` and ``genres``
    attributes, so transient ORM rows and merged update candidates both work.
    """
    if current_year is None:
        current_year = date.today().year

    title = movie.title or ""
    v.check(title != "", "title", "must be provided")
    v.check(len(title.encode("utf-8")) <= MAX_TITLE_BYTES, "title", "must not be more than 500 bytes long")

    year = movie.year or 0
    v.check(year != 0, "year", "must be provided")
    v.check(year >= EARLIEST_YEAR, "year", "must be greater than 1888")
    v.check(year <= current_year, "year", "must not be in the future")

    runtime = movie.runtime or 0
    v.check(runtime != 0, "runtime", "must be provided")
    v.check(runtime > 0, "runtime", "must be a positive integer")

    genres = movie.genres
    v.check(genres is not None, "genres", "must be provided")
    genres = genres or []
    v.check(len(genres) >= 1, "genres", "must contain at least 1 genre")
    v.check(len(genres) <= MAX_GENRES, "genres", "must not contain more than 5 genres")
    v.check(unique(genres), "genres", "must not contain duplicate values")
