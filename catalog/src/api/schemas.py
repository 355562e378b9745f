from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict

from core.runtime import format_runtime, parse_runtime
from models.movie import Movie

# Accepts "<N> mins" only; anything else is rejected by the codec
Runtime = Annotated[int, BeforeValidator(parse_runtime)]


class MovieInput(BaseModel):
    """Create payload. Omitted fields fall back to zero values and are
    reported by the movie rules rather than by decoding."""

    model_config = ConfigDict(extra="forbid", strict=True)

    title: str = ""
    year: int = 0
    runtime: Runtime = 0
    genres: list[str] | None = None

    def to_movie(self) -> Movie:
        return Movie(title=self.title, year=self.year, runtime=self.runtime, genres=self.genres)


class MoviePatch(BaseModel):
    """Partial update payload: ``None`` means the field was not sent."""

    model_config = ConfigDict(extra="forbid", strict=True)

    title: str | None = None
    year: int | None = None
    runtime: Runtime | None = None
    genres: list[str] | None = None

    def apply_to(self, movie: Movie) -> Movie:
        if self.title is not None:
            movie.title = self.title
        if self.year is not None:
            movie.year = self.year
        if self.runtime is not None:
            movie.runtime = self.runtime
        # An explicit [] replaces the genres; validation then rejects it
        if self.genres is not None:
            movie.genres = self.genres
        return movie


def serialize_movie(movie: Movie) -> dict:
    data = {"id": movie.id, "title": movie.title}
    if movie.year:
        data["year"] = movie.year
    if movie.runtime:
        data["runtime"] = format_runtime(movie.runtime)
    if movie.genres:
        data["genres"] = list(movie.genres)
    data["version"] = movie.version
    return data
