import math
from dataclasses import dataclass

from core.validator import Validator, permitted_value

MAX_PAGE = 10_000_000
MAX_PAGE_SIZE = 100

MOVIE_SORT_SAFELIST = (
    "id",
    "title",
    "year",
    "runtime",
    "-id",
    "-title",
    "-year",
    "-runtime",
)


@dataclass(frozen=True)
class Filters:
    page: int = 1
    page_size: int = 20
    sort: str = "id"
    sort_safelist: tuple[str, ...] = MOVIE_SORT_SAFELIST

    def sort_column(self) -> str:
        # Only reached with validated filters
        if self.sort not in self.sort_safelist:
            raise ValueError(f"unsafe sort parameter: {self.sort!r}")
        return self.sort.lstrip("-")

    def sort_direction(self) -> str:
        return "DESC" if self.sort.startswith("-") else "ASC"

    def limit(self) -> int:
        return self.page_size

    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def validate_filters(v: Validator, filters: Filters) -> None:
    v.check(filters.page > 0, "page", "must be greater than zero")
    v.check(filters.page <= MAX_PAGE, "page", "must be a maximum of 10 million")
    v.check(filters.page_size > 0, "page_size", "must be greater than zero")
    v.check(filters.page_size <= MAX_PAGE_SIZE, "page_size", "must be a maximum of 100")
    v.check(permitted_value(filters.sort, *filters.sort_safelist), "sort", "invalid sort value")


def calculate_metadata(total_records: int, page: int, page_size: int) -> dict:
    if total_records == 0:
        return {}
    return {
        "current_page": page,
        "page_size": page_size,
        "first_page": 1,
        "last_page": math.ceil(total_records / page_size),
        "total_records": total_records,
    }
