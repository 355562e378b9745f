import re
from collections.abc import Hashable, Iterable


class Validator:
    """Collects field errors, keeping only the first message per field."""

    def __init__(self) -> None:
        self._errors: dict[str, str] = {}

    @property
    def errors(self) -> dict[str, str]:
        return dict(sorted(self._errors.items()))

    def valid(self) -> bool:
        return not self._errors

    def add_error(self, key: str, message: str) -> None:
        if key not in self._errors:
            self._errors[key] = message

    def check(self, ok: bool, key: str, message: str) -> None:
        if not ok:
            self.add_error(key, message)


def permitted_value(value, *permitted) -> bool:
    return value in permitted


def matches(value: str, pattern: re.Pattern) -> bool:
    return pattern.search(value) is not None


def unique(values: Iterable[Hashable]) -> bool:
    values = list(values)
    return len(values) == len(set(values))
