import re
from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError
from starlette.datastructures import QueryParams

from config import settings
from core.errors import BadRequestError, InvalidRuntimeFormat, RecordNotFoundError
from core.validator import Validator
from models.base import MAX_ID

M = TypeVar("M", bound=BaseModel)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


async def read_json(request: Request, model: type[M], max_bytes: int | None = None) -> M:
    """Decode a request body into ``model``.

    The body must be a single JSON object no larger than ``max_bytes``
    with no keys the model does not declare. Any problem is raised as a
    ``BadRequestError`` carrying a client-facing message.
    """
    if max_bytes is None:
        max_bytes = settings.MAX_BODY_BYTES

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise BadRequestError(f"body must not be larger than {max_bytes} bytes")

    if not body.strip():
        raise BadRequestError("body must not be empty")

    try:
        return model.model_validate_json(bytes(body))
    except ValidationError as exc:
        raise BadRequestError(_describe(exc.errors()[0])) from exc


def _describe(error: dict) -> str:
    if error["type"] == "json_invalid":
        return "body contains badly-formed JSON"

    cause = error.get("ctx", {}).get("error")
    if isinstance(cause, InvalidRuntimeFormat):
        return str(cause)

    loc = error["loc"]
    if error["type"] == "extra_forbidden":
        return f'body contains unknown key "{loc[0]}"'
    if not loc:
        return "body contains incorrect JSON type"
    return f'body contains incorrect JSON type for field "{loc[0]}"'


def read_id_param(raw: str) -> int:
    if not _INTEGER.fullmatch(raw) or not 1 <= int(raw) <= MAX_ID:
        raise RecordNotFoundError("invalid id parameter")
    return int(raw)


def read_string(query: QueryParams, key: str, default: str) -> str:
    return query.get(key) or default


def read_csv(query: QueryParams, key: str, default: list[str]) -> list[str]:
    csv = query.get(key)
    if not csv:
        return default
    return csv.split(",")


def read_int(query: QueryParams, key: str, default: int, v: Validator) -> int:
    """Read an integer query value, recording a field error on ``v`` if it
    does not parse."""
    raw = query.get(key)
    if not raw:
        return default
    if not _INTEGER.fullmatch(raw) or not _INT64_MIN <= int(raw) <= _INT64_MAX:
        v.add_error(key, "must be an integer value")
        return default
    return int(raw)
