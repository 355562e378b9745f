import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.errors import (
    BadRequestError,
    EditConflictError,
    PersistenceError,
    RecordNotFoundError,
    ValidationFailure,
)

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "the requested resource could not be found"
EDIT_CONFLICT_MESSAGE = "unable to update the record due to an edit conflict, please try again"
SERVER_ERROR_MESSAGE = "the server encountered a problem and could not process the request"


def error_response(status_code: int, message) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def validation_failure_handler(request: Request, exc: ValidationFailure) -> JSONResponse:
    return error_response(422, exc.errors)


async def not_found_handler(request: Request, exc: RecordNotFoundError) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)


async def edit_conflict_handler(request: Request, exc: EditConflictError) -> JSONResponse:
    return error_response(status.HTTP_409_CONFLICT, EDIT_CONFLICT_MESSAGE)


async def bad_request_handler(request: Request, exc: BadRequestError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, exc.message)


async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s failed", request.method, request.url.path, exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = NOT_FOUND_MESSAGE
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = f"the {request.method} method is not supported for this resource"
    else:
        message = exc.detail
    return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationFailure, validation_failure_handler)
    app.add_exception_handler(RecordNotFoundError, not_found_handler)
    app.add_exception_handler(EditConflictError, edit_conflict_handler)
    app.add_exception_handler(BadRequestError, bad_request_handler)
    app.add_exception_handler(PersistenceError, server_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, server_error_handler)
