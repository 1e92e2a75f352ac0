"""Error types and the JSON error handlers.

Every non-2xx response body has the shape ``{"error": "<message>"}``.
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class TaskNotFoundError(LookupError):
    def __init__(self, task_id: int):
        super().__init__(f"task {task_id} not found")
        self.task_id = task_id


class RepositoryError(Exception):
    """A datastore operation failed. The message is for logs, not clients."""


def error_response(message: str, status_code: int, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _validation_message(errors) -> str:
    """Pick the client-facing message for a list of pydantic errors.

    A bad path id wins over anything wrong with the body.
    """
    for err in errors:
        if err["loc"] and err["loc"][0] == "path":
            return "invalid task ID"

    err = errors[0]
    loc = err["loc"]
    field = loc[-1] if len(loc) > 1 else None

    if err["type"] in ("json_invalid", "model_attributes_type", "dict_type") or field is None:
        return "invalid JSON body"
    if isinstance(field, int):
        # position inside the raw JSON document
        return "invalid JSON body"
    if err["type"] == "missing":
        return f"{field} is required"
    if err["type"] == "value_error":
        ctx = err.get("ctx") or {}
        if "error" in ctx:
            return str(ctx["error"])
        return err["msg"]
    return f"invalid value for {field}"


def register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else HTTPStatus(exc.status_code).phrase
        # framework defaults ("Method Not Allowed", "Not Found") read like ours
        if message == HTTPStatus(exc.status_code).phrase:
            message = message.lower()
        return error_response(message, exc.status_code, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = _validation_message(exc.errors())
        logger.info("rejected %s %s: %s", request.method, request.url.path, message)
        return error_response(message, 400)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return error_response("internal server error", 500)
