"""Error envelope for the HTTP surface.

Every failure leaves as `{"message": ..., "statusCode": ...}`. Domain code
raises and routes never catch; these handlers do the translation.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from marketplace.catalogue.storage import ImageUploadError
from marketplace.shared.errors import AuthorizationError, ConflictError
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


def error_message(exc: Exception) -> str:
    """Flatten Protean's `{field: [messages]}` payloads into one readable line."""
    messages = getattr(exc, "messages", None) or getattr(exc, "message", None) or str(exc)
    if isinstance(messages, dict):
        parts = []
        for field, errors in messages.items():
            errors = errors if isinstance(errors, list | tuple) else [errors]
            parts.append(f"{field}: {', '.join(str(error) for error in errors)}")
        return "; ".join(parts)
    if isinstance(messages, list | tuple):
        return "; ".join(str(message) for message in messages)
    return str(messages)


def envelope(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "statusCode": status_code})


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return envelope(400, error_message(exc))


async def _invalid_operation(request: Request, exc: InvalidOperationError) -> JSONResponse:
    return envelope(400, error_message(exc))


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()]
    return envelope(400, "; ".join(details))


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return envelope(404, error_message(exc))


async def _forbidden(request: Request, exc: AuthorizationError) -> JSONResponse:
    return envelope(403, exc.message)


async def _conflict(request: Request, exc: ConflictError) -> JSONResponse:
    return envelope(409, exc.message)


async def _upload_failed(request: Request, exc: ImageUploadError) -> JSONResponse:
    logger.error("image_upload_aborted_submission", path=request.url.path, error=exc.message)
    return envelope(502, exc.message)


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return envelope(exc.status_code, str(exc.detail))


async def _internal_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, method=request.method)
    return envelope(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(InvalidOperationError, _invalid_operation)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(AuthorizationError, _forbidden)
    app.add_exception_handler(ConflictError, _conflict)
    app.add_exception_handler(ImageUploadError, _upload_failed)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _internal_error)
