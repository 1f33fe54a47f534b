"""Per-request log context."""

from uuid import uuid4

from fastapi import Request

from marketplace.utils.logging import add_context, clear_context


async def request_context_middleware(request: Request, call_next):
    """Bind request id, method and path to every log line emitted while serving the request."""
    request_id = request.headers.get("X-Request-Id") or uuid4().hex
    clear_context()
    add_context(request_id=request_id, method=request.method, path=request.url.path)
    try:
        response = await call_next(request)
    finally:
        clear_context()
    response.headers["X-Request-Id"] = request_id
    return response
