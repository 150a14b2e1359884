"""Error types and their HTTP handlers."""

import logging

from fastapi import Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


# Exceptions
class WikiError(Exception):
    """Base class for errors surfaced to the client as a server error."""


class StorageError(WikiError):
    """A write affected no rows, or the database call failed."""


class RenderError(WikiError):
    """A template could not be filled in."""


# Exception handlers
def wiki_error_handler(request: Request, exc: WikiError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return PlainTextResponse(
        str(exc),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code != status.HTTP_404_NOT_FOUND:
        return await http_exception_handler(request, exc)
    return PlainTextResponse(
        "404 page not found",
        status_code=status.HTTP_404_NOT_FOUND,
    )
