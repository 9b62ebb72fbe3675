"""
Cat art error types and the exception handler that maps them to HTTP
"""

import logging
from typing import Optional

from fastapi import Request
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Something went wrong"


class CatArtError(Exception):
    """Base exception for every failure of the cat art pipeline"""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class TransportError(CatArtError):
    """Network-level failure reaching a remote endpoint (DNS, connect, timeout)"""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message, "TRANSPORT_ERROR")
        self.url = url


class RemoteApiError(CatArtError):
    """Remote endpoint answered with a non-success HTTP status

    Example:
        raise RemoteApiError(503, url="https://api.thecatapi.com/v1/images/search")
    """

    def __init__(self, status: int, url: Optional[str] = None):
        super().__init__(f"{url} returned HTTP {status}", "REMOTE_API_ERROR")
        self.status = status
        self.url = url


class MalformedResponseError(CatArtError):
    """Response body could not be parsed into the expected structure"""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message, "MALFORMED_RESPONSE")
        self.url = url


class EmptyResultError(CatArtError):
    """Image search returned zero candidates"""

    def __init__(self, message: Optional[str] = None, url: Optional[str] = None):
        super().__init__(message or f"{url} returned no images", "EMPTY_RESULT")
        self.url = url


class DecodeError(CatArtError):
    """Retrieved bytes are not a recognizable image format"""

    def __init__(self, message: str):
        super().__init__(message, "DECODE_ERROR")


async def cat_art_exception_handler(request: Request, exc: CatArtError):
    """Log the failure in full and answer with an opaque 500"""
    logger.error(
        "Cat art request failed on %s: %s [%s] %s",
        request.url.path,
        type(exc).__name__,
        exc.error_code,
        exc.message,
    )
    return PlainTextResponse(GENERIC_FAILURE_MESSAGE, status_code=500)
