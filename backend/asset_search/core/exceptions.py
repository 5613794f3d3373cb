"""Error taxonomy for the asset search service and its HTTP mapping.

Classes:
    AssetSearchError: Base class carrying a user-facing message and an HTTP status code.
    InvalidInputError, NotFoundError: Caller mistakes (4xx).
    DimensionMismatchError: Stored vectors disagree with the configured embedder (500).
    EmbeddingProviderError, RankingBackendError, StorageError: Dependency failures (5xx).
    EmbedderConfigurationError: Fatal startup error when provider credentials are missing.

Functions:
    register_exception_handlers(app): Install JSON error handlers on a FastAPI app.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

_LOGGER = logging.getLogger(__name__)


class AssetSearchError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(AssetSearchError, ValueError):
    """A required parameter is missing or malformed; nothing was attempted."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AssetSearchError):
    status_code = status.HTTP_404_NOT_FOUND


class DimensionMismatchError(AssetSearchError):
    """Query vector length disagrees with the stored embedding length.

    Raised when the embedding deployment or dimension setting changed after
    assets were stored.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(f"Embedding dimension {received} does not match stored dimension {expected}")


class EmbeddingProviderError(AssetSearchError):
    """The remote embedding call failed or returned no usable vector."""

    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, message: str, *, detail: Optional[str] = None) -> None:
        self.detail = detail
        super().__init__(message)


class RankingBackendError(AssetSearchError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class StorageError(AssetSearchError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class EmbedderConfigurationError(RuntimeError):
    """Provider settings are incomplete; the embedder must not be constructed."""


async def _service_error_handler(request: Request, exc: AssetSearchError) -> JSONResponse:
    _LOGGER.warning(
        "%s on %s %s: %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        text = error.get("msg", "invalid value")
        messages.append(f"{location}: {text}" if location else text)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "; ".join(messages) or "Invalid request"},
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    _LOGGER.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "The operation could not be completed"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AssetSearchError, _service_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)
