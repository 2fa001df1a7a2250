"""
Songbook Backend - Response Encoder
====================================

What:  Turns controller outcomes into HTTP responses.
How:   Success outcomes are encoded by the helpers below, called from the
       song routes. Failure outcomes are exceptions, encoded by global
       handlers that register_exception_handlers() installs on the app.
Who:   routes/songs.py (success) and main.create_app (handlers).

Outcome Mapping:
    Completed(list)            → 200, JSON array, X-Total-Count header
    Completed(record)          → 200, JSON record
    Completed(record) + write  → 303 See Other to the list, JSON record body
    Completed(deleted)         → 303 See Other to the list, empty body
    ValidationError            → 400 {error, field, reason, message}
    InvalidIdError             → 400 {error, reason, message}
    NotFoundError              → 404 {error, message}
    StoreUnavailableError      → 500 generic message (details logged only)
    Exception (fallback)       → 500 generic message (stack trace logged only)

Every error body carries the request ID so it can be matched to log lines.
The catch-all handler also sets the X-Request-ID header itself: Starlette
serves it from ServerErrorMiddleware, outside RequestIDMiddleware.
"""

import logging
from typing import Sequence

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from songbook.exceptions import (
    InvalidIdError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from songbook.middleware.request_id import request_id_var
from songbook.schemas.song import SongRecord

logger = logging.getLogger(__name__)


def _request_id(request: Request) -> str:
    return request_id_var.get("") or getattr(request.state, "request_id", "")


# ══════════════════════════════════════════════════════════════════════════
# Success Encoding
# ══════════════════════════════════════════════════════════════════════════

def encode_song_list(songs: Sequence[SongRecord]) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=[song.model_dump(mode="json") for song in songs],
        headers={"X-Total-Count": str(len(songs))},
    )


def encode_song(song: SongRecord) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_200_OK, content=song.model_dump(mode="json"))


def encode_song_redirect(song: SongRecord, location: str) -> JSONResponse:
    """
    Encode a completed create or update.

    The 303 sends browsers and form posts on to `location` with a GET; API
    clients that do not follow redirects still get the stored record.
    """
    return JSONResponse(
        status_code=status.HTTP_303_SEE_OTHER,
        content=song.model_dump(mode="json"),
        headers={"Location": location},
    )


def encode_deleted(location: str) -> Response:
    return Response(status_code=status.HTTP_303_SEE_OTHER, headers={"Location": location})


# ══════════════════════════════════════════════════════════════════════════
# Failure Encoding
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Security: Handlers NEVER expose internal details (stack traces, SQL,
    hostnames) in the API response. Details are logged server-side.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        """Client sent fields that fail validation; say which and why."""
        rid = _request_id(request)
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "validation_error",
                "field": exc.field,
                "reason": exc.reason,
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(InvalidIdError)
    async def handle_invalid_id(request: Request, exc: InvalidIdError):
        rid = _request_id(request)
        logger.warning("[%s] Invalid id: %s", rid, exc.message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "invalid_id",
                "reason": exc.reason,
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        """Requested song doesn't exist."""
        rid = _request_id(request)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(StoreUnavailableError)
    async def handle_store_unavailable(request: Request, exc: StoreUnavailableError):
        """Store failure: generic message to user, details logged server-side."""
        rid = _request_id(request)
        logger.error("[%s] Store unavailable: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "store_unavailable",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all for truly unexpected errors. Stack trace is logged, never returned."""
        rid = _request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
            headers={"X-Request-ID": rid} if rid else None,
        )
