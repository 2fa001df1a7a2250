"""
Songbook Backend - Song Route Handlers
=======================================

What:  The HTTP surface of the song resource.
How:   Each handler parses path/body input, delegates to SongController, and
       hands the outcome to the response encoder. Failures are raised and
       encoded by the global handlers.
Who:   API clients and the HTML forms of the songs frontend.

Route Inventory (router mounted at /songs):
    GET    /songs/          → list
    GET    /songs/{id}      → get
    POST   /songs/          → create, 303 to /songs/
    PUT    /songs/{id}      → update, 303 to /songs/
    DELETE /songs/{id}      → delete, 303 to /songs/

Request Bodies:
    JSON objects and form submissions (urlencoded or multipart) are both
    accepted; read_song_fields turns either into a plain dict. Field rules
    are enforced by the controller, not by FastAPI, so every rejection
    carries the {field, reason} shape. The body is read inside the handler,
    after the path id has been checked, so a request with a bad id and a bad
    body is reported as invalid_id.

Path ids are taken as plain strings so malformed ids reach the validation
layer and come back as invalid_id instead of FastAPI's generic 422.
"""

import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from songbook.dependencies import get_song_controller
from songbook.encoders import (
    encode_deleted,
    encode_song,
    encode_song_list,
    encode_song_redirect,
)
from songbook.exceptions import ValidationError
from songbook.schemas.song import ErrorResponse, SongRecord
from songbook.services.song_controller import SongController
from songbook.services.validation import parse_song_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/songs", tags=["Songs"])

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

SONG_BODY_SCHEMA = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {
                "schema": {
                    "type": "object",
                    "required": ["title", "artist"],
                    "properties": {
                        "title": {"type": "string"},
                        "artist": {"type": "string"},
                        "genre": {"type": "string", "nullable": True},
                    },
                },
            },
        },
    },
}


async def read_song_fields(request: Request) -> Dict[str, Any]:
    """Read the request body as a dict, from a form submission or JSON."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        try:
            form = await request.form()
        except MultiPartException as exc:
            raise ValidationError(field="body", reason=exc.message)
        except StarletteHTTPException as exc:
            # Starlette wraps parser errors in a 400 when running inside an app
            raise ValidationError(field="body", reason=str(exc.detail))
        return dict(form)

    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError(field="body", reason="must be a JSON object or a form submission")
    if not isinstance(payload, dict):
        raise ValidationError(field="body", reason="must be an object with title, artist and genre")
    return payload


def _list_location(request: Request) -> str:
    return request.url_for("list_songs").path


@router.get(
    "/",
    response_model=list[SongRecord],
    responses={500: {"description": "Store unavailable", "model": ErrorResponse}},
    summary="List all songs",
)
async def list_songs(
    controller: SongController = Depends(get_song_controller),
) -> JSONResponse:
    """List songs in insertion order. X-Total-Count carries the number of songs."""
    songs = await controller.list_songs()
    return encode_song_list(songs)


@router.get(
    "/{song_id}",
    response_model=SongRecord,
    responses={
        400: {"description": "Malformed song id", "model": ErrorResponse},
        404: {"description": "Song not found", "model": ErrorResponse},
        500: {"description": "Store unavailable", "model": ErrorResponse},
    },
    summary="Get a single song by ID",
)
async def get_song(
    song_id: str,
    controller: SongController = Depends(get_song_controller),
) -> JSONResponse:
    song = await controller.get_song(song_id)
    return encode_song(song)


@router.post(
    "/",
    status_code=303,
    responses={
        303: {"description": "Song created; redirects to the song list", "model": SongRecord},
        400: {"description": "Invalid song fields", "model": ErrorResponse},
        500: {"description": "Store unavailable", "model": ErrorResponse},
    },
    summary="Create a song",
    openapi_extra=SONG_BODY_SCHEMA,
)
async def create_song(
    request: Request,
    controller: SongController = Depends(get_song_controller),
) -> JSONResponse:
    """
    Create a song from {title, artist, genre}.

    Any `id` in the body is ignored. On success the response is a 303 to the
    song list whose body is the created record.
    """
    fields = await read_song_fields(request)
    song = await controller.create_song(fields)
    return encode_song_redirect(song, location=_list_location(request))


@router.put(
    "/{song_id}",
    status_code=303,
    responses={
        303: {"description": "Song updated; redirects to the song list", "model": SongRecord},
        400: {"description": "Malformed id or invalid song fields", "model": ErrorResponse},
        404: {"description": "Song not found", "model": ErrorResponse},
        500: {"description": "Store unavailable", "model": ErrorResponse},
    },
    summary="Replace a song's fields",
    openapi_extra=SONG_BODY_SCHEMA,
)
async def update_song(
    song_id: str,
    request: Request,
    controller: SongController = Depends(get_song_controller),
) -> JSONResponse:
    """Full replacement of title, artist and genre; an omitted genre is cleared."""
    parse_song_id(song_id)
    fields = await read_song_fields(request)
    song = await controller.update_song(song_id, fields)
    return encode_song_redirect(song, location=_list_location(request))


@router.delete(
    "/{song_id}",
    status_code=303,
    responses={
        303: {"description": "Song deleted; redirects to the song list"},
        400: {"description": "Malformed song id", "model": ErrorResponse},
        404: {"description": "Song not found", "model": ErrorResponse},
        500: {"description": "Store unavailable", "model": ErrorResponse},
    },
    summary="Delete a song",
)
async def delete_song(
    song_id: str,
    request: Request,
    controller: SongController = Depends(get_song_controller),
) -> Response:
    await controller.delete_song(song_id)
    return encode_deleted(location=_list_location(request))
