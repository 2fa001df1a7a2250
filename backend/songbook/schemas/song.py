"""
Songbook Backend - Pydantic Record and Response Schemas
========================================================

What:  Pydantic models for the song record, its mutable fields, and the
       error/health envelopes the API returns.
How:   FastAPI uses these for OpenAPI docs; the store converts ORM rows into
       SongRecord with `from_attributes`, and the encoder serializes them.
Who:   SongRecord/SongFields flow through the controller; ErrorResponse and
       HealthResponse document the encoder and health route.

SongRecord is the domain record. ORM rows never leave the store adapter.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Domain Models
# ══════════════════════════════════════════════════════════════════════════


class SongFields(BaseModel):
    """
    What:  The client-writable part of a song.
    Who:   Produced by validation.validate_song_fields; consumed by the store
           on create and update (update replaces all three fields).
    """
    title: str = Field(description="Song title (non-empty)")
    artist: str = Field(description="Performing artist (non-empty)")
    genre: Optional[str] = Field(default=None, description="Optional genre")


class SongRecord(SongFields):
    """
    What:  A persisted song: the writable fields plus the store-assigned id.
    Who:   Returned by every store read/write and encoded as the API payload.
    """
    id: uuid.UUID = Field(description="Store-assigned song identifier (UUID)")

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Envelope Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error envelope shared by every failing response.

    Fields:
        error:      Machine-readable code (validation_error, invalid_id,
                    not_found, store_unavailable, internal_server_error)
        message:    Human-readable description
        field:      Offending field (validation_error only)
        reason:     Why the field or id was rejected (validation_error, invalid_id)
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    field: Optional[str] = Field(default=None, description="Field that failed validation")
    reason: Optional[str] = Field(default=None, description="Why the input was rejected")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
