"""
Songbook Backend - Validation Layer
====================================

What:  Checks ids and song fields before any store call is made.
How:   Pure, synchronous functions. Same input, same verdict; no I/O, no state.
Who:   Called by SongController at the start of every operation and by the
       store adapter to guard its own id arguments.

Rules:
    get / update / delete:  id must be a canonical UUID (checked first)
    create / update:        title, then artist: non-empty strings
                            genre: string or absent/null
    list:                   no parameters

Rejected ids raise InvalidIdError; rejected fields raise ValidationError for
the first failing field, in the order title → artist → genre.
"""

import enum
import re
import uuid
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from songbook.exceptions import InvalidIdError, ValidationError
from songbook.schemas.song import SongFields

# Canonical textual UUID: 8-4-4-4-12 hex digits, either case
_UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)

REQUIRED_FIELDS = ("title", "artist")


class Operation(str, enum.Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


ID_OPERATIONS = frozenset({Operation.GET, Operation.UPDATE, Operation.DELETE})
FIELD_OPERATIONS = frozenset({Operation.CREATE, Operation.UPDATE})


@dataclass(frozen=True)
class ValidatedRequest:
    """Parameters that passed validation for one operation."""
    operation: Operation
    song_id: Optional[uuid.UUID] = None
    fields: Optional[SongFields] = None


def parse_song_id(raw: Union[str, uuid.UUID, Any]) -> uuid.UUID:
    """
    Convert a raw id into a UUID or raise InvalidIdError.

    Only the canonical hyphenated form is accepted; braces, URNs and bare
    32-digit hex strings are rejected even though uuid.UUID would parse them.
    """
    if isinstance(raw, uuid.UUID):
        return raw
    if not isinstance(raw, str):
        raise InvalidIdError(raw, reason="must be a string")
    if not _UUID_PATTERN.fullmatch(raw):
        raise InvalidIdError(raw)
    return uuid.UUID(raw)


def validate_song_fields(fields: Any) -> SongFields:
    """
    Check submitted song fields and return them as SongFields.

    A client-supplied `id` and any unknown keys are dropped. Values are kept
    verbatim; surrounding whitespace only matters for the emptiness check.
    """
    if not isinstance(fields, Mapping):
        raise ValidationError(field="body", reason="must be an object with title, artist and genre")

    for name in REQUIRED_FIELDS:
        value = fields.get(name)
        if value is None:
            raise ValidationError(field=name, reason="is required")
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(field=name, reason="must be a non-empty string")

    genre = fields.get("genre")
    if genre is not None and not isinstance(genre, str):
        raise ValidationError(field="genre", reason="must be a string when present")

    return SongFields(title=fields["title"], artist=fields["artist"], genre=genre)


def validate(
    operation: Operation,
    song_id: Any = None,
    fields: Any = None,
) -> ValidatedRequest:
    """Apply the id and field rules that `operation` requires."""
    operation = Operation(operation)
    parsed_id = parse_song_id(song_id) if operation in ID_OPERATIONS else None
    parsed_fields = validate_song_fields(fields) if operation in FIELD_OPERATIONS else None
    return ValidatedRequest(operation=operation, song_id=parsed_id, fields=parsed_fields)
