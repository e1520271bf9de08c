"""Conversion between external string ids and MongoDB ObjectIds."""

from __future__ import annotations

from bson import ObjectId
from bson.errors import InvalidId

from src.services.exceptions import InvalidIdentifier


def decode_identifier(external_id: str) -> ObjectId:
    """Return the ObjectId for ``external_id`` or raise ``InvalidIdentifier``."""

    if not isinstance(external_id, str):
        raise InvalidIdentifier(str(external_id))
    try:
        return ObjectId(external_id)
    except (InvalidId, TypeError) as exc:
        raise InvalidIdentifier(external_id) from exc


def encode_identifier(internal_id: ObjectId) -> str:
    return str(internal_id)


def new_identifier() -> ObjectId:
    """Generate a fresh identifier for a record about to be inserted."""

    return ObjectId()
