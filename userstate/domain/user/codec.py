"""
UserState record codec.

Maps UserState to the flat key-value record held by durable storage and back.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from userstate.domain.shared.errors import DecodeError
from userstate.domain.user.models import UserState


def encode_user_state(state: UserState) -> dict[str, Any]:
    """Encode UserState as a JSON-compatible record.

    Enum fields are stored by name.

    Example:
        >>> encode_user_state(UserState.default())["theme_brand"]
        'DEFAULT'
    """
    return state.model_dump(by_alias=True, mode="json")


def decode_user_state(record: Any) -> UserState:
    """Decode a stored record.

    Missing keys take their defaults, so an empty record decodes to
    `UserState.default()`.

    Raises:
        DecodeError: If the record is not a mapping or holds invalid values
    """
    if not isinstance(record, Mapping):
        raise DecodeError(f"Stored record must be a mapping, got {type(record).__name__}")

    try:
        return UserState.model_validate(dict(record))
    except ValidationError as e:
        raise DecodeError(f"Stored record cannot be decoded: {e.error_count()} invalid field(s)") from e
