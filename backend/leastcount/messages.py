"""Pydantic contracts for inbound socket events.

Wire names are camelCase to match the browser client; handlers use the
snake_case attribute names.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidRequest


class _Message(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    @classmethod
    def parse(cls, data: Any):
        """Validate a raw event payload, raising ``InvalidRequest`` on bad input."""
        if isinstance(data, str):
            data = {'roomId': data}
        try:
            return cls.model_validate(data or {})
        except ValidationError as exc:
            raise InvalidRequest(_describe(exc)) from exc


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = '.'.join(str(part) for part in first.get('loc', ()))
    if location:
        return f"Invalid request: {location} {first.get('msg', '').lower()}"
    return 'Invalid request'


class CreateRoom(_Message):
    username: str = Field(..., min_length=1, max_length=32)
    round_limit: Optional[int] = Field(None, alias='roundLimit')

    @field_validator('round_limit', mode='before')
    @classmethod
    def _lenient_round_limit(cls, value):
        # Clients send whatever the input box holds; unusable values fall back to the default.
        try:
            value = int(value)
        except (TypeError, ValueError):
            return None
        return value if value >= 1 else None


class RoomAction(_Message):
    room_id: str = Field(..., alias='roomId', min_length=1)

    @field_validator('room_id')
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()


class JoinRoom(RoomAction):
    username: str = Field(..., min_length=1, max_length=32)


class ReplaceCard(RoomAction):
    card_to_discard_id: str = Field(..., alias='cardToDiscardId', min_length=1)
