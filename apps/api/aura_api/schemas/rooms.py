"""Data contracts for room and token endpoints."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TokenRequest(CamelModel):
    room_name: str | None = Field(default=None, description="Room to join")
    user_name: str | None = Field(default=None, description="Display name of the participant")


class TokenResponse(CamelModel):
    token: str = Field(..., description="JWT access token for LiveKit")
    url: str = Field(..., description="LiveKit connection URL")


class CreateRoomRequest(CamelModel):
    user_name: str | None = None
    room_title: str | None = None
    description: str | None = None
    max_participants: int | None = Field(default=None, description="Defaults to 10 when unset")


class CreateRoomResponse(CamelModel):
    room_id: str
    room_url: str
    room_title: str
    description: str
    max_participants: int
    user_name: str
    token: str
    livekit_url: str


class RoomMetadataResponse(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    room_id: str
    room_title: str
    description: str
    max_participants: int
    created_by: str
    created_at: datetime


class RoomListResponse(BaseModel):
    rooms: list[RoomMetadataResponse]
    total: int
