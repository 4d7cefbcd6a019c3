"""Room registry and token endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..schemas import rooms as schemas
from ..services import rooms as rooms_service
from ..services.room_registry import RoomRegistry, get_room_registry

router = APIRouter()


@router.post("/token", response_model=schemas.TokenResponse)
async def create_token(payload: schemas.TokenRequest) -> schemas.TokenResponse:
    """Return a LiveKit access token for the requested room."""

    grant = await rooms_service.issue_room_token(payload.room_name, payload.user_name)
    return schemas.TokenResponse(token=grant.token, url=grant.url)


@router.post("/room/create", response_model=schemas.CreateRoomResponse)
async def create_room(
    payload: schemas.CreateRoomRequest,
    registry: RoomRegistry = Depends(get_room_registry),
) -> schemas.CreateRoomResponse:
    """Create a room with optional title, description and capacity."""

    return await rooms_service.create_room(payload, registry)


@router.get("/room/{room_id}", response_model=schemas.RoomMetadataResponse)
async def get_room(
    room_id: str,
    registry: RoomRegistry = Depends(get_room_registry),
) -> schemas.RoomMetadataResponse:
    return schemas.RoomMetadataResponse.model_validate(registry.get(room_id))


@router.get("/rooms", response_model=schemas.RoomListResponse)
async def list_rooms(registry: RoomRegistry = Depends(get_room_registry)) -> schemas.RoomListResponse:
    """Return every registered room."""

    rooms = [schemas.RoomMetadataResponse.model_validate(room) for room in registry.list()]
    return schemas.RoomListResponse(rooms=rooms, total=len(rooms))
