"""Room creation and token issuance flows."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core import config
from ..core.errors import UpstreamError, ValidationError
from ..schemas import rooms as schemas
from . import rtc as rtc_service
from .room_registry import RoomRegistry, apply_room_defaults

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TokenGrant:
    token: str
    url: str


async def issue_room_token(room_name: str | None, user_name: str | None) -> TokenGrant:
    """Mint an entry token for ``user_name`` in ``room_name``."""

    room = room_name or ""
    user = user_name or ""
    if not room.strip() or not user.strip():
        raise ValidationError("roomName and userName are required")

    token = await rtc_service.call_upstream("token issuance", rtc_service.issue_token(room, user))
    logger.info("Issued token for %s in %s", user, room)
    return TokenGrant(token=token.token, url=config.settings.livekit_url)


async def create_room(
    payload: schemas.CreateRoomRequest,
    registry: RoomRegistry,
) -> schemas.CreateRoomResponse:
    """Provision a room on LiveKit, register its metadata and mint the creator's token.

    A provisioning failure leaves the registry untouched. A token failure after
    registration leaves the room registered; the error still reaches the caller.
    """

    settings = config.settings
    draft = apply_room_defaults(
        payload.user_name,
        payload.room_title,
        payload.description,
        payload.max_participants,
        default_max_participants=settings.default_max_participants,
    )
    room_id = registry.new_room_id()

    await rtc_service.call_upstream(
        "room provisioning",
        rtc_service.provision_room(room_id, draft.max_participants),
    )

    metadata = registry.insert(draft, room_id=room_id)
    logger.info(
        "Created room %s (%s) for %s, capacity %d",
        metadata.room_id,
        metadata.room_title,
        metadata.created_by,
        metadata.max_participants,
    )

    try:
        token = await rtc_service.call_upstream(
            "token issuance",
            rtc_service.issue_token(room_id, draft.created_by),
        )
    except UpstreamError:
        logger.warning("Room %s is registered but its creator has no token", room_id)
        raise

    return schemas.CreateRoomResponse(
        room_id=metadata.room_id,
        room_url=f"{settings.frontend_url}/room/{metadata.room_id}",
        room_title=metadata.room_title,
        description=metadata.description,
        max_participants=metadata.max_participants,
        user_name=metadata.created_by,
        token=token.token,
        livekit_url=settings.livekit_url,
    )
