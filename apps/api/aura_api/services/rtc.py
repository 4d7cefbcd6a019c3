"""RTC service abstraction.

This module encapsulates every call we make to LiveKit: minting room access tokens
and creating rooms through the server API. Both are treated as upstream calls
bounded by ``settings.livekit_timeout_seconds``."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Awaitable, TypeVar

from livekit import api

from ..core import config
from ..core.errors import UpstreamError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class RtcToken:
    token: str
    expires_in: int


async def issue_token(room: str, user_name: str) -> RtcToken:
    """Produce a LiveKit access token granting ``user_name`` entry into ``room``."""

    settings = config.settings
    ttl = timedelta(seconds=settings.token_ttl_seconds)
    token = (
        api.AccessToken(settings.livekit_api_key, settings.livekit_api_secret)
        .with_identity(user_name)
        .with_name(user_name)
        .with_ttl(ttl)
        .with_grants(
            api.VideoGrants(
                room_join=True,
                room=room,
                can_publish=True,
                can_subscribe=True,
                can_publish_data=True,
            )
        )
    )
    return RtcToken(token=token.to_jwt(), expires_in=int(ttl.total_seconds()))


async def provision_room(room: str, max_participants: int) -> None:
    """Create ``room`` on the LiveKit server with the given capacity."""

    settings = config.settings
    async with api.LiveKitAPI(
        url=settings.livekit_url,
        api_key=settings.livekit_api_key,
        api_secret=settings.livekit_api_secret,
    ) as lkapi:
        await lkapi.room.create_room(
            api.CreateRoomRequest(name=room, max_participants=max_participants)
        )


async def call_upstream(operation: str, call: Awaitable[T]) -> T:
    """Await ``call`` under the LiveKit timeout, converting failures to ``UpstreamError``."""

    timeout = config.settings.livekit_timeout_seconds
    try:
        return await asyncio.wait_for(call, timeout=timeout)
    except asyncio.TimeoutError as exc:
        logger.error("LiveKit %s timed out after %.1fs", operation, timeout)
        raise UpstreamError(f"LiveKit {operation} timed out") from exc
    except Exception as exc:  # noqa: BLE001 - any client failure is an upstream failure
        logger.exception("LiveKit %s failed: %s", operation, exc)
        raise UpstreamError(f"LiveKit {operation} failed") from exc
