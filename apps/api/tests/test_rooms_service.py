"""Tests for room creation and token issuance flows."""
from __future__ import annotations

import pytest

from aura_api.core.errors import UpstreamError, ValidationError
from aura_api.schemas import rooms as schemas
from aura_api.services import rooms as rooms_service
from aura_api.services import rtc
from aura_api.services.room_registry import RoomRegistry


class LiveKitStub:
    """Records provisioning and token calls made through ``rtc``."""

    def __init__(self) -> None:
        self.provisioned: list[tuple[str, int]] = []
        self.tokens: list[tuple[str, str]] = []
        self.fail_provision = False
        self.fail_token = False

    async def provision_room(self, room: str, max_participants: int) -> None:
        if self.fail_provision:
            raise RuntimeError("livekit down")
        self.provisioned.append((room, max_participants))

    async def issue_token(self, room: str, user_name: str) -> rtc.RtcToken:
        if self.fail_token:
            raise RuntimeError("signing failed")
        self.tokens.append((room, user_name))
        return rtc.RtcToken(token=f"jwt-{room}-{user_name}", expires_in=3600)


@pytest.fixture
def livekit(monkeypatch):
    stub = LiveKitStub()
    monkeypatch.setattr(rtc, "provision_room", stub.provision_room)
    monkeypatch.setattr(rtc, "issue_token", stub.issue_token)
    monkeypatch.setattr(rtc.config.settings, "livekit_url", "wss://livekit.example")
    monkeypatch.setattr(rtc.config.settings, "frontend_url", "https://aura.example")
    monkeypatch.setattr(rtc.config.settings, "default_max_participants", 10)
    return stub


@pytest.mark.asyncio
async def test_issue_room_token_returns_token_and_url(livekit) -> None:
    grant = await rooms_service.issue_room_token("room-1", "alice")

    assert grant.token == "jwt-room-1-alice"
    assert grant.url == "wss://livekit.example"
    assert livekit.tokens == [("room-1", "alice")]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("room_name", "user_name"),
    [("room-1", None), (None, "alice"), ("", "alice"), ("room-1", "  ")],
)
async def test_issue_room_token_validates_before_calling_livekit(livekit, room_name, user_name) -> None:
    with pytest.raises(ValidationError):
        await rooms_service.issue_room_token(room_name, user_name)

    assert livekit.tokens == []


@pytest.mark.asyncio
async def test_issue_room_token_surfaces_upstream_failure(livekit) -> None:
    livekit.fail_token = True

    with pytest.raises(UpstreamError):
        await rooms_service.issue_room_token("room-1", "alice")


@pytest.mark.asyncio
async def test_create_room_provisions_registers_and_issues_token(livekit) -> None:
    registry = RoomRegistry()
    payload = schemas.CreateRoomRequest(user_name="alice", max_participants=6)

    response = await rooms_service.create_room(payload, registry)

    assert response.room_id.startswith("room-")
    assert response.room_url == f"https://aura.example/room/{response.room_id}"
    assert response.room_title == "alice's room"
    assert response.description == ""
    assert response.max_participants == 6
    assert response.user_name == "alice"
    assert response.token == f"jwt-{response.room_id}-alice"
    assert response.livekit_url == "wss://livekit.example"
    assert livekit.provisioned == [(response.room_id, 6)]
    assert registry.get(response.room_id).created_by == "alice"


@pytest.mark.asyncio
async def test_create_room_requires_user_name(livekit) -> None:
    registry = RoomRegistry()

    with pytest.raises(ValidationError):
        await rooms_service.create_room(schemas.CreateRoomRequest(room_title="no owner"), registry)

    assert livekit.provisioned == []
    assert registry.list() == []


@pytest.mark.asyncio
async def test_create_room_provisioning_failure_registers_nothing(livekit) -> None:
    registry = RoomRegistry()
    livekit.fail_provision = True

    with pytest.raises(UpstreamError):
        await rooms_service.create_room(schemas.CreateRoomRequest(user_name="alice"), registry)

    assert registry.list() == []
    assert livekit.tokens == []


@pytest.mark.asyncio
async def test_create_room_token_failure_keeps_registered_room(livekit) -> None:
    registry = RoomRegistry()
    livekit.fail_token = True

    with pytest.raises(UpstreamError):
        await rooms_service.create_room(schemas.CreateRoomRequest(user_name="alice"), registry)

    (room,) = registry.list()
    assert livekit.provisioned == [(room.room_id, 10)]


@pytest.mark.asyncio
async def test_names_are_passed_to_livekit_unchanged(livekit) -> None:
    registry = RoomRegistry()

    grant = await rooms_service.issue_room_token(" room-1 ", " bob ")
    response = await rooms_service.create_room(schemas.CreateRoomRequest(user_name=" bob "), registry)

    assert grant.token == "jwt- room-1 - bob "
    assert livekit.tokens == [(" room-1 ", " bob "), (response.room_id, " bob ")]
    assert response.user_name == " bob "
    assert registry.get(response.room_id).created_by == " bob "
