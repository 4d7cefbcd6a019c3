"""In-memory room metadata registry."""
from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from fastapi import Request

from ..core.config import settings
from ..core.errors import NotFoundError, ValidationError

ROOM_ID_PREFIX = "room-"
# LiveKit stores max_participants as uint32.
MAX_PARTICIPANTS_LIMIT = 2**32 - 1


@dataclass(frozen=True, slots=True)
class RoomDraft:
    """Validated room input with all defaults applied."""

    created_by: str
    room_title: str
    description: str
    max_participants: int


@dataclass(frozen=True, slots=True)
class RoomMetadata:
    room_id: str
    room_title: str
    description: str
    max_participants: int
    created_by: str
    created_at: datetime


def apply_room_defaults(
    creator_name: str | None,
    title: str | None = None,
    description: str | None = None,
    max_participants: int | None = None,
    *,
    default_max_participants: int | None = None,
) -> RoomDraft:
    """Validate creation input and fill in the defaults.

    Empty titles fall back to ``"<creator>'s room"``, a missing description to ``""``
    and a missing or non-positive capacity to the configured default. Names are
    kept exactly as given; whitespace-only names count as missing.
    """

    creator = creator_name or ""
    if not creator.strip():
        raise ValidationError("userName is required")

    if default_max_participants is None:
        default_max_participants = settings.default_max_participants
    capacity = max_participants if max_participants and max_participants > 0 else default_max_participants
    if capacity > MAX_PARTICIPANTS_LIMIT:
        raise ValidationError(f"maxParticipants must not exceed {MAX_PARTICIPANTS_LIMIT}")

    return RoomDraft(
        created_by=creator,
        room_title=title or f"{creator}'s room",
        description=description or "",
        max_participants=capacity,
    )


def _default_room_id() -> str:
    return f"{ROOM_ID_PREFIX}{uuid.uuid4()}"


class RoomRegistry:
    """Process-local store of room metadata.

    Records are immutable and never removed; ids handed out by ``new_room_id``
    are remembered so they are never issued twice.
    """

    def __init__(self, id_factory: Optional[Callable[[], str]] = None) -> None:
        self._id_factory = id_factory or _default_room_id
        self._rooms: Dict[str, RoomMetadata] = {}
        self._issued_ids: set[str] = set()
        self._lock = threading.Lock()

    def new_room_id(self) -> str:
        """Reserve and return a room id this registry has never issued."""

        with self._lock:
            room_id = self._id_factory()
            while room_id in self._issued_ids:
                room_id = self._id_factory()
            self._issued_ids.add(room_id)
            return room_id

    def create(
        self,
        creator_name: str | None,
        title: str | None = None,
        description: str | None = None,
        max_participants: int | None = None,
        *,
        room_id: str | None = None,
    ) -> RoomMetadata:
        """Register a new room and return its metadata.

        ``room_id`` may be a value previously returned by :meth:`new_room_id`, which
        lets callers provision the room elsewhere before it becomes visible here.
        """

        draft = apply_room_defaults(creator_name, title, description, max_participants)
        return self.insert(draft, room_id=room_id)

    def insert(self, draft: RoomDraft, *, room_id: str | None = None) -> RoomMetadata:
        if room_id is None:
            room_id = self.new_room_id()
        metadata = RoomMetadata(
            room_id=room_id,
            room_title=draft.room_title,
            description=draft.description,
            max_participants=draft.max_participants,
            created_by=draft.created_by,
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            if room_id not in self._issued_ids:
                raise ValidationError(f"Room id {room_id} was not issued by this registry")
            if room_id in self._rooms:
                raise ValidationError(f"Room {room_id} already exists")
            self._rooms[room_id] = metadata
        return metadata

    def get(self, room_id: str) -> RoomMetadata:
        with self._lock:
            metadata = self._rooms.get(room_id)
        if metadata is None:
            raise NotFoundError("Room not found")
        return metadata

    def list(self) -> list[RoomMetadata]:
        """Return every room in insertion order."""

        with self._lock:
            return list(self._rooms.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)


def get_room_registry(request: Request) -> RoomRegistry:
    """FastAPI dependency returning the registry owned by the application."""

    return request.app.state.room_registry
