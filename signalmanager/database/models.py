"""Records and payloads for clients and rooms kept by the storage layer."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class ClientStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SUSPENDED = "Suspended"
    PENDING = "Pending"


class ClientInRoomStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    AWAY = "Away"
    BUSY = "Busy"


class ClientTerminationStatus(str, Enum):
    DISCONNECTED = "Disconnected"
    VOLUNTARY_DISCONNECT = "VoluntaryDisconnect"
    KICKED = "Kicked"
    BANNED = "Banned"


@dataclass
class RegisteredClient:
    """A client registered with the service."""

    client_id: str
    auth_token: str
    room_id: str | None = None
    capabilities: list[str] = field(default_factory=list)
    metadata: Any = None
    status: ClientStatus = ClientStatus.ACTIVE
    last_seen: datetime | None = None
    id: str = field(default_factory=_new_id)
    registered_at: datetime = field(default_factory=_now)
    record_created_at: datetime = field(default_factory=_now)

    @classmethod
    def create(
        cls,
        client_id: str,
        auth_token: str,
        capabilities: list[str] | None = None,
        metadata: Any = None,
        room_id: str | None = None,
    ) -> RegisteredClient:
        """Register a new active client, optionally tied to a room."""
        return cls(
            client_id=client_id,
            auth_token=auth_token,
            room_id=room_id,
            capabilities=list(capabilities or []),
            metadata=metadata,
        )

    def update_last_seen(self) -> None:
        self.last_seen = _now()

    def is_active(self) -> bool:
        return self.status is ClientStatus.ACTIVE

    def associate_with_room(self, room_id: str) -> None:
        self.room_id = room_id

    def disassociate_from_room(self) -> None:
        self.room_id = None


@dataclass
class TerminatedRoom:
    """Record of a room that has been terminated."""

    room_id: str
    room_data: Any
    termination_reason: str | None = None
    terminated_by: str | None = None
    metadata: Any = None
    terminated_at: datetime = field(default_factory=_now)
    termination_recorded_at: datetime = field(default_factory=_now)
    id: str = field(default_factory=_new_id)
    record_created_at: datetime = field(default_factory=_now)

    @classmethod
    def create(
        cls,
        room_id: str,
        room_data: Any,
        termination_reason: str | None = None,
        terminated_by: str | None = None,
        metadata: Any = None,
        terminated_at: datetime | None = None,
    ) -> TerminatedRoom:
        """Record a termination; the time defaults to now."""
        return cls(
            room_id=room_id,
            room_data=room_data,
            termination_reason=termination_reason,
            terminated_by=terminated_by,
            metadata=metadata,
            terminated_at=terminated_at if terminated_at is not None else _now(),
        )


@dataclass
class RoomCreated:
    """Record of a room creation event."""

    room_uuid: str
    room_data: Any
    created_by: str | None = None
    metadata: Any = None
    created_at: datetime = field(default_factory=_now)
    id: str = field(default_factory=_new_id)
    record_created_at: datetime = field(default_factory=_now)

    @classmethod
    def create(
        cls,
        room_uuid: str,
        room_data: Any,
        created_by: str | None = None,
        metadata: Any = None,
    ) -> RoomCreated:
        return cls(
            room_uuid=room_uuid,
            room_data=room_data,
            created_by=created_by,
            metadata=metadata,
        )


@dataclass
class RegistrationPayload:
    client_id: str
    auth_token: str
    room_id: str | None = None
    capabilities: list[str] | None = None
    metadata: Any = None


@dataclass
class RegistrationResponse:
    status: int
    client_id: str
    message: str | None = None
    session_id: str | None = None


@dataclass
class TerminationPayload:
    room_id: str
    room_data: Any
    termination_reason: str | None = None
    terminated_by: str | None = None
    metadata: Any = None


@dataclass
class RoomCreationPayload:
    room_uuid: str
    room_data: Any
    created_by: str | None = None
    metadata: Any = None


@dataclass
class ClientInRoom:
    """A client currently present in a room."""

    client_id: str
    room_id: str
    capabilities: list[str] = field(default_factory=list)
    metadata: Any = None
    status: ClientInRoomStatus = ClientInRoomStatus.ACTIVE
    joined_at: datetime = field(default_factory=_now)
    last_activity: datetime = field(default_factory=_now)
    id: str = field(default_factory=_new_id)
    record_created_at: datetime = field(default_factory=_now)

    @classmethod
    def create(
        cls,
        client_id: str,
        room_id: str,
        capabilities: list[str] | None = None,
        metadata: Any = None,
    ) -> ClientInRoom:
        return cls(
            client_id=client_id,
            room_id=room_id,
            capabilities=list(capabilities or []),
            metadata=metadata,
        )

    def update_last_activity(self) -> None:
        self.last_activity = _now()

    def update_status(self, status: ClientInRoomStatus) -> None:
        self.status = status

    def is_active(self) -> bool:
        return self.status is ClientInRoomStatus.ACTIVE


@dataclass
class ClientInTerminatedRoom:
    """A client that was in a room when the room was terminated."""

    client_id: str
    room_id: str
    joined_at: datetime
    termination_reason: str
    terminated_by: str
    final_status: ClientTerminationStatus
    capabilities: list[str] = field(default_factory=list)
    metadata: Any = None
    left_at: datetime = field(default_factory=_now)
    id: str = field(default_factory=_new_id)
    record_created_at: datetime = field(default_factory=_now)

    @classmethod
    def create(
        cls,
        client_id: str,
        room_id: str,
        joined_at: datetime,
        termination_reason: str,
        terminated_by: str,
        final_status: ClientTerminationStatus,
        capabilities: list[str] | None = None,
        metadata: Any = None,
        left_at: datetime | None = None,
    ) -> ClientInTerminatedRoom:
        """Record a departed client; the leave time defaults to now."""
        return cls(
            client_id=client_id,
            room_id=room_id,
            joined_at=joined_at,
            termination_reason=termination_reason,
            terminated_by=terminated_by,
            final_status=final_status,
            capabilities=list(capabilities or []),
            metadata=metadata,
            left_at=left_at if left_at is not None else _now(),
        )

    @classmethod
    def builder(cls) -> ClientInTerminatedRoomBuilder:
        return ClientInTerminatedRoomBuilder()

    def session_duration(self) -> timedelta:
        """Time spent in the room; never negative."""
        return max(self.left_at - self.joined_at, timedelta(0))


class ClientInTerminatedRoomBuilder:
    """Step-by-step construction of a ClientInTerminatedRoom."""

    def __init__(self) -> None:
        self._client_id: str | None = None
        self._room_id: str | None = None
        self._joined_at: datetime | None = None
        self._left_at: datetime | None = None
        self._termination_reason: str | None = None
        self._terminated_by: str | None = None
        self._final_status: ClientTerminationStatus | None = None
        self._capabilities: list[str] = []
        self._metadata: Any = None

    def client_id(self, client_id: str) -> ClientInTerminatedRoomBuilder:
        self._client_id = client_id
        return self

    def room_id(self, room_id: str) -> ClientInTerminatedRoomBuilder:
        self._room_id = room_id
        return self

    def joined_at(self, joined_at: datetime) -> ClientInTerminatedRoomBuilder:
        self._joined_at = joined_at
        return self

    def left_at(self, left_at: datetime) -> ClientInTerminatedRoomBuilder:
        self._left_at = left_at
        return self

    def termination_reason(self, termination_reason: str) -> ClientInTerminatedRoomBuilder:
        self._termination_reason = termination_reason
        return self

    def terminated_by(self, terminated_by: str) -> ClientInTerminatedRoomBuilder:
        self._terminated_by = terminated_by
        return self

    def final_status(self, final_status: ClientTerminationStatus) -> ClientInTerminatedRoomBuilder:
        self._final_status = final_status
        return self

    def capabilities(self, capabilities: list[str]) -> ClientInTerminatedRoomBuilder:
        self._capabilities = list(capabilities)
        return self

    def metadata(self, metadata: Any) -> ClientInTerminatedRoomBuilder:
        self._metadata = metadata
        return self

    def build(self) -> ClientInTerminatedRoom:
        """Build the record; raises ValueError naming the first missing field."""
        required = (
            ("client_id", self._client_id),
            ("room_id", self._room_id),
            ("joined_at", self._joined_at),
            ("termination_reason", self._termination_reason),
            ("terminated_by", self._terminated_by),
            ("final_status", self._final_status),
        )
        for name, value in required:
            if value is None:
                raise ValueError(f"{name} is required")
        return ClientInTerminatedRoom.create(
            client_id=self._client_id,
            room_id=self._room_id,
            joined_at=self._joined_at,
            termination_reason=self._termination_reason,
            terminated_by=self._terminated_by,
            final_status=self._final_status,
            capabilities=self._capabilities,
            metadata=self._metadata,
            left_at=self._left_at,
        )


@dataclass
class ClientInRoomPayload:
    client_id: str
    room_id: str
    capabilities: list[str] | None = None
    metadata: Any = None


@dataclass
class ClientInTerminatedRoomPayload:
    client_id: str
    room_id: str
    termination_reason: str
    terminated_by: str
    final_status: ClientTerminationStatus
    capabilities: list[str] | None = None
    metadata: Any = None