"""Records and payloads for WebRTC rooms and the clients taking part in them."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class WebRTCRoomStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    TERMINATED = "Terminated"
    PENDING = "Pending"


class WebRTCClientStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    DISCONNECTED = "Disconnected"
    PENDING = "Pending"


class ClientRole(str, Enum):
    SENDER = "Sender"
    RECEIVER = "Receiver"


@dataclass
class WebRTCRoom:
    """A WebRTC room tracked by the service."""

    room_id: str
    app_id: str
    sender_client_id: str | None = None
    receiver_client_id: str | None = None
    session_id: str | None = None
    metadata: Any = None
    status: WebRTCRoomStatus = WebRTCRoomStatus.PENDING
    created_at: datetime = field(default_factory=_now)
    id: str = field(default_factory=_new_id)
    record_created_at: datetime = field(default_factory=_now)

    @classmethod
    def create(
        cls,
        room_id: str,
        app_id: str,
        sender_client_id: str | None = None,
        receiver_client_id: str | None = None,
        session_id: str | None = None,
        metadata: Any = None,
    ) -> WebRTCRoom:
        """Create a pending room."""
        return cls(
            room_id=room_id,
            app_id=app_id,
            sender_client_id=sender_client_id,
            receiver_client_id=receiver_client_id,
            session_id=session_id,
            metadata=metadata,
        )

    def update_status(self, status: WebRTCRoomStatus) -> None:
        self.status = status

    def is_active(self) -> bool:
        return self.status is WebRTCRoomStatus.ACTIVE


@dataclass
class WebRTCClient:
    """A client taking part in a WebRTC room."""

    client_id: str
    room_id: str
    role: ClientRole
    session_id: str | None = None
    metadata: Any = None
    status: WebRTCClientStatus = WebRTCClientStatus.PENDING
    joined_at: datetime = field(default_factory=_now)
    id: str = field(default_factory=_new_id)
    record_created_at: datetime = field(default_factory=_now)

    @classmethod
    def create(
        cls,
        client_id: str,
        room_id: str,
        role: ClientRole,
        session_id: str | None = None,
        metadata: Any = None,
    ) -> WebRTCClient:
        """Create a pending client."""
        return cls(
            client_id=client_id,
            room_id=room_id,
            role=role,
            session_id=session_id,
            metadata=metadata,
        )

    def update_status(self, status: WebRTCClientStatus) -> None:
        self.status = status

    def is_active(self) -> bool:
        return self.status is WebRTCClientStatus.ACTIVE


@dataclass
class WebRTCRoomCreationPayload:
    room_id: str
    app_id: str
    sender_client_id: str | None = None
    receiver_client_id: str | None = None
    session_id: str | None = None
    metadata: Any = None


@dataclass
class WebRTCClientRegistrationPayload:
    client_id: str
    room_id: str
    role: ClientRole
    session_id: str | None = None
    metadata: Any = None