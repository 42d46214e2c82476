"""Data types exchanged with the realtime media API and handed to clients."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _require(data: Mapping[str, Any], key: str) -> Any:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    if key not in data or data[key] is None:
        raise ValueError(f"missing field `{key}`")
    return data[key]


class SessionStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    TERMINATED = "Terminated"
    PENDING = "Pending"


class RoomStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    TERMINATED = "Terminated"
    PENDING = "Pending"


class ClientRole(str, Enum):
    SENDER = "Sender"
    RECEIVER = "Receiver"


class ClientStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    DISCONNECTED = "Disconnected"
    PENDING = "Pending"


class ConnectionStatus(str, Enum):
    CONNECTED = "Connected"
    CONNECTING = "Connecting"
    DISCONNECTED = "Disconnected"
    FAILED = "Failed"


@dataclass
class SessionDescription:
    """An SDP offer or answer."""

    type: str
    sdp: str

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "sdp": self.sdp}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SessionDescription:
        return cls(type=str(_require(data, "type")), sdp=str(_require(data, "sdp")))


@dataclass
class Track:
    """A media track in a session."""

    location: str
    track_name: str
    mid: str | None = None
    session_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "location": self.location,
            "mid": self.mid,
            "track_name": self.track_name,
            "session_id": self.session_id,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Track:
        return cls(
            location=str(_require(data, "location")),
            track_name=str(_require(data, "track_name")),
            mid=data.get("mid"),
            session_id=data.get("session_id"),
        )


@dataclass
class CloudflareSession:
    """A realtime session owned by a client in a room."""

    session_id: str
    room_id: str
    client_id: str
    session_description: SessionDescription
    status: SessionStatus = SessionStatus.PENDING
    metadata: Any = None
    created_at: datetime = field(default_factory=_now)


@dataclass
class WebRTCRoom:
    """A room as seen by the media layer."""

    room_id: str
    app_id: str
    status: RoomStatus = RoomStatus.PENDING
    sender_client_id: str | None = None
    receiver_client_id: str | None = None
    metadata: Any = None
    created_at: datetime = field(default_factory=_now)


@dataclass
class WebRTCClient:
    """A client as seen by the media layer."""

    client_id: str
    room_id: str
    role: ClientRole
    session_id: str | None = None
    status: ClientStatus = ClientStatus.PENDING
    metadata: Any = None
    joined_at: datetime = field(default_factory=_now)


@dataclass
class CloudflareSessionResponse:
    """Reply to a session creation request."""

    session_id: str
    session_description: SessionDescription

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CloudflareSessionResponse:
        return cls(
            session_id=str(_require(data, "sessionId")),
            session_description=SessionDescription.from_dict(_require(data, "sessionDescription")),
        )


@dataclass
class CloudflareTracksResponse:
    """Reply to a track addition request."""

    tracks: list[Track] = field(default_factory=list)
    session_description: SessionDescription | None = None
    requires_immediate_renegotiation: bool | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CloudflareTracksResponse:
        raw_tracks = _require(data, "tracks")
        if not isinstance(raw_tracks, list):
            raise ValueError("field `tracks` must be a list")
        description = data.get("session_description")
        return cls(
            tracks=[Track.from_dict(item) for item in raw_tracks],
            session_description=SessionDescription.from_dict(description) if description is not None else None,
            requires_immediate_renegotiation=data.get("requires_immediate_renegotiation"),
        )


@dataclass
class CloudflareError:
    """An error body returned by the API."""

    error_description: str
    error_code: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CloudflareError:
        return cls(
            error_description=str(_require(data, "error_description")),
            error_code=data.get("error_code"),
        )


@dataclass
class WebRTCConnectionInfo:
    """Connection details sent to a client joining a room."""

    room_id: str
    role: ClientRole
    app_id: str
    session_id: str | None = None
    status: ConnectionStatus = ConnectionStatus.DISCONNECTED
    metadata: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "room_id": self.room_id,
            "role": self.role.value,
            "app_id": self.app_id,
            "session_id": self.session_id,
            "status": self.status.value,
            "metadata": self.metadata,
        }