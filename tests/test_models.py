from datetime import datetime, timedelta, timezone

import pytest

from signalmanager.database.models import (
    ClientInRoom,
    ClientInRoomStatus,
    ClientInTerminatedRoom,
    ClientStatus,
    ClientTerminationStatus,
    RegisteredClient,
    RegistrationPayload,
    RoomCreated,
    TerminatedRoom,
)


def _now():
    return datetime.now(timezone.utc)


def test_registered_client_defaults():
    before = _now()
    client = RegisteredClient.create("c1", "token", ["video"], {"k": 1})
    after = _now()
    assert client.client_id == "c1"
    assert client.auth_token == "token"
    assert client.capabilities == ["video"]
    assert client.metadata == {"k": 1}
    assert client.room_id is None
    assert client.last_seen is None
    assert client.status is ClientStatus.ACTIVE
    assert client.is_active()
    assert before <= client.registered_at <= after


def test_registered_client_with_room_and_unique_ids():
    a = RegisteredClient.create("c1", "token", room_id="room-1")
    b = RegisteredClient.create("c1", "token")
    assert a.room_id == "room-1"
    assert a.capabilities == []
    assert a.id != b.id and len(a.id) == 36


def test_registered_client_room_association_and_activity():
    client = RegisteredClient.create("c1", "token")
    client.associate_with_room("r")
    assert client.room_id == "r"
    client.disassociate_from_room()
    assert client.room_id is None
    client.status = ClientStatus.SUSPENDED
    assert client.is_active() is False


def test_update_last_seen():
    client = RegisteredClient.create("c1", "token")
    before = _now()
    client.update_last_seen()
    assert before <= client.last_seen <= _now()


def test_enum_values_match_variant_names():
    assert ClientStatus("Pending") is ClientStatus.PENDING
    assert ClientTerminationStatus.VOLUNTARY_DISCONNECT.value == "VoluntaryDisconnect"


def test_terminated_room_timestamps():
    fixed = datetime(2024, 1, 1, tzinfo=timezone.utc)
    room = TerminatedRoom.create("r1", {"n": 2}, "done", "admin", None, terminated_at=fixed)
    assert room.terminated_at == fixed
    assert room.termination_reason == "done"
    assert room.terminated_by == "admin"
    assert room.termination_recorded_at > fixed
    default = TerminatedRoom.create("r2", None)
    assert default.metadata is None
    assert default.terminated_at <= _now()


def test_room_created():
    room = RoomCreated.create("uuid-1", {"a": 1}, created_by="c1")
    assert room.room_uuid == "uuid-1"
    assert room.room_data == {"a": 1}
    assert room.created_by == "c1"
    assert room.created_at <= room.record_created_at or room.created_at <= _now()


def test_client_in_room_status_and_activity():
    entry = ClientInRoom.create("c1", "r1", ["audio"])
    assert entry.is_active()
    assert entry.status is ClientInRoomStatus.ACTIVE
    old = entry.last_activity
    entry.update_last_activity()
    assert entry.last_activity >= old
    entry.update_status(ClientInRoomStatus.AWAY)
    assert entry.status is ClientInRoomStatus.AWAY
    assert not entry.is_active()


def test_session_duration():
    joined = datetime(2024, 5, 1, 10, tzinfo=timezone.utc)
    left = joined + timedelta(minutes=90)
    record = ClientInTerminatedRoom.create(
        "c1", "r1", joined, "ended", "admin",
        ClientTerminationStatus.KICKED, left_at=left,
    )
    assert record.session_duration() == left - joined
    record.left_at = joined - timedelta(minutes=5)
    assert record.session_duration() == timedelta(0)


def _complete_builder():
    return (
        ClientInTerminatedRoom.builder()
        .client_id("c1")
        .room_id("r1")
        .joined_at(datetime(2024, 1, 1, tzinfo=timezone.utc))
        .termination_reason("ended")
        .terminated_by("admin")
        .final_status(ClientTerminationStatus.BANNED)
    )


def test_builder_builds_record():
    left = datetime(2024, 1, 2, tzinfo=timezone.utc)
    record = _complete_builder().left_at(left).capabilities(["x"]).metadata({"m": True}).build()
    assert record.client_id == "c1"
    assert record.room_id == "r1"
    assert record.left_at == left
    assert record.capabilities == ["x"]
    assert record.metadata == {"m": True}
    assert record.final_status is ClientTerminationStatus.BANNED


def test_builder_left_at_defaults_to_now():
    before = _now()
    record = _complete_builder().build()
    assert before <= record.left_at <= _now()
    assert record.metadata is None


def test_builder_reports_first_missing_field():
    with pytest.raises(ValueError, match="client_id is required"):
        ClientInTerminatedRoom.builder().build()
    with pytest.raises(ValueError, match="final_status is required"):
        (
            ClientInTerminatedRoom.builder()
            .client_id("c1")
            .room_id("r1")
            .joined_at(_now())
            .termination_reason("ended")
            .terminated_by("admin")
            .build()
        )


def test_registration_payload_defaults():
    payload = RegistrationPayload("c1", "token")
    assert (payload.room_id, payload.capabilities, payload.metadata) == (None, None, None)