# signalmanager

Asyncio building blocks for a WebRTC signalling service:

- `signalmanager.auth.AuthManager` checks a client id against a token or API key.
- `signalmanager.database.models` holds dataclasses for registered clients, created and
  terminated rooms, clients in rooms and clients in terminated rooms. It also has
  `ClientInTerminatedRoomBuilder` for building the last of these step by step.
- `signalmanager.database.webrtc_models` holds dataclasses for WebRTC rooms and clients,
  with their status enums and creation payloads.
- `signalmanager.cloudflare.models` holds the types exchanged with the Cloudflare Realtime
  API: `SessionDescription`, `Track`, the session and tracks responses, and
  `WebRTCConnectionInfo`.
- `signalmanager.cloudflare.client.CloudflareClient` is an `httpx` client for the
  Cloudflare Realtime sessions API.
- `signalmanager.cloudflare.session.CloudflareSessionManager` calls that client and
  returns connection info for senders and receivers.

## Installation

```
pip install .
```

To install the test tools as well:

```
pip install ".[test]"
```

## Authentication

```python
import asyncio
from signalmanager.auth import AuthManager

async def main():
    auth = AuthManager("token", {"client_a": "token"})
    print(await auth.authenticate("client_a", "token"))   # True
    print(await auth.authenticate("client_a", "secret"))  # False

asyncio.run(main())
```

The supported methods are `"token"` and `"api_key"`. Both compare the given credential
with the stored one. Any other method rejects every client. When no keys are given, the
manager starts with the two development clients `test_client_1` and `test_client_2`.
Tokens can be changed at run time with `add_valid_token` and `remove_token`.
`validate_session` reports whether the client id is known.

## Record types

```python
from datetime import datetime, timezone
from signalmanager.database.models import ClientInTerminatedRoom, ClientTerminationStatus

record = (
    ClientInTerminatedRoom.builder()
    .client_id("client_a")
    .room_id("room-1")
    .joined_at(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))
    .left_at(datetime(2024, 1, 1, 12, 30, tzinfo=timezone.utc))
    .termination_reason("ended")
    .terminated_by("client_b")
    .final_status(ClientTerminationStatus.KICKED)
    .build()
)
print(record.session_duration())  # 0:30:00
```

`build()` raises `ValueError` that names the first required field left unset. If
`left_at` is not set, it defaults to the current time. Each record gets a random UUID
`id`, and its timestamps are in UTC.

## Cloudflare sessions

```python
import asyncio
from signalmanager.cloudflare.client import CloudflareClient
from signalmanager.cloudflare.session import CloudflareSessionManager

async def main():
    async with CloudflareClient("app-id", app_secret="secret",
                                base_url="https://rtc.example.com/v1") as client:
        manager = CloudflareSessionManager(client, "app-id")
        info = await manager.create_room_with_sender("room-1", "client_a", "v=0 ...")
        print(info.session_id, info.to_dict()["status"])  # <id> Connecting

asyncio.run(main())
```

When the API answers with a status other than success, or with a body that cannot be
read, the client raises `CloudflareApiError`. Two calls behave differently:
`terminate_session` only logs a rejected request, and `validate_credentials` returns
`False`. `CloudflareSessionManager.terminate_session` also logs any error from the
client and does not raise it. `CloudflareSessionManager` accepts any object that
provides the methods of `CloudflareClientProtocol`. `generate_room_id()` returns a
fresh UUID string.

## What this package does not do

There is no storage. The record types in `signalmanager.database` are plain dataclasses,
and no repository or database stores them. There is no server and no command: nothing
here accepts WebSocket connections or handles signalling messages. This package gives
you the parts that a service of that kind would use.

## Running the tests

```
pytest
```