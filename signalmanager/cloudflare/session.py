"""Room level management of realtime media sessions."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from signalmanager.cloudflare.client import CloudflareClientProtocol
from signalmanager.cloudflare.models import (
    ClientRole,
    CloudflareTracksResponse,
    ConnectionStatus,
    Track,
    WebRTCConnectionInfo,
)

logger = logging.getLogger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def generate_room_id() -> str:
    """Return a fresh random room identifier."""
    return str(uuid.uuid4())


class CloudflareSessionManager:
    """Creates and joins rooms through a media API client."""

    def __init__(self, client: CloudflareClientProtocol, app_id: str) -> None:
        self._client = client
        self.app_id = app_id

    async def create_room_with_sender(
        self, room_id: str, client_id: str, offer_sdp: str
    ) -> WebRTCConnectionInfo:
        """Open a session for the sending client of a room."""
        logger.debug("Creating room %s with sender %s", room_id, client_id)
        response = await self._client.create_session(offer_sdp)
        info = WebRTCConnectionInfo(
            room_id=room_id,
            role=ClientRole.SENDER,
            app_id=self.app_id,
            session_id=response.session_id,
            status=ConnectionStatus.CONNECTING,
            metadata={
                "session_id": response.session_id,
                "created_at": _timestamp(),
                "client_id": client_id,
            },
        )
        logger.info("Created room %s with sender session %s", room_id, response.session_id)
        return info

    async def join_room_as_receiver(
        self, room_id: str, client_id: str, sender_session_id: str
    ) -> WebRTCConnectionInfo:
        """Subscribe a receiving client to the sender's video and audio."""
        logger.debug("Joining room %s as receiver %s", room_id, client_id)
        tracks = [
            Track(location="remote", track_name=name, session_id=sender_session_id)
            for name in ("video", "audio")
        ]
        response = await self._client.add_tracks(sender_session_id, tracks, None)
        info = WebRTCConnectionInfo(
            room_id=room_id,
            role=ClientRole.RECEIVER,
            app_id=self.app_id,
            session_id=sender_session_id,
            status=ConnectionStatus.CONNECTING,
            metadata={
                "sender_session_id": sender_session_id,
                "joined_at": _timestamp(),
                "client_id": client_id,
                "requires_renegotiation": response.requires_immediate_renegotiation,
            },
        )
        logger.info("Joined room %s as receiver with session %s", room_id, sender_session_id)
        return info

    async def add_tracks_to_session(
        self, session_id: str, tracks: Iterable[Track], offer_sdp: str | None = None
    ) -> CloudflareTracksResponse:
        """Add tracks to an existing session."""
        track_list = list(tracks)
        logger.debug("Adding tracks to session %s", session_id)
        response = await self._client.add_tracks(session_id, track_list, offer_sdp)
        logger.info("Added %d tracks to session %s", len(track_list), session_id)
        return response

    async def send_answer_sdp(self, session_id: str, answer_sdp: str) -> None:
        """Forward an SDP answer for renegotiation."""
        logger.debug("Sending answer SDP to session %s", session_id)
        await self._client.send_answer_sdp(session_id, answer_sdp)
        logger.info("Sent answer SDP to session %s", session_id)

    async def terminate_session(self, session_id: str, room_id: str) -> None:
        """End a session; failures of the remote call are only logged."""
        logger.debug("Terminating session %s for room %s", session_id, room_id)
        try:
            await self._client.terminate_session(session_id)
        except Exception as exc:  # noqa: BLE001 - termination is best effort
            logger.warning("Failed to terminate Cloudflare session %s: %s", session_id, exc)
        logger.info("Terminated session %s for room %s", session_id, room_id)

    async def get_session_info(self, session_id: str) -> Any:
        """Return the API's description of a session."""
        logger.debug("Getting session info for %s", session_id)
        return await self._client.get_session(session_id)

    async def validate_credentials(self) -> bool:
        """Return whether the client's credentials are accepted."""
        logger.debug("Validating Cloudflare credentials")
        valid = await self._client.validate_credentials()
        if valid:
            logger.info("Cloudflare credentials are valid")
        else:
            logger.error("Cloudflare credentials are invalid")
        return valid

    def create_connection_info(
        self, room_id: str, role: ClientRole, session_id: str | None = None
    ) -> WebRTCConnectionInfo:
        """Build disconnected connection details for a client."""
        return WebRTCConnectionInfo(
            room_id=room_id,
            role=role,
            app_id=self.app_id,
            session_id=session_id,
            status=ConnectionStatus.DISCONNECTED,
            metadata={"created_at": _timestamp()},
        )