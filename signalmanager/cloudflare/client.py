"""HTTP client for the realtime media session API."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any, Protocol

import httpx

from signalmanager.cloudflare.models import (
    CloudflareSessionResponse,
    CloudflareTracksResponse,
    Track,
)

logger = logging.getLogger(__name__)


class CloudflareApiError(Exception):
    """Raised when the API rejects a request or returns an unreadable reply."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CloudflareClientProtocol(Protocol):
    """Operations a session manager needs from the media API."""

    async def create_session(self, offer_sdp: str) -> CloudflareSessionResponse: ...

    async def add_tracks(
        self, session_id: str, tracks: Iterable[Track], offer_sdp: str | None = None
    ) -> CloudflareTracksResponse: ...

    async def send_answer_sdp(self, session_id: str, answer_sdp: str) -> None: ...

    async def terminate_session(self, session_id: str) -> None: ...

    async def get_session(self, session_id: str) -> Any: ...

    async def validate_credentials(self) -> bool: ...


class CloudflareClient:
    """Talks to the realtime media API on behalf of one application."""

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.app_id = app_id
        self._app_secret = app_secret
        self.base_url = base_url
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def __aenter__(self) -> CloudflareClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    def _url(self, *parts: str) -> str:
        return "/".join((self.base_url, "apps", self.app_id, *parts))

    def _headers(self, with_json: bool = True) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {self._app_secret}"}
        if with_json:
            headers["Content-Type"] = "application/json"
        return headers

    @staticmethod
    def _raise_for_status(response: httpx.Response, action: str) -> None:
        if not response.is_success:
            text = response.text
            logger.error("Cloudflare %s failed: %s", action, text)
            raise CloudflareApiError(f"Cloudflare API error: {text}", response.status_code)

    async def create_session(self, offer_sdp: str) -> CloudflareSessionResponse:
        """Open a new session from an SDP offer."""
        url = self._url("sessions", "new")
        body = {"sessionDescription": {"type": "offer", "sdp": offer_sdp}}
        logger.debug("Sending Cloudflare session creation request to URL: %s", url)
        response = await self._http.post(url, headers=self._headers(), json=body)
        self._raise_for_status(response, "session creation")

        text = response.text
        logger.debug("Cloudflare session creation response: %s", text)
        try:
            result = CloudflareSessionResponse.from_dict(json.loads(text))
        except (ValueError, TypeError) as exc:
            logger.error("Failed to parse Cloudflare response: %s", exc)
            raise CloudflareApiError(f"Failed to parse Cloudflare response: {exc}") from exc
        logger.info("Created Cloudflare session: %s", result.session_id)
        return result

    async def add_tracks(
        self, session_id: str, tracks: Iterable[Track], offer_sdp: str | None = None
    ) -> CloudflareTracksResponse:
        """Add tracks to a session, optionally with a new offer."""
        url = self._url("sessions", session_id, "tracks", "new")
        body: dict[str, Any] = {"tracks": [track.to_dict() for track in tracks]}
        if offer_sdp is not None:
            body["sessionDescription"] = {"type": "offer", "sdp": offer_sdp}
        logger.debug("Adding tracks to session %s with URL: %s", session_id, url)
        response = await self._http.post(url, headers=self._headers(), json=body)
        self._raise_for_status(response, "track addition")
        try:
            result = CloudflareTracksResponse.from_dict(response.json())
        except (ValueError, TypeError) as exc:
            raise CloudflareApiError(f"Failed to parse Cloudflare response: {exc}") from exc
        logger.info("Added tracks to session: %s", session_id)
        return result

    async def send_answer_sdp(self, session_id: str, answer_sdp: str) -> None:
        """Send an SDP answer to complete renegotiation."""
        url = self._url("sessions", session_id, "renegotiate")
        body = {"sessionDescription": {"type": "answer", "sdp": answer_sdp}}
        logger.debug("Sending answer SDP to session %s with URL: %s", session_id, url)
        response = await self._http.put(url, headers=self._headers(), json=body)
        self._raise_for_status(response, "answer SDP")
        logger.info("Sent answer SDP to session: %s", session_id)

    async def terminate_session(self, session_id: str) -> None:
        """Close a session; a rejected request is only logged."""
        url = self._url("sessions", session_id)
        logger.debug("Terminating session %s with URL: %s", session_id, url)
        response = await self._http.delete(url, headers=self._headers(with_json=False))
        if not response.is_success:
            # The session may already be gone.
            logger.warning("Cloudflare session termination failed: %s", response.text)
        logger.info("Terminated session: %s", session_id)

    async def get_session(self, session_id: str) -> Any:
        """Return the API's description of a session as decoded JSON."""
        url = self._url("sessions", session_id)
        logger.debug("Getting session info for %s with URL: %s", session_id, url)
        response = await self._http.get(url, headers=self._headers(with_json=False))
        self._raise_for_status(response, "get session")
        try:
            return response.json()
        except ValueError as exc:
            raise CloudflareApiError(f"Failed to parse Cloudflare response: {exc}") from exc

    async def validate_credentials(self) -> bool:
        """Return whether the application credentials are accepted."""
        url = self._url()
        logger.debug("Validating Cloudflare credentials with URL: %s", url)
        response = await self._http.get(url, headers=self._headers(with_json=False))
        if response.is_success:
            logger.info("Cloudflare credentials validated successfully")
            return True
        logger.error("Cloudflare credentials validation failed: %s", response.status_code)
        return False