"""Token based authentication of signalling clients."""

from __future__ import annotations

import logging
from collections.abc import Mapping

logger = logging.getLogger(__name__)

_DEVELOPMENT_TOKENS = {
    "test_client_1": "test_token_1",
    "test_client_2": "test_token_2",
}


class AuthManager:
    """Checks client credentials against a table of known tokens."""

    def __init__(self, auth_method: str = "token", api_keys: Mapping[str, str] | None = None) -> None:
        self._auth_method = auth_method
        self._tokens: dict[str, str] = dict(api_keys or {})
        if not self._tokens:
            # Development fallback when no keys are configured.
            self._tokens.update(_DEVELOPMENT_TOKENS)

    @property
    def auth_method(self) -> str:
        return self._auth_method

    async def authenticate(self, client_id: str, auth_token: str) -> bool:
        """Return whether the client's credential is valid for the configured method."""
        logger.debug("Authenticating client: %s with method: %s", client_id, self._auth_method)
        if self._auth_method in ("token", "api_key"):
            return self._check_token(client_id, auth_token)
        logger.warning("Unknown authentication method: %s", self._auth_method)
        return False

    def _check_token(self, client_id: str, auth_token: str) -> bool:
        expected = self._tokens.get(client_id)
        if expected is None:
            logger.warning("Unknown client: %s", client_id)
            return False
        if expected == auth_token:
            logger.debug("Token authentication successful for client: %s", client_id)
            return True
        logger.warning("Invalid token for client: %s", client_id)
        return False

    async def add_valid_token(self, client_id: str, token: str) -> None:
        self._tokens[client_id] = token

    async def remove_token(self, client_id: str) -> None:
        self._tokens.pop(client_id, None)

    async def validate_session(self, client_id: str, session_id: str) -> bool:
        """A session is valid while its client is known."""
        return client_id in self._tokens