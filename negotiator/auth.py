"""Authentication boundary: bearer token → user id, plus auth-state events.

The identity provider is hosted and opaque; only its "who is this token"
endpoint is used. Core components never import this module.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import httpx

from negotiator.errors import AuthenticationError

logger = logging.getLogger(__name__)

USER_ENDPOINT = "{base_url}/auth/v1/user"

AuthListener = Callable[[str, Optional[str]], None]


class AuthClient:
    """Resolves a bearer token against the hosted identity provider."""

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    async def resolve_user(self, token: str) -> str:
        """Return the user id the token belongs to.

        Raises AuthenticationError if the provider is not configured,
        unreachable, or rejects the token.
        """
        if not self.base_url:
            logger.error("Identity provider not configured — rejecting token")
            raise AuthenticationError("Authentication is not configured")

        headers = {"Authorization": f"Bearer {token}"}
        if self.api_key:
            headers["apikey"] = self.api_key

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(USER_ENDPOINT.format(base_url=self.base_url), headers=headers)
                resp.raise_for_status()
                data: dict[str, Any] = resp.json()
        except httpx.HTTPError as exc:
            logger.warning("Token verification failed: %s", exc)
            raise AuthenticationError("Invalid authorization token") from exc
        except ValueError as exc:
            logger.warning("Identity provider returned malformed JSON: %s", exc)
            raise AuthenticationError("Invalid authorization token") from exc

        user_id = data.get("id")
        if not user_id:
            raise AuthenticationError("Invalid authorization token")
        return str(user_id)


class AuthEvents:
    """Subscribe/notify channel for auth-state changes (sign-in, sign-out).

    ``subscribe`` returns a handle; calling it cancels the subscription.
    A listener that raises is logged and does not stop the others.
    """

    def __init__(self) -> None:
        self._listeners: dict[int, AuthListener] = {}
        self._next_key = 0

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        key = self._next_key
        self._next_key += 1
        self._listeners[key] = listener

        def cancel() -> None:
            self._listeners.pop(key, None)

        return cancel

    def notify(self, event: str, user_id: Optional[str] = None) -> None:
        for listener in list(self._listeners.values()):
            try:
                listener(event, user_id)
            except Exception:
                logger.exception("Auth listener failed for event %s", event)

    def __len__(self) -> int:
        return len(self._listeners)
