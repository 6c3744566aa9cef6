"""FastSpring REST API client.

Authentication uses HTTP basic auth with the API credentials created in the
FastSpring dashboard. Every call returns the decoded JSON body; a 4xx/5xx
answer raises :class:`FastspringClientError`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class FastspringClientError(Exception):
    """FastSpring answered with an error status."""

    def __init__(self, status_code: int, body: Any, method: str = "", path: str = ""):
        self.status_code = status_code
        self.body = body
        self.method = method
        self.path = path
        super().__init__(f"FastSpring {method} {path} returned HTTP {status_code}")

    @property
    def error(self) -> dict[str, Any]:
        """The ``error`` object of the response body, e.g. ``{"email": "..."}``."""
        if isinstance(self.body, dict) and isinstance(self.body.get("error"), dict):
            return self.body["error"]
        return {}


class FastspringClient:
    """Thin async wrapper over the FastSpring API endpoints used for billing."""

    def __init__(
        self,
        username: str,
        password: str,
        base_url: str = "https://api.fastspring.com",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._auth = httpx.BasicAuth(username, password)
        self._transport = transport

    @classmethod
    def from_settings(cls, settings, transport: httpx.AsyncBaseTransport | None = None) -> FastspringClient:
        return cls(
            username=settings.username,
            password=settings.password,
            base_url=settings.api_base_url,
            timeout=settings.api_timeout,
            transport=transport,
        )

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    async def create_session(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Create a checkout session for an account (``POST /sessions``)."""
        return await self._request("POST", "/sessions", json=payload)

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    async def create_account(self, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/accounts", json=payload)

    async def update_account(self, account_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", f"/accounts/{account_id}", json=payload)

    async def get_account(self, account_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/accounts/{account_id}")

    async def get_accounts(self, **filters: Any) -> dict[str, Any]:
        """Search accounts, e.g. ``get_accounts(email="jane@example.com")``."""
        return await self._request("GET", "/accounts", params=filters)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    async def get_subscription(self, subscription_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/subscriptions/{subscription_id}")

    async def cancel_subscription(self, subscription_id: str) -> dict[str, Any]:
        """Cancel at the end of the current period (``DELETE /subscriptions/{id}``)."""
        return await self._request("DELETE", f"/subscriptions/{subscription_id}")

    async def uncancel_subscription(self, subscription_id: str) -> dict[str, Any]:
        """Remove a pending cancellation by clearing the deactivation date."""
        payload = {"subscriptions": [{"subscription": subscription_id, "deactivation": None}]}
        return await self._request("POST", "/subscriptions", json=payload)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            auth=self._auth,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            response = await client.request(method, path, **kwargs)

        body = _decode(response)
        if response.is_error:
            logger.warning("FastSpring %s %s returned %s", method, path, response.status_code)
            raise FastspringClientError(response.status_code, body, method, path)
        return body


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return {"raw": response.text}
