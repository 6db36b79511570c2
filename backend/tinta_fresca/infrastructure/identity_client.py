"""Identity Provider Client — wraps httpx.AsyncClient for the provider's auth REST API.

Invariants:
    - Token verification uses the anon key as apikey and the caller's token as bearer
    - Admin calls use the service-role key as both apikey and bearer
    - Timeouts, transport failures and non-2xx responses all map to IdentityProviderError
    - No retries: one HTTP request per method call

Design Decisions:
    - Wrapper over raw client: isolates header/error handling from route handlers (ADR: single responsibility)
    - Provider message extracted from msg / message / error_description / error, first present,
      because the provider uses different error envelopes per endpoint
    - transport injectable so tests run against httpx.MockTransport
"""

import logging
from typing import Any

import httpx

from tinta_fresca.core.errors import IdentityProviderError

logger = logging.getLogger(__name__)

_MESSAGE_KEYS = ("msg", "message", "error_description", "error")


def _extract_message(response: httpx.Response) -> str:
    """Best-effort human message from a provider error response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in _MESSAGE_KEYS:
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    text = response.text.strip()
    return text[:200] if text else f"HTTP {response.status_code}"


class IdentityProviderClient:
    """Talks to the identity provider's /auth/v1 endpoints."""

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        service_role_key: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._anon_key = anon_key
        self._service_role_key = service_role_key
        self.client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/auth/v1",
            timeout=timeout_seconds,
            transport=transport,
        )

    async def get_user(self, token: str) -> dict[str, Any]:
        """Verify a user token and return the identity it belongs to."""
        return await self._request(
            "GET", "/user",
            api_key=self._anon_key, bearer=token, operation="get_user",
        )

    async def list_users(self) -> list[dict[str, Any]]:
        body = await self._request(
            "GET", "/admin/users",
            api_key=self._service_role_key, operation="list_users",
        )
        if isinstance(body, list):
            return body
        return body.get("users", [])

    async def create_user(
        self,
        email: str,
        password: str,
        user_metadata: dict[str, Any] | None = None,
        email_confirm: bool = True,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "email": email,
            "password": password,
            "email_confirm": email_confirm,
        }
        if user_metadata:
            payload["user_metadata"] = user_metadata
        return await self._request(
            "POST", "/admin/users",
            api_key=self._service_role_key, json=payload,
            operation="create_user",
        )

    async def delete_user(self, user_id: str) -> None:
        await self._request(
            "DELETE", f"/admin/users/{user_id}",
            api_key=self._service_role_key, operation="delete_user",
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        api_key: str,
        operation: str,
        bearer: str | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {bearer or api_key}",
        }
        try:
            response = await self.client.request(
                method, path, headers=headers, json=json,
            )
        except httpx.TimeoutException:
            raise IdentityProviderError(
                f"Identity provider timeout during {operation}", "timeout",
            )
        except httpx.TransportError as e:
            raise IdentityProviderError(
                f"Identity provider connection error during {operation}: {e}",
                "connection_error",
            )

        if response.is_error:
            message = _extract_message(response)
            logger.warning(
                f"Identity provider rejected {operation}: {message}",
                extra={"status_code": response.status_code},
            )
            raise IdentityProviderError(
                message, "http_error", status_code=response.status_code,
            )

        logger.debug(
            f"Identity provider {operation} ok",
            extra={"status_code": response.status_code},
        )
        if not response.content:
            return {}
        return response.json()
