"""Lemon Squeezy Client — single-shot calls to the licensing provider's license API.

Invariants:
    - One POST per call, no retry and no backoff: failure reaches the caller immediately
    - Bearer-authenticated with the server-held API key; a missing key is a
      ConfigurationMissingError before any network IO
    - Network errors, timeouts, and non-object JSON bodies → ProviderTransportError
    - Any completed round trip (2xx or not) → ProviderReply; judging it is core's job

Design Decisions:
    - httpx.AsyncClient injected or owned: tests pass a client on httpx.MockTransport
      so request building and error mapping run unchanged
    - Internal failure detail goes to the log and ProviderTransportError.reason only,
      never into the user-facing message
"""

import logging
from typing import Any

import httpx

from findtell.core.errors import ConfigurationMissingError, ProviderTransportError
from findtell.core.repository_protocols import ProviderReply

logger = logging.getLogger(__name__)

VALIDATE_PATH = "/licenses/validate"
ACTIVATE_PATH = "/licenses/activate"


class LemonSqueezyClient:
    """Thin async wrapper over the provider's /licenses endpoints."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.lemonsqueezy.com/v1",
        timeout_seconds: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url, timeout=timeout_seconds,
        )

    async def validate(
        self, license_key: str, instance_id: str | None = None,
    ) -> ProviderReply:
        payload: dict[str, Any] = {"license_key": license_key}
        if instance_id:
            payload["instance_id"] = instance_id
        return await self._post(VALIDATE_PATH, payload, "validation")

    async def activate(self, license_key: str, instance_name: str) -> ProviderReply:
        payload = {"license_key": license_key, "instance_name": instance_name}
        return await self._post(ACTIVATE_PATH, payload, "activation")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _post(self, path: str, payload: dict, operation: str) -> ProviderReply:
        if not self.api_key:
            raise ConfigurationMissingError(
                "lemon_squeezy_api_key", "License provider not configured",
            )
        try:
            response = await self._client.post(
                path, json=payload, headers=self._headers(),
            )
        except httpx.HTTPError as e:
            logger.error(
                f"License provider {operation} request failed: {e!r}",
                extra={"operation": operation},
            )
            raise ProviderTransportError(operation, repr(e))

        try:
            body = response.json()
        except ValueError as e:
            logger.error(
                f"License provider returned non-JSON body (HTTP {response.status_code})",
                extra={"operation": operation, "provider_status": response.status_code},
            )
            raise ProviderTransportError(operation, f"unparsable body: {e}")

        if not isinstance(body, dict):
            raise ProviderTransportError(operation, "response body is not an object")

        return ProviderReply(status_code=response.status_code, body=body)

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
