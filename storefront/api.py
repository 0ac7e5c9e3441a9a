"""
Async HTTP client for the storefront backend API.

Returns decoded JSON bodies untouched; callers unwrap them with
storefront.content.normalize(). Non-2xx responses raise httpx.HTTPStatusError.
"""

import logging
from typing import Any

import httpx

from storefront.config import get_api_timeout, get_server_base_url

logger = logging.getLogger(__name__)


class BackendClient:
    """Thin wrapper around httpx.AsyncClient for the public storefront endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self.base_url = (base_url or get_server_base_url()).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=get_api_timeout(),
            transport=transport,
        )

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        response = await self._client.request(method, path, **kwargs)
        if response.is_error:
            logger.warning(f"{method} {path} failed with status {response.status_code}")
        response.raise_for_status()
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"{method} {path} returned a non-JSON body")
            raise httpx.DecodingError(
                f"Invalid JSON in response to {method} {path}", request=response.request
            ) from e

    async def get_public_plans(self) -> Any:
        return await self._request("GET", "/subscription-plans/public")

    async def get_challenges(self) -> Any:
        return await self._request("GET", "/challenges")

    async def get_challenge(self, challenge_id: int) -> Any:
        return await self._request("GET", f"/challenges/{challenge_id}")

    async def complete_challenge(
        self,
        challenge_id: int,
        *,
        image_id: int | None = None,
        generated_image_url: str | None = None,
        generated_image_path: str | None = None,
    ) -> Any:
        """Mark a challenge completed with the generated image."""
        payload = {
            "image_id": image_id,
            "generated_image_url": generated_image_url,
            "generated_image_path": generated_image_path,
        }
        return await self._request(
            "POST",
            f"/challenges/{challenge_id}/complete",
            json={k: v for k, v in payload.items() if v is not None},
        )

    async def create_checkout_session(
        self, plan_id: Any, success_url: str, cancel_url: str
    ) -> Any:
        """Create a Stripe checkout session; response is {success, url?, message?}."""
        return await self._request(
            "POST",
            "/payments/checkout",
            json={
                "plan_id": plan_id,
                "success_url": success_url,
                "cancel_url": cancel_url,
            },
        )

    async def get_videos(self, **params) -> Any:
        return await self._request("GET", "/videos", params=params)

    async def get_categories(self) -> Any:
        return await self._request("GET", "/categories/public")

    async def get_series(self) -> Any:
        return await self._request("GET", "/series")


def error_message(exc: httpx.HTTPError) -> str | None:
    """Backend "message" from a failed response body, if there is one."""
    response = getattr(exc, "response", None)
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None
