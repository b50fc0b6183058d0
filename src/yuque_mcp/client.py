"""Authenticated access to the Yuque v2 repository API."""

import logging
from typing import Any, Optional

import httpx

from yuque_mcp.config import RepoConfig
from yuque_mcp.errors import RemoteError

logger = logging.getLogger(__name__)


def _payload(response: httpx.Response) -> Any:
    """Parsed JSON body, or raw text when the body is not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text


class YuqueClient:
    """Issues requests against one knowledge base.

    Each request opens its own httpx.AsyncClient. ``transport`` is passed
    straight through so callers can swap in an httpx.MockTransport.
    """

    def __init__(self, config: RepoConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._transport = transport

    @property
    def headers(self) -> dict:
        return {
            "X-Auth-Token": self.config.api_token,
            "Content-Type": "application/json",
        }

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        params: Optional[dict] = None,
        data: Optional[dict] = None,
    ) -> Any:
        """Make a request and return the ``data`` field of the response.

        Raises:
            RemoteError: on a non-2xx status, a transport failure, or a
                response body that is not JSON.
        """
        url = f"{self.config.base_url}/{endpoint.lstrip('/')}"
        logger.debug(f"{method} {url} params={params}")

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.request(
                    method, url, headers=self.headers, params=params, json=data
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(f"Yuque API {method} {endpoint} returned {status}")
            raise RemoteError(status_code=status, payload=_payload(e.response)) from e
        except httpx.HTTPError as e:
            logger.warning(f"Yuque API {method} {endpoint} failed: {e}")
            raise RemoteError(message=str(e) or type(e).__name__) from e

        if not response.content:
            return None
        try:
            body = response.json()
        except ValueError as e:
            raise RemoteError(status_code=response.status_code, payload=response.text) from e
        return body.get("data") if isinstance(body, dict) else None

    async def get(self, endpoint: str, params: Optional[dict] = None) -> Any:
        return await self.request(endpoint, "GET", params=params)

    async def post(self, endpoint: str, data: dict) -> Any:
        return await self.request(endpoint, "POST", data=data)

    async def put(self, endpoint: str, data: dict) -> Any:
        return await self.request(endpoint, "PUT", data=data)
