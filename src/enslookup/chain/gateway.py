"""EIP-3668 gateway client for off-chain lookups."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx

from enslookup.chain.base import OffchainLookup
from enslookup.core.exceptions import DecodeIssueError, EnsUnknownError

logger = logging.getLogger(__name__)


class OffchainGateway:
    """
    HTTP client for CCIP-read gateways.

    Gateway URLs are templates: ``{sender}`` is replaced with the lowercase
    sender address and ``{data}`` with the 0x-prefixed call data. Templates
    containing ``{data}`` are fetched with GET, all others receive a JSON
    POST of ``{"data": ..., "sender": ...}``.

    URLs are tried in order. A 4xx response ends the walk, a 5xx response
    or transport error moves on to the next URL.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get or create HTTP client with proper lifecycle."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={
                    "User-Agent": "enslookup/1.0",
                    "Accept": "application/json",
                },
                follow_redirects=True,
            )
            self._owns_client = True
        yield self._client

    async def close(self) -> None:
        """Close the HTTP client if it was created here."""
        if self._client and self._owns_client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def fetch(self, lookup: OffchainLookup) -> bytes:
        """Fetch the gateway response for an off-chain lookup request."""
        sender = lookup.sender.lower()
        data = "0x" + lookup.call_data.hex()

        if not lookup.urls:
            raise EnsUnknownError(
                "Off-chain lookup provided no gateway URLs",
                details={"sender": lookup.sender},
            )

        async with self._get_client() as client:
            for template in lookup.urls:
                url = template.replace("{sender}", sender).replace("{data}", data)
                try:
                    if "{data}" in template:
                        response = await client.get(url)
                    else:
                        response = await client.post(url, json={"data": data, "sender": sender})
                except httpx.HTTPError as e:
                    logger.warning(f"Gateway {url} unreachable: {e}")
                    continue

                if response.status_code >= 500:
                    logger.warning(f"Gateway {url} returned {response.status_code}")
                    continue

                if response.status_code >= 400:
                    raise EnsUnknownError(
                        f"Gateway rejected off-chain lookup: {response.status_code}",
                        details={"url": url, "status_code": response.status_code},
                    )

                logger.debug(f"Gateway {url} answered off-chain lookup")
                return self._parse_response(response, url)

        raise EnsUnknownError(
            "All off-chain gateways failed",
            details={"urls": list(lookup.urls)},
        )

    @staticmethod
    def _parse_response(response: httpx.Response, url: str) -> bytes:
        try:
            payload = response.json()
            value = payload["data"]
            if not isinstance(value, str):
                raise TypeError(f"expected hex string, got {type(value).__name__}")
            return bytes.fromhex(value.removeprefix("0x"))
        except (ValueError, KeyError, TypeError) as e:
            raise DecodeIssueError(
                f"Malformed gateway response: {e}",
                details={"url": url},
            ) from e

    async def __aenter__(self) -> "OffchainGateway":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
