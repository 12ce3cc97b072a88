"""Chain client backed by web3's async provider."""

from __future__ import annotations

import logging
from typing import Any

from eth_utils import to_checksum_address
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import ContractLogicError
from web3.exceptions import OffchainLookup as Web3OffchainLookup

from enslookup.chain.base import ContractExecutionError, OffchainLookup
from enslookup.core.types import BlockTag

logger = logging.getLogger(__name__)


def _as_bytes(value: Any) -> bytes:
    if isinstance(value, str):
        return bytes.fromhex(value.removeprefix("0x"))
    return bytes(value)


class Web3ChainClient:
    """
    ChainClient implementation over ``AsyncWeb3``.

    CCIP-read is disabled on the underlying call so that off-chain lookups
    surface as ``OffchainLookup`` and are followed under the caller's
    execution policy instead of web3's own.
    """

    def __init__(self, w3: AsyncWeb3, network: int | None = None) -> None:
        self._w3 = w3
        self._network = network

    @classmethod
    def from_url(
        cls,
        rpc_url: str,
        *,
        timeout: float = 30.0,
        network: int | None = None,
    ) -> "Web3ChainClient":
        """Create a client for an HTTP JSON-RPC endpoint."""
        provider = AsyncHTTPProvider(rpc_url, request_kwargs={"timeout": timeout})
        return cls(AsyncWeb3(provider), network=network)

    @property
    def network(self) -> int | None:
        return self._network

    async def refresh_network(self) -> int:
        """Read the chain id from the node and select it as the network."""
        self._network = int(await self._w3.eth.chain_id)
        logger.debug(f"Selected network chain id {self._network}")
        return self._network

    async def eth_call(
        self,
        to: str,
        data: bytes,
        block: BlockTag | str = BlockTag.LATEST,
    ) -> bytes:
        transaction = {"to": to_checksum_address(to), "data": "0x" + data.hex()}
        try:
            result = await self._w3.eth.call(
                transaction,
                block_identifier=str(block),
                ccip_read_enabled=False,
            )
        except Web3OffchainLookup as e:
            payload = e.payload
            raise OffchainLookup(
                sender=payload["sender"],
                urls=list(payload["urls"]),
                call_data=_as_bytes(payload["callData"]),
                callback_function=_as_bytes(payload["callbackFunction"]),
                extra_data=_as_bytes(payload["extraData"]),
            ) from e
        except ContractLogicError as e:
            raise ContractExecutionError(str(e)) from e
        return bytes(result)

    async def close(self) -> None:
        """Release the provider's HTTP session."""
        await self._w3.provider.disconnect()
