"""Resolver handle performing ENS record retrieval."""

from __future__ import annotations

import logging

from eth_utils import to_checksum_address

from enslookup.chain.base import ChainClient
from enslookup.chain.calls import execute_call
from enslookup.chain.gateway import OffchainGateway
from enslookup.contracts.abi import (
    RESOLVER_ADDR,
    RESOLVER_NAME,
    RESOLVER_RESOLVE,
    SUPPORTS_INTERFACE,
    WILDCARD_INTERFACE_ID,
    decode_address,
    decode_bool,
    decode_bytes,
    decode_string,
    encode_call,
)
from enslookup.core.encoding import dns_encode, name_hash_bytes, reverse_name
from enslookup.core.exceptions import DecodeIssueError, EnsError, EnsUnknownError
from enslookup.core.policy import CallExecutionPolicy, NoOffchain
from enslookup.core.types import BlockTag

logger = logging.getLogger(__name__)


class EnsResolver:
    """
    Handle on a single ENS resolver contract.

    Bound to the resolver's address, the chain client and the call
    execution policy its record lookups run under. ``must_support_wildcard``
    is set when the resolver was found at a parent of the requested name;
    queries then go through ENSIP-10 ``resolve(bytes,bytes)`` with the
    full name. Otherwise wildcard support is probed once via ERC-165.
    """

    def __init__(
        self,
        address: str,
        client: ChainClient,
        policy: CallExecutionPolicy,
        *,
        must_support_wildcard: bool = False,
        gateway: OffchainGateway | None = None,
    ) -> None:
        self.address = to_checksum_address(address)
        self.client = client
        self.policy = policy
        self.must_support_wildcard = must_support_wildcard
        self._gateway = gateway
        self._supports_wildcard: bool | None = True if must_support_wildcard else None

    def __repr__(self) -> str:
        return (
            f"EnsResolver(address={self.address!r}, policy={self.policy!r}, "
            f"must_support_wildcard={self.must_support_wildcard})"
        )

    async def _call(self, data: bytes, policy: CallExecutionPolicy | None = None) -> bytes:
        return await execute_call(
            self.client,
            self.address,
            data,
            policy=policy or self.policy,
            block=BlockTag.LATEST,
            gateway=self._gateway,
        )

    async def supports_interface(self, interface_id: bytes) -> bool:
        """ERC-165 probe. Reverting or malformed answers count as unsupported."""
        data = await self._call(
            encode_call(SUPPORTS_INTERFACE, ["bytes4"], [interface_id]),
            policy=NoOffchain(fail_on_execution_error=False),
        )
        try:
            return decode_bool(data)
        except DecodeIssueError:
            return False

    async def supports_wildcard(self) -> bool:
        if self._supports_wildcard is None:
            self._supports_wildcard = await self.supports_interface(WILDCARD_INTERFACE_ID)
            logger.debug(f"Resolver {self.address} wildcard support: {self._supports_wildcard}")
        return self._supports_wildcard

    async def resolve_name(self, address: str) -> str:
        """Primary name for an address (reverse record)."""
        node = name_hash_bytes(reverse_name(address))
        try:
            data = await self._call(encode_call(RESOLVER_NAME, ["bytes32"], [node]))
            return decode_string(data)
        except EnsError:
            raise
        except Exception as e:
            raise EnsUnknownError(
                f"Reverse record lookup failed: {e}",
                details={"resolver": self.address, "address": address},
            ) from e

    async def resolve_address(self, name: str) -> str:
        """Address record for a name."""
        node = name_hash_bytes(name)
        addr_call = encode_call(RESOLVER_ADDR, ["bytes32"], [node])
        try:
            if await self.supports_wildcard():
                data = await self._call(
                    encode_call(RESOLVER_RESOLVE, ["bytes", "bytes"], [dns_encode(name), addr_call])
                )
                return decode_address(decode_bytes(data))

            data = await self._call(addr_call)
            return decode_address(data)
        except EnsError:
            raise
        except Exception as e:
            raise EnsUnknownError(
                f"Address record lookup failed: {e}",
                details={"resolver": self.address, "name": name},
            ) from e
