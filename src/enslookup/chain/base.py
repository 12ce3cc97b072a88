"""Chain client protocol and chain-level call errors."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from enslookup.core.types import BlockTag


class ContractExecutionError(Exception):
    """A contract call reverted."""

    def __init__(self, message: str = "execution reverted", data: bytes | None = None) -> None:
        super().__init__(message)
        self.data = data


class OffchainLookup(ContractExecutionError):
    """
    EIP-3668 revert asking the caller to fetch data from a gateway.

    Carries the decoded ``OffchainLookup(address,string[],bytes,bytes4,bytes)``
    revert arguments.
    """

    def __init__(
        self,
        sender: str,
        urls: list[str],
        call_data: bytes,
        callback_function: bytes,
        extra_data: bytes,
    ) -> None:
        super().__init__(f"OffchainLookup from {sender}")
        self.sender = sender
        self.urls = list(urls)
        self.call_data = call_data
        self.callback_function = callback_function
        self.extra_data = extra_data


@runtime_checkable
class ChainClient(Protocol):
    """Capability required from an Ethereum node client."""

    @property
    def network(self) -> int | None:
        """Chain id of the currently selected network, if known."""
        ...

    async def eth_call(
        self,
        to: str,
        data: bytes,
        block: BlockTag | str = BlockTag.LATEST,
    ) -> bytes:
        """
        Execute a read-only contract call.

        Raises:
            OffchainLookup: the contract requested an off-chain lookup
            ContractExecutionError: the call reverted for any other reason
        """
        ...
