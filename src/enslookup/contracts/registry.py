"""ENS registry deployments and the registry resolver lookup."""

from __future__ import annotations

from dataclasses import dataclass

from enslookup.chain.base import ChainClient
from enslookup.chain.calls import execute_call
from enslookup.contracts.abi import REGISTRY_RESOLVER, decode_address, encode_call
from enslookup.core.encoding import name_hash_bytes, reverse_name
from enslookup.core.policy import NoOffchain
from enslookup.core.types import BlockTag, EthereumNetwork

ENS_REGISTRY_ADDRESS = "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"

DEFAULT_REGISTRIES: dict[int, str] = {
    EthereumNetwork.MAINNET: ENS_REGISTRY_ADDRESS,
    EthereumNetwork.ROPSTEN: ENS_REGISTRY_ADDRESS,
    EthereumNetwork.RINKEBY: ENS_REGISTRY_ADDRESS,
    EthereumNetwork.GOERLI: ENS_REGISTRY_ADDRESS,
    EthereumNetwork.HOLESKY: ENS_REGISTRY_ADDRESS,
    EthereumNetwork.SEPOLIA: ENS_REGISTRY_ADDRESS,
}


def registry_address_for(network: int | None) -> str | None:
    """Default registry address for a chain id, if ENS is deployed there."""
    if network is None:
        return None
    return DEFAULT_REGISTRIES.get(int(network))


@dataclass(frozen=True)
class RegistryResolverCall:
    """A ``resolver(bytes32)`` call against an ENS registry."""

    registry: str
    node: bytes

    @classmethod
    def for_name(cls, registry: str, name: str) -> "RegistryResolverCall":
        return cls(registry=registry, node=name_hash_bytes(name))

    @classmethod
    def for_address(cls, registry: str, address: str) -> "RegistryResolverCall":
        """Lookup of the resolver for an address's reverse record."""
        return cls(registry=registry, node=name_hash_bytes(reverse_name(address)))

    @property
    def calldata(self) -> bytes:
        return encode_call(REGISTRY_RESOLVER, ["bytes32"], [self.node])

    async def call(
        self,
        client: ChainClient,
        *,
        block: BlockTag | str = BlockTag.LATEST,
    ) -> str:
        """Return the checksummed resolver address (zero address if unset)."""
        data = await execute_call(
            client,
            self.registry,
            self.calldata,
            policy=NoOffchain(fail_on_execution_error=True),
            block=block,
        )
        return decode_address(data)
