"""Unit test fixtures: in-memory chain, fake resolver contracts and HTTP mocking."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import pytest
import respx
from eth_abi import decode, encode
from eth_utils import to_checksum_address

from enslookup.chain.base import ContractExecutionError, OffchainLookup
from enslookup.contracts.abi import WILDCARD_INTERFACE_ID, function_selector
from enslookup.contracts.registry import ENS_REGISTRY_ADDRESS
from enslookup.core.encoding import ZERO_ADDRESS, name_hash_bytes, reverse_name
from enslookup.core.types import EthereumNetwork

SUPPORTS_INTERFACE = function_selector("supportsInterface(bytes4)")
ADDR = function_selector("addr(bytes32)")
NAME = function_selector("name(bytes32)")
RESOLVE = function_selector("resolve(bytes,bytes)")
RESOLVE_WITH_PROOF = function_selector("resolveWithProof(bytes,bytes)")

GATEWAY_URL = "https://gateway.test/{sender}/{data}.json"


# ============================================================================
# Fake Contracts
# ============================================================================


class FakeResolverContract:
    """On-chain resolver answering addr/name/supportsInterface, optionally ENSIP-10."""

    def __init__(
        self,
        address: str,
        *,
        addresses: dict[str, str] | None = None,
        names: dict[str, str] | None = None,
        wildcard: bool = False,
    ) -> None:
        self.address = to_checksum_address(address)
        self.addresses = {name_hash_bytes(n): a for n, a in (addresses or {}).items()}
        self.names = {name_hash_bytes(reverse_name(a)): n for a, n in (names or {}).items()}
        self.wildcard = wildcard
        self.selectors: list[bytes] = []

    def __call__(self, data: bytes) -> bytes:
        selector, args = data[:4], data[4:]
        self.selectors.append(selector)

        if selector == SUPPORTS_INTERFACE:
            (interface_id,) = decode(["bytes4"], args)
            return encode(["bool"], [self.wildcard and interface_id == WILDCARD_INTERFACE_ID])
        if selector == ADDR:
            (node,) = decode(["bytes32"], args)
            return encode(["address"], [self.addresses.get(node, ZERO_ADDRESS)])
        if selector == NAME:
            (node,) = decode(["bytes32"], args)
            return encode(["string"], [self.names.get(node, "")])
        if selector == RESOLVE and self.wildcard:
            _, inner = decode(["bytes", "bytes"], args)
            return encode(["bytes"], [self(inner)])
        raise ContractExecutionError("execution reverted")


class FakeOffchainResolver:
    """
    Resolver answering addr() through a chain of EIP-3668 lookups.

    The hop counter travels in extraData; after ``hops`` lookups the
    callback returns the gateway response as the record.
    """

    def __init__(self, address: str, *, hops: int = 1, urls: list[str] | None = None) -> None:
        self.address = to_checksum_address(address)
        self.hops = hops
        self.urls = urls or [GATEWAY_URL]
        self.lookups = 0

    def _lookup(self, call_data: bytes, hop: int) -> OffchainLookup:
        self.lookups += 1
        return OffchainLookup(
            sender=self.address,
            urls=self.urls,
            call_data=call_data,
            callback_function=RESOLVE_WITH_PROOF,
            extra_data=hop.to_bytes(32, "big"),
        )

    def __call__(self, data: bytes) -> bytes:
        selector, args = data[:4], data[4:]
        if selector == SUPPORTS_INTERFACE:
            return encode(["bool"], [False])
        if selector == ADDR:
            raise self._lookup(data, 1)
        if selector == RESOLVE_WITH_PROOF:
            response, extra_data = decode(["bytes", "bytes"], args)
            hop = int.from_bytes(extra_data, "big")
            if hop < self.hops:
                raise self._lookup(response, hop + 1)
            return response
        raise ContractExecutionError("execution reverted")


class FakeChainClient:
    """In-memory chain with an ENS registry and pluggable contracts."""

    def __init__(
        self,
        network: int | None = EthereumNetwork.MAINNET,
        registry: str = ENS_REGISTRY_ADDRESS,
    ) -> None:
        self._network = network
        self.registry = to_checksum_address(registry)
        self.registry_resolvers: dict[bytes, str] = {}
        self.failing_nodes: set[bytes] = set()
        self.contracts: dict[str, Callable[[bytes], bytes]] = {}
        self.calls: list[tuple[str, bytes]] = []
        self.registry_lookups: list[bytes] = []

    @property
    def network(self) -> int | None:
        return self._network

    def set_resolver(self, name: str, resolver: str) -> None:
        self.registry_resolvers[name_hash_bytes(name)] = resolver

    def set_reverse_resolver(self, address: str, resolver: str) -> None:
        self.set_resolver(reverse_name(address), resolver)

    def fail_lookup(self, name: str) -> None:
        self.failing_nodes.add(name_hash_bytes(name))

    def add_contract(self, contract):
        self.contracts[contract.address] = contract
        return contract

    async def eth_call(self, to: str, data: bytes, block: str = "latest") -> bytes:
        to = to_checksum_address(to)
        self.calls.append((to, data))
        # Yield so concurrent callers interleave
        await asyncio.sleep(0)

        if to == self.registry:
            (node,) = decode(["bytes32"], data[4:])
            self.registry_lookups.append(node)
            if node in self.failing_nodes:
                raise ContractExecutionError("registry reverted")
            return encode(["address"], [self.registry_resolvers.get(node, ZERO_ADDRESS)])

        contract = self.contracts.get(to)
        if contract is None:
            raise ContractExecutionError(f"no contract at {to}")
        return contract(data)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def respx_mock():
    """Provide a respx mock router for HTTP mocking.

    Use this when you need fine-grained control over mocked responses.
    The mock is automatically started and stopped by respx.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def chain_client() -> FakeChainClient:
    """Fake chain on mainnet with the default registry deployed."""
    return FakeChainClient()


@pytest.fixture
def make_chain_client():
    """Factory for fake chains on other networks or registries."""
    return FakeChainClient


@pytest.fixture
def make_resolver_contract(chain_client: FakeChainClient):
    """Factory deploying a FakeResolverContract onto the fake chain."""

    def factory(address: str, *, chain=None, **kwargs) -> FakeResolverContract:
        return (chain or chain_client).add_contract(FakeResolverContract(address, **kwargs))

    return factory


@pytest.fixture
def make_offchain_resolver(chain_client: FakeChainClient):
    """Factory deploying a FakeOffchainResolver onto the fake chain."""

    def factory(address: str, **kwargs) -> FakeOffchainResolver:
        return chain_client.add_contract(FakeOffchainResolver(address, **kwargs))

    return factory


@pytest.fixture
def gateway_answer(respx_mock, vitalik_address: str):
    """Gateway route answering every lookup with an ABI-encoded address."""
    return respx_mock.get(url__startswith="https://gateway.test/").respond(
        200,
        json={"data": "0x" + encode(["address"], [vitalik_address]).hex()},
    )
