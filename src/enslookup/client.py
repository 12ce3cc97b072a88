"""Resolution facade: forward and reverse ENS resolution."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeAlias

from enslookup.chain.base import ChainClient
from enslookup.chain.gateway import OffchainGateway
from enslookup.chain.web3_client import Web3ChainClient
from enslookup.config import EnsSettings, get_settings
from enslookup.contracts.registry import registry_address_for
from enslookup.core import encoding
from enslookup.core.exceptions import EnsError, EnsUnknownError, NoNetworkError
from enslookup.core.types import ResolutionMode
from enslookup.resolution.cache import ResolverCache
from enslookup.resolution.discovery import ResolverDiscovery

logger = logging.getLogger(__name__)

Completion: TypeAlias = Callable[[EnsError | None, str | None], None]


class EthereumNameService:
    """
    Resolves ENS names to addresses and addresses to primary names.

    Each operation comes in two forms. The callback form schedules the
    lookup as a task on the running loop and reports through
    ``completion(error, value)``; the awaitable form is a thin adapter
    over it.

    Usage:
        async with EthereumNameService.from_settings() as ens:
            address = await ens.resolve_address("vitalik.eth")
            name = await ens.resolve_name(address)

            # Follow CCIP-read redirects
            address = await ens.resolve_address(
                "alice.offchain.eth",
                ResolutionMode.ALLOW_OFFCHAIN_LOOKUP,
            )

    Resolver handles are cached per engine instance and shared by all
    calls made through it.
    """

    def __init__(
        self,
        client: ChainClient,
        registry_address: str | None = None,
        maximum_redirections: int = 5,
        *,
        gateway: OffchainGateway | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            client: Chain client used for registry and resolver calls.
            registry_address: ENS registry override. Defaults to the
                deployment for the client's current network.
            maximum_redirections: Off-chain lookup hops allowed per call in
                ``ALLOW_OFFCHAIN_LOOKUP`` mode.
            gateway: Gateway client for off-chain lookups. One is created
                (and closed with the engine) if not provided.
        """
        self.client = client
        self.registry_address = registry_address
        self.maximum_redirections = maximum_redirections
        self._owns_client = False
        self._owns_gateway = gateway is None
        self._gateway = gateway or OffchainGateway()
        self._resolvers = ResolverCache()
        self._discovery = ResolverDiscovery(
            client,
            self._resolvers,
            max_redirects=maximum_redirections,
            gateway=self._gateway,
        )
        self._tasks: set[asyncio.Task[None]] = set()

    @classmethod
    def from_settings(cls, settings: EnsSettings | None = None) -> EthereumNameService:
        """Build an engine with a web3 chain client from settings."""
        settings = settings or get_settings()
        logging.getLogger("enslookup").setLevel(settings.log_level.upper())

        if not settings.rpc_url:
            raise ValueError("No RPC URL configured. Set ENSLOOKUP_RPC_URL.")

        client = Web3ChainClient.from_url(
            settings.rpc_url,
            timeout=settings.request_timeout,
            network=settings.chain_id,
        )
        service = cls(
            client,
            registry_address=settings.registry_address,
            maximum_redirections=settings.maximum_redirections,
            gateway=OffchainGateway(timeout=settings.gateway_timeout),
        )
        service._owns_client = True
        service._owns_gateway = True
        logger.info(
            f"ENS engine initialized (chain id {settings.chain_id}, "
            f"max redirections {settings.maximum_redirections})"
        )
        return service

    async def __aenter__(self) -> EthereumNameService:
        """Select the node's network on entry when none is configured."""
        if self.client.network is None and isinstance(self.client, Web3ChainClient):
            try:
                await self.client.refresh_network()
            except Exception as e:
                logger.warning(f"Failed to read chain id from node: {e}")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the gateway and, if created here, the chain client."""
        if self._owns_gateway:
            await self._gateway.close()
        if self._owns_client and isinstance(self.client, Web3ChainClient):
            await self.client.close()

    @property
    def resolvers(self) -> ResolverCache:
        """Resolver handles discovered so far."""
        return self._resolvers

    def _registry(self) -> str | None:
        return self.registry_address or registry_address_for(self.client.network)

    # Callback API

    def resolve_name_with_callback(
        self,
        address: str,
        mode: ResolutionMode,
        completion: Completion,
    ) -> asyncio.Task[None] | None:
        """
        Look up the primary name of an address.

        Returns the scheduled task, or None when the lookup could not be
        scheduled. ``completion`` has then already received NoNetworkError
        (no registry available) or EnsUnknownError (no running event loop).
        """
        return self._schedule(
            lambda registry: self._lookup_name(address, registry, mode), completion
        )

    def resolve_address_with_callback(
        self,
        name: str,
        mode: ResolutionMode,
        completion: Completion,
    ) -> asyncio.Task[None] | None:
        """
        Look up the address record of a name.

        Returns the scheduled task, or None when the lookup could not be
        scheduled. ``completion`` has then already received NoNetworkError
        (no registry available) or EnsUnknownError (no running event loop).
        """
        return self._schedule(
            lambda registry: self._lookup_address(name, registry, mode), completion
        )

    def _schedule(
        self,
        lookup: Callable[[str], Awaitable[str]],
        completion: Completion,
    ) -> asyncio.Task[None] | None:
        registry = self._registry()
        if registry is None:
            completion(NoNetworkError(), None)
            return None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            completion(
                EnsUnknownError("Callback resolution requires a running event loop"),
                None,
            )
            return None
        return self._spawn(loop, lookup(registry), completion)

    def _spawn(
        self,
        loop: asyncio.AbstractEventLoop,
        operation: Awaitable[str],
        completion: Completion,
    ) -> asyncio.Task[None]:
        task = loop.create_task(self._complete(operation, completion))
        # Hold a reference until done so the task is not collected mid-flight
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @staticmethod
    async def _complete(operation: Awaitable[str], completion: Completion) -> None:
        try:
            value = await operation
        except EnsError as e:
            completion(e, None)
        except Exception as e:
            logger.warning(f"Unexpected resolution failure: {e!r}")
            unknown = EnsUnknownError(details={"cause": repr(e)})
            unknown.__cause__ = e
            completion(unknown, None)
        else:
            completion(None, value)

    async def _lookup_name(self, address: str, registry: str, mode: ResolutionMode) -> str:
        address = encoding.normalize_address(address)
        resolver = await self._discovery.for_address(address, registry, mode)
        return await resolver.resolve_name(address)

    async def _lookup_address(self, name: str, registry: str, mode: ResolutionMode) -> str:
        name = encoding.normalize_name(name)
        resolver = await self._discovery.for_name(name, registry, mode)
        return await resolver.resolve_address(name)

    # Awaitable API

    async def resolve_name(
        self,
        address: str,
        mode: ResolutionMode = ResolutionMode.ONCHAIN,
    ) -> str:
        """Primary ENS name of an address."""
        return await self._await_completion(
            lambda completion: self.resolve_name_with_callback(address, mode, completion)
        )

    async def resolve_address(
        self,
        name: str,
        mode: ResolutionMode = ResolutionMode.ONCHAIN,
    ) -> str:
        """Checksummed address an ENS name resolves to."""
        return await self._await_completion(
            lambda completion: self.resolve_address_with_callback(name, mode, completion)
        )

    @staticmethod
    async def _await_completion(start: Callable[[Completion], object]) -> str:
        future: asyncio.Future[str] = asyncio.get_running_loop().create_future()

        def completion(error: EnsError | None, value: str | None) -> None:
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            elif value is not None:
                future.set_result(value)
            else:
                future.set_exception(EnsUnknownError("Resolution completed without a result"))

        start(completion)
        return await future

    # Utilities

    @staticmethod
    def name_hash(name: str) -> str:
        return encoding.name_hash(name)

    @staticmethod
    def dns_encode(name: str) -> bytes:
        return encoding.dns_encode(name)


# Convenience functions for one-off resolutions
async def resolve_address(
    name: str,
    mode: ResolutionMode = ResolutionMode.ONCHAIN,
    *,
    settings: EnsSettings | None = None,
) -> str:
    """
    Resolve a name to an address (convenience function).

    For multiple resolutions, use EthereumNameService to share its resolver cache.
    """
    async with EthereumNameService.from_settings(settings) as ens:
        return await ens.resolve_address(name, mode)


async def resolve_name(
    address: str,
    mode: ResolutionMode = ResolutionMode.ONCHAIN,
    *,
    settings: EnsSettings | None = None,
) -> str:
    """
    Resolve an address to its primary name (convenience function).

    For multiple resolutions, use EthereumNameService to share its resolver cache.
    """
    async with EthereumNameService.from_settings(settings) as ens:
        return await ens.resolve_name(address, mode)
