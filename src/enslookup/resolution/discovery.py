"""Discovery of the resolver responsible for a name or address."""

from __future__ import annotations

import logging

from enslookup.chain.base import ChainClient
from enslookup.chain.gateway import OffchainGateway
from enslookup.contracts.registry import RegistryResolverCall
from enslookup.core.encoding import is_zero_address
from enslookup.core.exceptions import EnsError, EnsUnknownError
from enslookup.core.policy import derive_policy
from enslookup.core.types import ResolutionMode
from enslookup.resolution.cache import ResolverCache
from enslookup.resolution.resolver import EnsResolver

logger = logging.getLogger(__name__)


class ResolverDiscovery:
    """
    Finds resolver handles via the ENS registry.

    Handles are shared through the cache, keyed by resolver address, so
    distinct queries landing on the same resolver reuse one handle.
    Failed lookups leave the cache untouched.
    """

    def __init__(
        self,
        client: ChainClient,
        cache: ResolverCache,
        *,
        max_redirects: int = 5,
        gateway: OffchainGateway | None = None,
    ) -> None:
        self._client = client
        self._cache = cache
        self._max_redirects = max_redirects
        self._gateway = gateway

    @property
    def cache(self) -> ResolverCache:
        return self._cache

    def _handle_for(
        self,
        resolver_address: str,
        mode: ResolutionMode,
        *,
        must_support_wildcard: bool = False,
    ) -> EnsResolver:
        return self._cache.get_or_create(
            resolver_address,
            lambda: EnsResolver(
                resolver_address,
                self._client,
                derive_policy(mode, self._max_redirects),
                must_support_wildcard=must_support_wildcard,
                gateway=self._gateway,
            ),
        )

    async def for_address(
        self,
        address: str,
        registry: str,
        mode: ResolutionMode,
    ) -> EnsResolver:
        """Resolver holding the reverse record of an address."""
        try:
            resolver_address = await RegistryResolverCall.for_address(registry, address).call(
                self._client
            )
        except Exception as e:
            raise EnsUnknownError(
                f"Registry lookup failed for {address}: {e}",
                details={"address": address, "registry": registry},
            ) from e

        if is_zero_address(resolver_address):
            raise EnsUnknownError(
                f"No reverse resolver set for {address}",
                details={"address": address, "registry": registry},
            )
        return self._handle_for(resolver_address, mode)

    async def for_name(
        self,
        name: str,
        registry: str,
        mode: ResolutionMode,
    ) -> EnsResolver:
        """
        Resolver for a name, walking ENSIP-10 wildcard fallback.

        When the registry has no resolver for the current name, the
        leftmost label is dropped and the parent is tried, as long as at
        least two labels remain. A failed registry call ends the walk
        immediately. The handle is marked as needing wildcard support when
        it was found at a parent of ``name``.
        """
        full_name = name
        current = name

        for _ in range(len(full_name.split("."))):
            logger.debug(f"Looking up resolver for {current} (requested {full_name})")
            try:
                resolver_address = await RegistryResolverCall.for_name(registry, current).call(
                    self._client
                )
            except EnsError:
                raise
            except Exception as e:
                raise EnsUnknownError(
                    f"Registry lookup failed for {current}: {e}",
                    details={"name": current, "registry": registry},
                ) from e

            if not is_zero_address(resolver_address):
                return self._handle_for(
                    resolver_address,
                    mode,
                    must_support_wildcard=current != full_name,
                )

            parent = current.split(".")[1:]
            if len(parent) < 2:
                break
            current = ".".join(parent)

        raise EnsUnknownError(
            f"No resolver found for {full_name}",
            details={"name": full_name, "last_tried": current},
        )
