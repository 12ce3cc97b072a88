"""Shared cache of resolver handles keyed by resolver contract address."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from eth_utils import to_checksum_address

if TYPE_CHECKING:
    from enslookup.resolution.resolver import EnsResolver

logger = logging.getLogger(__name__)


class ResolverCache:
    """
    Concurrency-safe map from resolver address to ``EnsResolver``.

    Reads are lock-free dict lookups; a handle is only published into the
    map once fully constructed, so readers never see a partial entry.
    Writes are serialized by a lock and ``get_or_create`` re-checks under
    it, so racing creators for one address install a single handle.

    Entries never expire. ``clear`` and ``discard`` are the only removals.
    """

    def __init__(self) -> None:
        self._resolvers: dict[str, EnsResolver] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(address: str) -> str:
        return to_checksum_address(address)

    def get(self, address: str) -> EnsResolver | None:
        return self._resolvers.get(self._key(address))

    def put(self, address: str, resolver: EnsResolver) -> None:
        """Store a handle, replacing any existing one for the address."""
        key = self._key(address)
        with self._lock:
            self._resolvers[key] = resolver

    def get_or_create(
        self,
        address: str,
        factory: Callable[[], EnsResolver],
    ) -> EnsResolver:
        """
        Return the cached handle for an address, building it if absent.

        The factory runs at most once per address; every caller racing on
        the same address receives the same winning handle.
        """
        key = self._key(address)
        resolver = self._resolvers.get(key)
        if resolver is not None:
            logger.debug(f"Resolver cache hit for {key}")
            return resolver

        with self._lock:
            resolver = self._resolvers.get(key)
            if resolver is None:
                logger.debug(f"Resolver cache miss for {key}, creating handle")
                resolver = factory()
                self._resolvers[key] = resolver
            return resolver

    def discard(self, address: str) -> None:
        with self._lock:
            self._resolvers.pop(self._key(address), None)

    def clear(self) -> None:
        with self._lock:
            self._resolvers.clear()

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and self._key(address) in self._resolvers

    def __len__(self) -> int:
        return len(self._resolvers)
