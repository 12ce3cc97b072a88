"""Resolution layer: resolver discovery, caching and record retrieval."""

from enslookup.resolution.cache import ResolverCache
from enslookup.resolution.discovery import ResolverDiscovery
from enslookup.resolution.resolver import EnsResolver

__all__ = [
    "EnsResolver",
    "ResolverCache",
    "ResolverDiscovery",
]
