"""Mapping from resolution mode to call execution policy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from enslookup.core.types import ResolutionMode


@dataclass(frozen=True)
class NoOffchain:
    """Off-chain redirects are not followed.

    With ``fail_on_execution_error`` set, any revert (an off-chain lookup
    request included) fails the call; otherwise a revert yields empty
    return data.
    """

    fail_on_execution_error: bool = True


@dataclass(frozen=True)
class OffchainAllowed:
    """Up to ``max_redirects`` sequential off-chain lookups are followed."""

    max_redirects: int


CallExecutionPolicy: TypeAlias = NoOffchain | OffchainAllowed


def derive_policy(mode: ResolutionMode, max_redirects: int) -> CallExecutionPolicy:
    """Derive the execution policy for a resolution mode."""
    if mode == ResolutionMode.ALLOW_OFFCHAIN_LOOKUP:
        return OffchainAllowed(max_redirects=max_redirects)
    if mode == ResolutionMode.ONCHAIN:
        return NoOffchain(fail_on_execution_error=True)
    raise ValueError(f"Unsupported resolution mode: {mode}")
