"""Shared test fixtures for all tests."""

from __future__ import annotations

import pytest
from eth_utils import to_checksum_address

from enslookup.config import EnsSettings

# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def vitalik_address() -> str:
    """Checksummed address used as a forward-resolution answer."""
    return to_checksum_address("0xd8da6bf26964af9d7eed9e03e53415d37aa96045")


@pytest.fixture
def resolver_address() -> str:
    """Address of the primary fake resolver contract."""
    return to_checksum_address("0x231b0ee14048e9dccd1d247744d114a4eb5e8e63")


@pytest.fixture
def other_resolver_address() -> str:
    """Address of a second fake resolver contract."""
    return to_checksum_address("0x4976fb03c32e5b8cfe2b6ccb31c09ba78ebaba41")


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def settings() -> EnsSettings:
    """Settings isolated from the environment and any .env file."""
    return EnsSettings(
        _env_file=None,
        rpc_url="http://localhost:8545",
        chain_id=1,
        maximum_redirections=3,
        gateway_timeout=2.0,
    )
