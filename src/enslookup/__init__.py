"""enslookup - Ethereum Name Service resolution engine."""

from enslookup.chain import ChainClient, OffchainGateway, Web3ChainClient
from enslookup.client import EthereumNameService, resolve_address, resolve_name
from enslookup.config import EnsSettings
from enslookup.core.encoding import dns_encode, name_hash
from enslookup.core.exceptions import (
    DecodeIssueError,
    EnsError,
    EnsUnknownError,
    InvalidInputError,
    NoNetworkError,
    TooManyRedirectionsError,
)
from enslookup.core.policy import CallExecutionPolicy, NoOffchain, OffchainAllowed, derive_policy
from enslookup.core.types import EnsErrorKind, EthereumNetwork, ResolutionMode

__version__ = "0.1.0"
__all__ = [
    # Client
    "EthereumNameService",
    "resolve_address",
    "resolve_name",
    "EnsSettings",
    # Chain
    "ChainClient",
    "OffchainGateway",
    "Web3ChainClient",
    # Types
    "EnsErrorKind",
    "EthereumNetwork",
    "ResolutionMode",
    # Policy
    "CallExecutionPolicy",
    "NoOffchain",
    "OffchainAllowed",
    "derive_policy",
    # Utilities
    "dns_encode",
    "name_hash",
    # Exceptions
    "DecodeIssueError",
    "EnsError",
    "EnsUnknownError",
    "InvalidInputError",
    "NoNetworkError",
    "TooManyRedirectionsError",
    # Version
    "__version__",
]
