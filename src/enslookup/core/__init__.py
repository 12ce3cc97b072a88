"""Core types, errors, policies and encoding utilities."""

from .encoding import (
    ZERO_ADDRESS,
    dns_encode,
    is_zero_address,
    name_hash,
    name_hash_bytes,
    normalize_address,
    normalize_name,
    reverse_name,
)
from .exceptions import (
    DecodeIssueError,
    EnsError,
    EnsUnknownError,
    InvalidInputError,
    NoNetworkError,
    TooManyRedirectionsError,
)
from .policy import CallExecutionPolicy, NoOffchain, OffchainAllowed, derive_policy
from .types import BlockTag, EnsErrorKind, EthereumNetwork, ResolutionMode

__all__ = [
    # Types
    "BlockTag",
    "EnsErrorKind",
    "EthereumNetwork",
    "ResolutionMode",
    # Policy
    "CallExecutionPolicy",
    "NoOffchain",
    "OffchainAllowed",
    "derive_policy",
    # Encoding
    "ZERO_ADDRESS",
    "dns_encode",
    "is_zero_address",
    "name_hash",
    "name_hash_bytes",
    "normalize_address",
    "normalize_name",
    "reverse_name",
    # Exceptions
    "DecodeIssueError",
    "EnsError",
    "EnsUnknownError",
    "InvalidInputError",
    "NoNetworkError",
    "TooManyRedirectionsError",
]
