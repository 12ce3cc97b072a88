"""Core enums and type definitions."""

from enum import IntEnum, StrEnum


class ResolutionMode(StrEnum):
    """How strictly a resolution call treats off-chain redirects."""

    ONCHAIN = "onchain"
    ALLOW_OFFCHAIN_LOOKUP = "allow_offchain_lookup"


class EnsErrorKind(StrEnum):
    """Flat set of error kinds surfaced by the resolution engine."""

    NO_NETWORK = "no_network"
    ENS_UNKNOWN = "ens_unknown"
    INVALID_INPUT = "invalid_input"
    DECODE_ISSUE = "decode_issue"
    TOO_MANY_REDIRECTIONS = "too_many_redirections"


class EthereumNetwork(IntEnum):
    """Networks with a known ENS registry deployment, keyed by chain id."""

    MAINNET = 1
    ROPSTEN = 3
    RINKEBY = 4
    GOERLI = 5
    HOLESKY = 17000
    SEPOLIA = 11155111


class BlockTag(StrEnum):
    """Block identifiers accepted by contract calls."""

    LATEST = "latest"
    PENDING = "pending"
    EARLIEST = "earliest"
    SAFE = "safe"
    FINALIZED = "finalized"
