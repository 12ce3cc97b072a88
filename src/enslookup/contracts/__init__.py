"""ENS contract call builders and ABI helpers."""

from enslookup.contracts.abi import (
    WILDCARD_INTERFACE_ID,
    decode_address,
    decode_bool,
    decode_bytes,
    decode_string,
    encode_call,
    function_selector,
)
from enslookup.contracts.registry import (
    DEFAULT_REGISTRIES,
    ENS_REGISTRY_ADDRESS,
    RegistryResolverCall,
    registry_address_for,
)

__all__ = [
    # ABI
    "WILDCARD_INTERFACE_ID",
    "decode_address",
    "decode_bool",
    "decode_bytes",
    "decode_string",
    "encode_call",
    "function_selector",
    # Registry
    "DEFAULT_REGISTRIES",
    "ENS_REGISTRY_ADDRESS",
    "RegistryResolverCall",
    "registry_address_for",
]
