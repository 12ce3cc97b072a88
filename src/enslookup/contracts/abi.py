"""Function selectors and ABI helpers for ENS registry and resolver calls."""

from __future__ import annotations

from typing import Any, Sequence

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import keccak, to_checksum_address

from enslookup.core.exceptions import DecodeIssueError


def function_selector(signature: str) -> bytes:
    """First four bytes of the keccak hash of a function signature."""
    return keccak(text=signature)[:4]


REGISTRY_RESOLVER = "resolver(bytes32)"
RESOLVER_ADDR = "addr(bytes32)"
RESOLVER_NAME = "name(bytes32)"
RESOLVER_RESOLVE = "resolve(bytes,bytes)"
SUPPORTS_INTERFACE = "supportsInterface(bytes4)"

# ENSIP-10 extended resolver interface id
WILDCARD_INTERFACE_ID = bytes.fromhex("9061b923")


def encode_call(signature: str, types: Sequence[str], args: Sequence[Any]) -> bytes:
    """Encode call data: selector followed by the ABI-encoded arguments."""
    return function_selector(signature) + encode(list(types), list(args))


def decode_result(types: Sequence[str], data: bytes) -> tuple[Any, ...]:
    """Decode return data, surfacing failures as DecodeIssueError."""
    if not data:
        raise DecodeIssueError("Empty return data", details={"types": list(types)})
    try:
        return decode(list(types), data)
    except DecodingError as e:
        raise DecodeIssueError(
            f"Failed to decode {', '.join(types)}: {e}",
            details={"types": list(types)},
        ) from e


def decode_address(data: bytes) -> str:
    (value,) = decode_result(["address"], data)
    return to_checksum_address(value)


def decode_string(data: bytes) -> str:
    (value,) = decode_result(["string"], data)
    return value


def decode_bytes(data: bytes) -> bytes:
    (value,) = decode_result(["bytes"], data)
    return value


def decode_bool(data: bytes) -> bool:
    (value,) = decode_result(["bool"], data)
    return bool(value)
