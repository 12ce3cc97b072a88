"""Name hashing, DNS-wire encoding and input normalization for ENS.

Normalization follows ENSIP-15 through the ``ens`` package bundled with
web3. Its failures surface as InvalidInputError.
"""

from ens.exceptions import ENSException
from ens.utils import dns_encode_name, normal_name_to_hash
from ens.utils import normalize_name as ensip15_normalize
from eth_utils import is_address, to_checksum_address

from enslookup.core.exceptions import InvalidInputError

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
EMPTY_NODE = b"\x00" * 32
REVERSE_SUFFIX = "addr.reverse"


def normalize_name(name: str) -> str:
    """
    Normalize an ENS name for hashing.

    Strips surrounding whitespace and applies ENSIP-15 normalization, so
    "Vitalik.ETH" and fullwidth "ｖｉｔａｌｉｋ.eth" both become
    "vitalik.eth". Rejects empty names, names containing empty labels
    ("a..eth", ".eth", "eth.") and names ENSIP-15 refuses.
    """
    if not isinstance(name, str):
        raise InvalidInputError("ENS name must be a string", details={"name": repr(name)})

    stripped = name.strip()
    if not stripped:
        raise InvalidInputError("ENS name is empty")

    if any(not label for label in stripped.split(".")):
        raise InvalidInputError(
            f"ENS name has an empty label: {name!r}",
            details={"name": name},
        )

    try:
        return ensip15_normalize(stripped)
    except (ENSException, ValueError) as e:
        raise InvalidInputError(
            f"ENS name cannot be normalized: {name!r} ({e})",
            details={"name": name},
        ) from e


def normalize_address(address: str) -> str:
    """Validate a hex address and return it checksummed."""
    if not isinstance(address, str) or not is_address(address):
        raise InvalidInputError(
            f"Invalid address: {address!r}",
            details={"address": repr(address)},
        )
    return to_checksum_address(address)


def is_zero_address(address: str) -> bool:
    return int(address, 16) == 0


def name_hash_bytes(name: str) -> bytes:
    """
    Compute the ENS namehash of a name as 32 raw bytes.

    The empty name hashes to 32 zero bytes. Each label is normalized
    before hashing, so equivalent spellings share a node.
    """
    if not name:
        return EMPTY_NODE
    try:
        return bytes(normal_name_to_hash(name))
    except (ENSException, ValueError) as e:
        raise InvalidInputError(
            f"Cannot hash ENS name {name!r}: {e}",
            details={"name": name},
        ) from e


def name_hash(name: str) -> str:
    """Compute the ENS namehash of a name as a 0x-prefixed hex string."""
    return "0x" + name_hash_bytes(name).hex()


def dns_encode(name: str) -> bytes:
    """
    Encode a name in DNS wire format.

    Each label is prefixed by its byte length and the sequence is
    terminated by a zero byte, e.g. "vitalik.eth" ->
    b"\\x07vitalik\\x03eth\\x00". Labels are limited to 255 bytes.
    """
    try:
        return bytes(dns_encode_name(name))
    except (ENSException, ValueError) as e:
        raise InvalidInputError(
            f"Cannot DNS-encode ENS name {name[:64]!r}: {e}",
            details={"name_length": len(name)},
        ) from e


def reverse_name(address: str) -> str:
    """Reverse-registrar name for an address: "<hex>.addr.reverse"."""
    return f"{normalize_address(address)[2:].lower()}.{REVERSE_SUFFIX}"
