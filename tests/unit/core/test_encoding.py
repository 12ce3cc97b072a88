"""Tests for name hashing, DNS encoding and input normalization."""

from __future__ import annotations

import pytest

from enslookup.core.encoding import (
    ZERO_ADDRESS,
    dns_encode,
    is_zero_address,
    name_hash,
    normalize_address,
    normalize_name,
    reverse_name,
)
from enslookup.core.exceptions import InvalidInputError

# ============================================================================
# Name Hash Tests
# ============================================================================


class TestNameHash:
    """Tests for ENS namehash."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("", "0x" + "00" * 32),
            ("eth", "0x93cdeb708b7545dc668eb9280176169d1c33cfd8ed6f04690a0bcc88a93fc4ae"),
            ("foo.eth", "0xde9b09fd7c5f901e23a3f19fecc54828e9c848539801e86591bd9801b019f84f"),
        ],
    )
    def test_known_hashes(self, name: str, expected: str):
        """Namehash should match the EIP-137 reference values."""
        assert name_hash(name) == expected

    def test_subdomain_differs_from_parent(self):
        assert name_hash("sub.foo.eth") != name_hash("foo.eth")

    def test_equivalent_spellings_share_node(self):
        """Labels are normalized before hashing."""
        assert name_hash("Foo.ETH") == name_hash("foo.eth")


# ============================================================================
# DNS Encoding Tests
# ============================================================================


class TestDnsEncode:
    """Tests for DNS wire-format encoding."""

    def test_two_labels(self):
        assert dns_encode("vitalik.eth") == b"\x07vitalik\x03eth\x00"

    def test_nested_labels(self):
        assert dns_encode("a.bc.eth") == b"\x01a\x02bc\x03eth\x00"

    def test_empty_name(self):
        """The root name encodes to a single terminator."""
        assert dns_encode("") == b"\x00"

    def test_label_too_long(self):
        with pytest.raises(InvalidInputError):
            dns_encode("x" * 256 + ".eth")


# ============================================================================
# Normalization Tests
# ============================================================================


class TestNormalizeName:
    """Tests for ENS name normalization."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("vitalik.eth", "vitalik.eth"),
            ("  Vitalik.ETH ", "vitalik.eth"),
            ("eth", "eth"),
            ("\uff56\uff49\uff54\uff41\uff4c\uff49\uff4b.eth", "vitalik.eth"),
        ],
    )
    def test_valid(self, name: str, expected: str):
        assert normalize_name(name) == expected

    @pytest.mark.parametrize("name", ["", "   ", "a..eth", ".eth", "eth.", "a_b.eth"])
    def test_invalid(self, name: str):
        with pytest.raises(InvalidInputError):
            normalize_name(name)

    def test_fullwidth_name_hashes_like_ascii(self):
        normalized = normalize_name("\uff56\uff49\uff54\uff41\uff4c\uff49\uff4b.eth")
        assert name_hash(normalized) == name_hash("vitalik.eth")


class TestNormalizeAddress:
    """Tests for address validation."""

    def test_lowercase_is_checksummed(self, vitalik_address: str):
        assert normalize_address(vitalik_address.lower()) == vitalik_address

    @pytest.mark.parametrize("address", ["", "0x123", "not-an-address", "0x" + "zz" * 20])
    def test_invalid(self, address: str):
        with pytest.raises(InvalidInputError):
            normalize_address(address)


class TestReverseName:
    """Tests for reverse-registrar names."""

    def test_reverse_name(self, vitalik_address: str):
        assert reverse_name(vitalik_address) == (
            "d8da6bf26964af9d7eed9e03e53415d37aa96045.addr.reverse"
        )

    def test_zero_address(self):
        assert is_zero_address(ZERO_ADDRESS)
        assert not is_zero_address("0x0000000000000000000000000000000000000001")
