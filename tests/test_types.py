"""Tests for the address and hash coercion helpers."""

import pytest

from erc20demo import as_address, as_bytes, as_checksum_address, as_hash32, hash_to_hex


class TestTypes:
    """Test type coercion helpers."""

    def test_as_address_from_hex(self):
        addr = as_address("0x8e374AbDFecEf1203BFC142FCA2E93819C98f2fC")
        assert len(addr) == 20
        assert isinstance(addr, bytes)

    def test_as_address_from_bytes(self):
        raw = bytes.fromhex("8e374AbDFecEf1203BFC142FCA2E93819C98f2fC")
        addr = as_address(raw)
        assert len(addr) == 20

    def test_as_address_rejects_empty(self):
        with pytest.raises(ValueError, match="20 bytes"):
            as_address("")

    def test_as_address_invalid_length(self):
        with pytest.raises(ValueError, match="20 bytes"):
            as_address("0x1234")

    def test_as_checksum_address(self):
        addr = as_checksum_address("0x8e374abdfecef1203bfc142fca2e93819c98f2fc")
        assert addr == "0x8e374AbDFecEf1203BFC142FCA2E93819C98f2fC"

    def test_as_hash32_from_hex(self):
        h = as_hash32("0x" + "ab" * 32)
        assert len(h) == 32

    def test_as_hash32_invalid_length(self):
        with pytest.raises(ValueError, match="32 bytes"):
            as_hash32("0x1234")

    def test_hash_to_hex_from_bytes(self):
        assert hash_to_hex(b"\xab" * 32) == "0x" + "ab" * 32

    def test_hash_to_hex_lowercases(self):
        assert hash_to_hex("0x" + "AB" * 32) == "0x" + "ab" * 32

    def test_as_bytes_from_hex(self):
        b = as_bytes("0xabcdef")
        assert b == bytes.fromhex("abcdef")

    def test_as_bytes_empty(self):
        assert as_bytes("0x") == b""
        assert as_bytes("") == b""

    def test_as_bytes_rejects_int(self):
        with pytest.raises(TypeError, match="expected str, bytes"):
            as_bytes(20)

    def test_as_address_rejects_int(self):
        with pytest.raises(TypeError, match="expected str, bytes"):
            as_address(20)

    def test_as_hash32_rejects_int(self):
        with pytest.raises(TypeError, match="expected str, bytes"):
            as_hash32(32)
