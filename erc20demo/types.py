"""Type definitions and coercion helpers for addresses and transaction hashes.

Values coming back from web3.py are a mix of hex strings, ``bytes`` and
``HexBytes``; these helpers normalize them at the module boundaries.
"""

from typing import NewType, Union

from eth_utils import to_bytes, to_checksum_address

Address = NewType("Address", bytes)
Hash32 = NewType("Hash32", bytes)

BytesLike = Union[bytes, str]


def _raw(value: BytesLike) -> bytes:
    if isinstance(value, str):
        if value == "" or value == "0x":
            return b""
        return to_bytes(hexstr=value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"expected str, bytes or bytearray, got {type(value).__name__}")


def as_bytes(value: BytesLike) -> bytes:
    """Convert hex string, bytes, bytearray, or memoryview to bytes."""
    return _raw(value)


def as_address(value: BytesLike) -> Address:
    """Convert hex string or bytes to a validated 20-byte address."""
    b = _raw(value)
    if len(b) != 20:
        raise ValueError(f"address must be 20 bytes, got {len(b)}")
    return Address(b)


def as_checksum_address(value: BytesLike) -> str:
    """Convert hex string or bytes to an EIP-55 checksummed address string."""
    return to_checksum_address(as_address(value))


def as_hash32(value: BytesLike) -> Hash32:
    """Convert hex string or bytes to a validated 32-byte hash."""
    b = _raw(value)
    if len(b) != 32:
        raise ValueError(f"hash32 must be 32 bytes, got {len(b)}")
    return Hash32(b)


def hash_to_hex(value: BytesLike) -> str:
    """Render a 32-byte hash as a 0x-prefixed lowercase hex string."""
    return "0x" + as_hash32(value).hex()
