"""Hashing and encoding utilities for hdkey."""

import hashlib
import hmac

import base58
from Crypto.Hash import RIPEMD160

from ..exceptions import ChecksumError, SerializationError

__all__ = [
    "int_to_bytes",
    "bytes_to_int",
    "sha256",
    "ripemd160",
    "hash160",
    "hmac_sha512",
    "encode_base58_check",
    "decode_base58_check",
]

# OpenSSL 3 builds may ship hashlib without the legacy ripemd160 digest
try:
    hashlib.new("ripemd160")
    _HASHLIB_HAS_RIPEMD160 = True
except ValueError:
    _HASHLIB_HAS_RIPEMD160 = False


def int_to_bytes(value: int, length: int) -> bytes:
    """Convert an unsigned integer to big-endian bytes of fixed length."""
    return value.to_bytes(length, byteorder="big")


def bytes_to_int(data: bytes) -> int:
    """Convert big-endian bytes to an unsigned integer."""
    return int.from_bytes(data, byteorder="big")


def sha256(data: bytes) -> bytes:
    """Single SHA256 digest."""
    return hashlib.sha256(data).digest()


def ripemd160(data: bytes) -> bytes:
    """RIPEMD-160 digest."""
    if _HASHLIB_HAS_RIPEMD160:
        return hashlib.new("ripemd160", data).digest()
    return RIPEMD160.new(data).digest()


def hash160(data: bytes) -> bytes:
    """Perform RIPEMD160(SHA256(data))."""
    return ripemd160(sha256(data))


def hmac_sha512(key: bytes, data: bytes) -> bytes:
    """HMAC-SHA512 of data under key."""
    return hmac.new(key, data, hashlib.sha512).digest()


def encode_base58_check(data: bytes) -> str:
    """
    Encode bytes as Base58Check (with checksum).

    Args:
        data: Bytes to encode

    Returns:
        Base58Check encoded string
    """
    return base58.b58encode_check(data).decode("ascii")


def decode_base58_check(string: str) -> bytes:
    """
    Decode Base58Check string.

    Args:
        string: Base58Check string

    Returns:
        Decoded data (without checksum)

    Raises:
        ChecksumError: If checksum is invalid
        SerializationError: If the string is not valid Base58
    """
    try:
        return base58.b58decode_check(string)
    except ValueError as e:
        if "checksum" in str(e).lower():
            raise ChecksumError(f"Invalid Base58Check checksum: {string}") from e
        raise SerializationError(f"Invalid Base58 string: {e}") from e
