"""Extended key serialization for hdkey.

Binary layout (78 bytes, big-endian)::

    version(4) || depth(1) || parent_fingerprint(4) || index(4) || chain_code(32) || key_data(33)

``key_data`` is ``0x00 || private_key`` for private keys and the compressed
point for public keys. The text form is the Base58Check encoding of the
layout.
"""

import struct
from dataclasses import dataclass

from .constants import (
    CHAIN_CODE_LENGTH,
    COMPRESSED_PUBLIC_KEY_LENGTH,
    EXTENDED_KEY_LENGTH,
    MAX_DEPTH,
    MAX_INDEX,
)
from .exceptions import SerializationError
from .utils.encoding import decode_base58_check, encode_base58_check

__all__ = [
    "ExtendedKeyData",
    "serialize",
    "deserialize",
    "encode_extended_key",
    "decode_extended_key",
]

_HEADER = struct.Struct(">IBII")


@dataclass(frozen=True)
class ExtendedKeyData:
    """Fields of a decoded 78-byte extended key."""

    version: int
    depth: int
    parent_fingerprint: int
    index: int
    chain_code: bytes
    key_data: bytes

    @property
    def is_private(self) -> bool:
        """Private key data is tagged with a leading zero byte."""
        return self.key_data[0] == 0


def serialize(
    version: int,
    key: bytes,
    depth: int,
    index: int,
    parent_fingerprint: int,
    chain_code: bytes
) -> bytes:
    """
    Pack an extended key into its 78-byte layout.

    The parent fingerprint is written as zero for depth 0 whatever value is
    passed in.

    Args:
        version: 4-byte version tag
        key: 33-byte key data (0x00 || private key, or compressed public key)
        depth: Derivation depth (0-255)
        index: Child index (0 to 2**32 - 1)
        parent_fingerprint: Parent fingerprint as an integer
        chain_code: 32-byte chain code

    Returns:
        78-byte serialized extended key

    Raises:
        SerializationError: If any field does not fit the layout
    """
    if len(key) != COMPRESSED_PUBLIC_KEY_LENGTH:
        raise SerializationError(f"Key data must be 33 bytes, got {len(key)}")
    if len(chain_code) != CHAIN_CODE_LENGTH:
        raise SerializationError(f"Chain code must be 32 bytes, got {len(chain_code)}")
    if not 0 <= depth <= MAX_DEPTH:
        raise SerializationError(f"Depth out of range: {depth}")
    if not 0 <= index <= MAX_INDEX:
        raise SerializationError(f"Index out of range: {index}")

    fingerprint = parent_fingerprint if depth else 0

    return _HEADER.pack(version, depth, fingerprint, index) + bytes(chain_code) + bytes(key)


def deserialize(payload: bytes) -> ExtendedKeyData:
    """
    Unpack a 78-byte extended key.

    Raises:
        SerializationError: If payload has the wrong length
    """
    if len(payload) != EXTENDED_KEY_LENGTH:
        raise SerializationError(
            f"Extended key must be {EXTENDED_KEY_LENGTH} bytes, got {len(payload)}"
        )

    version, depth, parent_fingerprint, index = _HEADER.unpack_from(payload, 0)
    offset = _HEADER.size
    chain_code = payload[offset:offset + CHAIN_CODE_LENGTH]
    key_data = payload[offset + CHAIN_CODE_LENGTH:]

    return ExtendedKeyData(
        version=version,
        depth=depth,
        parent_fingerprint=parent_fingerprint,
        index=index,
        chain_code=bytes(chain_code),
        key_data=bytes(key_data),
    )


def encode_extended_key(payload: bytes) -> str:
    """Base58Check encode a 78-byte extended key."""
    if len(payload) != EXTENDED_KEY_LENGTH:
        raise SerializationError(
            f"Extended key must be {EXTENDED_KEY_LENGTH} bytes, got {len(payload)}"
        )
    return encode_base58_check(payload)


def decode_extended_key(text: str) -> bytes:
    """
    Decode Base58Check text to the 78-byte extended key.

    Raises:
        ChecksumError: If the checksum does not verify
        SerializationError: If the payload is not 78 bytes
    """
    payload = decode_base58_check(text)
    if len(payload) != EXTENDED_KEY_LENGTH:
        raise SerializationError(
            f"Extended key must be {EXTENDED_KEY_LENGTH} bytes, got {len(payload)}"
        )
    return payload
