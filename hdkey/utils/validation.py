"""Validation utilities for hdkey."""

from ..constants import (
    CHAIN_CODE_LENGTH,
    COMPRESSED_PUBLIC_KEY_LENGTH,
    HARDENED_OFFSET,
    MAX_INDEX,
    MAX_SEED_LENGTH,
    MIN_SEED_LENGTH,
    PRIVATE_KEY_LENGTH,
    UNCOMPRESSED_PUBLIC_KEY_LENGTH,
)
from ..exceptions import (
    InvalidHashLength,
    InvalidIndex,
    InvalidKeyLength,
    InvalidKeyValue,
    InvalidSeed,
    InvalidSignatureLength,
    ValidationError,
)

__all__ = [
    "is_hardened",
    "validate_private_key_length",
    "validate_public_key_length",
    "validate_chain_code",
    "validate_index",
    "validate_seed",
    "validate_hash",
    "validate_signature",
]

HASH_LENGTH = 32
SIGNATURE_LENGTH = 64


def is_hardened(index: int) -> bool:
    """Check if a child index selects hardened derivation."""
    return index >= HARDENED_OFFSET


def validate_private_key_length(key: bytes) -> bytes:
    """
    Validate private key length and return it as immutable bytes.

    Raises:
        InvalidKeyLength: If key is not 32 bytes
    """
    if not isinstance(key, (bytes, bytearray)):
        raise InvalidKeyValue(f"Private key must be bytes, got {type(key).__name__}")
    if len(key) != PRIVATE_KEY_LENGTH:
        raise InvalidKeyLength(f"Private key must be 32 bytes, got {len(key)}")
    return bytes(key)


def validate_public_key_length(key: bytes) -> bytes:
    """
    Validate public key length and return it as immutable bytes.

    Raises:
        InvalidKeyLength: If key is not 33 or 65 bytes
    """
    if not isinstance(key, (bytes, bytearray)):
        raise InvalidKeyValue(f"Public key must be bytes, got {type(key).__name__}")
    if len(key) not in (COMPRESSED_PUBLIC_KEY_LENGTH, UNCOMPRESSED_PUBLIC_KEY_LENGTH):
        raise InvalidKeyLength(f"Public key must be 33 or 65 bytes, got {len(key)}")
    return bytes(key)


def validate_chain_code(chain_code: bytes) -> bytes:
    """Validate chain code length."""
    if len(chain_code) != CHAIN_CODE_LENGTH:
        raise ValidationError(f"Chain code must be 32 bytes, got {len(chain_code)}")
    return bytes(chain_code)


def validate_index(index: int) -> int:
    """
    Validate a raw 32-bit child index.

    Raises:
        InvalidIndex: If index is outside 0 <= index < 2**32
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidIndex(f"Child index must be an integer, got {index!r}")
    if not 0 <= index <= MAX_INDEX:
        raise InvalidIndex(f"Child index out of range: {index}")
    return index


def validate_seed(seed: bytes) -> bytes:
    """
    Validate BIP32 seed length.

    Raises:
        InvalidSeed: If seed is not between 16 and 64 bytes
    """
    if not MIN_SEED_LENGTH <= len(seed) <= MAX_SEED_LENGTH:
        raise InvalidSeed(f"Seed must be between 16 and 64 bytes, got {len(seed)}")
    return bytes(seed)


def validate_hash(message_hash: bytes) -> bytes:
    """
    Validate message hash length.

    Raises:
        InvalidHashLength: If hash is not 32 bytes
    """
    if len(message_hash) != HASH_LENGTH:
        raise InvalidHashLength(f"Message length is invalid: expected 32 bytes, got {len(message_hash)}")
    return bytes(message_hash)


def validate_signature(signature: bytes) -> bytes:
    """
    Validate compact signature length.

    Raises:
        InvalidSignatureLength: If signature is not 64 bytes
    """
    if len(signature) != SIGNATURE_LENGTH:
        raise InvalidSignatureLength(f"Signature length is invalid: expected 64 bytes, got {len(signature)}")
    return bytes(signature)
