"""Type definitions for hdkey."""

# Common types
from ..types.common import (
    ChainCode,
    PrivateKeyBytes,
    PublicKeyBytes,
    Identifier,
    Fingerprint,
    Signature,
    ExtendedKeyStr,
    Versions,
    ExtendedKeyJSON,
    DEFAULT_VERSIONS,
)

__all__ = [
    "ChainCode",
    "PrivateKeyBytes",
    "PublicKeyBytes",
    "Identifier",
    "Fingerprint",
    "Signature",
    "ExtendedKeyStr",
    "Versions",
    "ExtendedKeyJSON",
    "DEFAULT_VERSIONS",
]
