"""
hdkey

BIP32 hierarchical deterministic key derivation: master keys from seeds,
hardened and normal child derivation, derivation paths and extended key
(xprv/xpub) serialization over secp256k1.
"""

from .backends import CurveBackend, Secp256k1Backend, get_default_backend
from .constants import DEFAULT_MASTER_SECRET, HARDENED_OFFSET, Network
from .exceptions import (
    HDKeyError,
    ValidationError,
    InvalidKeyLength,
    InvalidKeyValue,
    InvalidPath,
    InvalidIndex,
    InvalidHashLength,
    InvalidSignatureLength,
    InvalidSeed,
    SerializationError,
    VersionMismatch,
    ChecksumError,
    CryptoError,
    MissingPrivateKey,
    MissingPublicKey,
    MissingChainCode,
    InvalidTweak,
    DerivationError,
)
from .node import HDNode
from .path import format_path, parse_path
from .serialization import deserialize, serialize
from .types import DEFAULT_VERSIONS, ExtendedKeyJSON, Versions
from .utils.encoding import hash160

__version__ = "1.0.0"

__all__ = [
    # Node
    "HDNode",
    "HARDENED_OFFSET",

    # Configuration
    "Network",
    "Versions",
    "DEFAULT_VERSIONS",
    "DEFAULT_MASTER_SECRET",
    "ExtendedKeyJSON",

    # Backends
    "CurveBackend",
    "Secp256k1Backend",
    "get_default_backend",

    # Helpers
    "parse_path",
    "format_path",
    "serialize",
    "deserialize",
    "hash160",

    # Exceptions
    "HDKeyError",
    "ValidationError",
    "InvalidKeyLength",
    "InvalidKeyValue",
    "InvalidPath",
    "InvalidIndex",
    "InvalidHashLength",
    "InvalidSignatureLength",
    "InvalidSeed",
    "SerializationError",
    "VersionMismatch",
    "ChecksumError",
    "CryptoError",
    "MissingPrivateKey",
    "MissingPublicKey",
    "MissingChainCode",
    "InvalidTweak",
    "DerivationError",
]
