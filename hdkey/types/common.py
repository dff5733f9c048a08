"""Common type definitions for hdkey."""

from typing import NamedTuple, NewType, Optional, TypedDict

from ..constants import NETWORK_VERSIONS, Network

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

# Key material
ChainCode = NewType("ChainCode", bytes)
"""32-byte chain code."""

PrivateKeyBytes = NewType("PrivateKeyBytes", bytes)
"""32-byte private key."""

PublicKeyBytes = NewType("PublicKeyBytes", bytes)
"""33-byte compressed public key."""

# Identifiers
Identifier = NewType("Identifier", bytes)
"""HASH160 of the compressed public key."""

Fingerprint = NewType("Fingerprint", int)
"""First 4 bytes of the identifier as a big-endian integer."""

Signature = NewType("Signature", bytes)
"""64-byte compact ECDSA signature (r || s)."""

ExtendedKeyStr = NewType("ExtendedKeyStr", str)
"""Base58Check encoded extended key."""


class Versions(NamedTuple):
    """Version bytes for private and public extended key serialization."""

    private: int
    public: int

    @classmethod
    def for_network(cls, network: Network) -> "Versions":
        """Get the registered version pair for a network."""
        return cls(*NETWORK_VERSIONS[Network(network)])


class ExtendedKeyJSON(TypedDict):
    """Interchange mapping of a node."""

    xpriv: Optional[str]
    xpub: str


DEFAULT_VERSIONS = Versions.for_network(Network.MAINNET)
