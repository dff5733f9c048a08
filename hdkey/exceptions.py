"""hdkey exceptions hierarchy."""

from typing import Any, Optional

__all__ = [
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


class HDKeyError(Exception):
    """Base exception for all hdkey errors."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        data: Optional[Any] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ValidationError(HDKeyError):
    """Raised when an input fails validation."""
    pass


class InvalidKeyLength(ValidationError):
    """Raised when a private key is not 32 bytes or a public key not 33/65 bytes."""
    pass


class InvalidKeyValue(ValidationError):
    """Raised when key bytes are not a valid scalar or curve point."""
    pass


class InvalidPath(ValidationError):
    """Raised when a derivation path does not start with m or M."""
    pass


class InvalidIndex(ValidationError):
    """Raised when a child index is out of range or unparsable."""
    pass


class InvalidHashLength(ValidationError):
    """Raised when a message hash is not 32 bytes."""
    pass


class InvalidSignatureLength(ValidationError):
    """Raised when a signature is not 64 bytes."""
    pass


class InvalidSeed(ValidationError):
    """Raised when a seed is outside the 16 to 64 byte range."""
    pass


class SerializationError(HDKeyError):
    """Raised when extended key serialization/deserialization fails."""
    pass


class VersionMismatch(SerializationError):
    """Raised when extended key version bytes do not match the expected versions."""

    def __init__(
        self,
        message: str,
        version: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.version = version


class ChecksumError(SerializationError):
    """Raised when a Base58Check checksum does not verify."""
    pass


class CryptoError(HDKeyError):
    """Raised when a cryptographic operation fails."""
    pass


class MissingPrivateKey(CryptoError):
    """Raised when an operation needs a private key the node does not hold."""
    pass


class MissingPublicKey(CryptoError):
    """Raised when an operation needs a key and the node has none."""
    pass


class MissingChainCode(CryptoError):
    """Raised when deriving or serializing a node without a chain code."""
    pass


class InvalidTweak(CryptoError):
    """Raised by a backend when a tweak is out of range or yields an invalid key."""
    pass


class DerivationError(CryptoError):
    """Raised when a key cannot be derived."""

    def __init__(
        self,
        message: str,
        index: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.index = index
