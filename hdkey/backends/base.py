"""Base curve backend interface for hdkey."""

from abc import ABC, abstractmethod
import logging

from ..utils.encoding import hash160, hmac_sha512

__all__ = ["CurveBackend"]


class CurveBackend(ABC):
    """
    Abstract elliptic curve and hash capability used by HD nodes.

    Every key passed in or returned is raw bytes: 32-byte scalars and
    33-byte compressed (or 65-byte uncompressed, on input) points. The hash
    primitives default to the standard library implementations in
    ``hdkey.utils.encoding`` and may be overridden by a backend.
    """

    name = "abstract"

    def __init__(self) -> None:
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def validate_private_key(self, private_key: bytes) -> bool:
        """
        Check that a 32-byte value is a scalar in [1, n).

        Args:
            private_key: 32-byte candidate scalar

        Returns:
            True if valid, False otherwise
        """
        raise NotImplementedError

    @abstractmethod
    def validate_public_key(self, public_key: bytes) -> bool:
        """
        Check that bytes encode a point on the curve.

        Args:
            public_key: 33 or 65 byte SEC1 encoded point

        Returns:
            True if valid, False otherwise
        """
        raise NotImplementedError

    @abstractmethod
    def public_key_create(self, private_key: bytes) -> bytes:
        """
        Multiply the base point by a scalar.

        Args:
            private_key: 32-byte valid scalar

        Returns:
            33-byte compressed public key
        """
        raise NotImplementedError

    @abstractmethod
    def public_key_convert(self, public_key: bytes) -> bytes:
        """
        Normalize a point to its 33-byte compressed encoding.

        Args:
            public_key: 33 or 65 byte SEC1 encoded point

        Returns:
            33-byte compressed public key
        """
        raise NotImplementedError

    @abstractmethod
    def private_key_tweak_add(self, private_key: bytes, tweak: bytes) -> bytes:
        """
        Compute (private_key + tweak) mod n.

        Raises:
            InvalidTweak: If tweak >= n or the sum is zero
        """
        raise NotImplementedError

    @abstractmethod
    def public_key_tweak_add(self, public_key: bytes, tweak: bytes) -> bytes:
        """
        Compute point(tweak) + public_key.

        Raises:
            InvalidTweak: If tweak >= n or the sum is the point at infinity
        """
        raise NotImplementedError

    @abstractmethod
    def sign(self, message_hash: bytes, private_key: bytes) -> bytes:
        """
        Deterministic (RFC 6979) ECDSA signature.

        Args:
            message_hash: 32-byte hash to sign
            private_key: 32-byte signing key

        Returns:
            64-byte compact signature (r || s), low-S normalized
        """
        raise NotImplementedError

    @abstractmethod
    def verify(self, message_hash: bytes, signature: bytes, public_key: bytes) -> bool:
        """
        Verify a compact ECDSA signature.

        Returns:
            True if signature is valid
        """
        raise NotImplementedError

    def hmac_sha512(self, key: bytes, data: bytes) -> bytes:
        """HMAC-SHA512 used for master and child key expansion."""
        return hmac_sha512(key, data)

    def hash160(self, data: bytes) -> bytes:
        """RIPEMD160(SHA256(data)) used for node identifiers."""
        return hash160(data)

    def __repr__(self) -> str:
        """String representation of backend."""
        return f"{self.__class__.__name__}(name={self.name})"
