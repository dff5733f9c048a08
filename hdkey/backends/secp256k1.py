"""secp256k1 backend built on coincurve (libsecp256k1 bindings)."""

from coincurve import PrivateKey as SecpPrivateKey, PublicKey as SecpPublicKey
from coincurve.ecdsa import (
    cdata_to_der,
    der_to_cdata,
    deserialize_compact,
    serialize_compact,
)

from ..backends.base import CurveBackend
from ..exceptions import CryptoError, InvalidKeyValue, InvalidTweak

__all__ = ["Secp256k1Backend"]


class Secp256k1Backend(CurveBackend):
    """Curve backend delegating to libsecp256k1 through coincurve."""

    name = "coincurve"

    def validate_private_key(self, private_key: bytes) -> bool:
        try:
            SecpPrivateKey(private_key)
            return True
        except ValueError:
            return False

    def validate_public_key(self, public_key: bytes) -> bool:
        try:
            SecpPublicKey(public_key)
            return True
        except ValueError:
            return False

    def public_key_create(self, private_key: bytes) -> bytes:
        try:
            return SecpPrivateKey(private_key).public_key.format(compressed=True)
        except ValueError as e:
            raise InvalidKeyValue(f"Invalid private key: {e}") from e

    def public_key_convert(self, public_key: bytes) -> bytes:
        try:
            return SecpPublicKey(public_key).format(compressed=True)
        except ValueError as e:
            raise InvalidKeyValue(f"Invalid public key: {e}") from e

    def private_key_tweak_add(self, private_key: bytes, tweak: bytes) -> bytes:
        try:
            return SecpPrivateKey(private_key).add(tweak).secret
        except ValueError as e:
            self._logger.debug(f"Private key tweak rejected: {e}")
            raise InvalidTweak(f"Private key tweak failed: {e}") from e

    def public_key_tweak_add(self, public_key: bytes, tweak: bytes) -> bytes:
        try:
            return SecpPublicKey(public_key).add(tweak).format(compressed=True)
        except ValueError as e:
            self._logger.debug(f"Public key tweak rejected: {e}")
            raise InvalidTweak(f"Public key tweak failed: {e}") from e

    def sign(self, message_hash: bytes, private_key: bytes) -> bytes:
        try:
            der = SecpPrivateKey(private_key).sign(message_hash, hasher=None)
            return serialize_compact(der_to_cdata(der))
        except ValueError as e:
            raise CryptoError(f"Signing failed: {e}") from e

    def verify(self, message_hash: bytes, signature: bytes, public_key: bytes) -> bool:
        try:
            der = cdata_to_der(deserialize_compact(signature))
            return SecpPublicKey(public_key).verify(der, message_hash, hasher=None)
        except ValueError:
            # r or s overflows the group order
            return False
