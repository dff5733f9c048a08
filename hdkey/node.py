"""Hierarchical Deterministic key nodes (BIP32)."""

import logging
import secrets
from typing import Mapping, Optional, Tuple, Union

from .backends import CurveBackend, get_default_backend
from .constants import (
    DEFAULT_MASTER_SECRET,
    HARDENED_OFFSET,
    MAX_DEPTH,
    MAX_INDEX,
    Network,
)
from .exceptions import (
    DerivationError,
    InvalidKeyValue,
    InvalidTweak,
    MissingChainCode,
    MissingPrivateKey,
    MissingPublicKey,
    ValidationError,
    VersionMismatch,
)
from .path import parse_path
from .serialization import (
    decode_extended_key,
    deserialize,
    encode_extended_key,
    serialize,
)
from .types.common import (
    DEFAULT_VERSIONS,
    ChainCode,
    ExtendedKeyJSON,
    ExtendedKeyStr,
    Fingerprint,
    Identifier,
    PrivateKeyBytes,
    PublicKeyBytes,
    Signature,
    Versions,
)
from .utils.encoding import bytes_to_int, int_to_bytes
from .utils.validation import (
    is_hardened,
    validate_chain_code,
    validate_hash,
    validate_index,
    validate_private_key_length,
    validate_public_key_length,
    validate_seed,
    validate_signature,
)

__all__ = ["HDNode"]

logger = logging.getLogger(__name__)

VersionsLike = Union[Versions, Tuple[int, int], Mapping[str, int], Network]


def _resolve_versions(versions: VersionsLike) -> Versions:
    if isinstance(versions, Network):
        return Versions.for_network(versions)
    if isinstance(versions, Mapping):
        try:
            versions = (versions["private"], versions["public"])
        except KeyError as e:
            raise ValidationError(f"Versions mapping is missing {e}") from e

    try:
        private, public = versions
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Versions must be a (private, public) pair, got {versions!r}") from e

    for version in (private, public):
        if isinstance(version, bool) or not isinstance(version, int) or not 0 <= version <= MAX_INDEX:
            raise ValidationError(f"Version must be a 32-bit integer, got {version!r}")
    return Versions(private, public)


class HDNode:
    """
    HD key node (BIP32).

    A node is either full (private and public key) or public-only. Assigning
    ``public_key`` always drops the private key, and ``wipe_private_data``
    destroys it for good.

    Derivation never mutates the node it is called on: ``derive_child`` and
    ``derive`` return new nodes, so independent derivations from a shared
    node can run in separate threads. Key assignment and wiping do mutate
    the node and must not race with other use of the same instance.
    """

    HARDENED_OFFSET = HARDENED_OFFSET

    def __init__(
        self,
        chain_code: Optional[bytes] = None,
        *,
        private_key: Optional[bytes] = None,
        public_key: Optional[bytes] = None,
        depth: int = 0,
        index: int = 0,
        parent_fingerprint: int = 0,
        versions: VersionsLike = DEFAULT_VERSIONS,
        backend: Optional[CurveBackend] = None
    ) -> None:
        """
        Initialize node.

        Args:
            chain_code: 32-byte chain code (required to derive or serialize)
            private_key: 32-byte private key
            public_key: 33 or 65 byte public key, used when no private key is given
            depth: Derivation depth (0 for master)
            index: Child index within the parent
            parent_fingerprint: Fingerprint of the parent node
            versions: Version bytes pair or a Network preset
            backend: Curve backend, coincurve by default

        Raises:
            ValidationError: If metadata is out of range
            InvalidKeyLength: If a key has the wrong size
            InvalidKeyValue: If a key is not valid for the curve or the
                two keys do not match
        """
        if not 0 <= depth <= MAX_DEPTH:
            raise ValidationError(f"Depth out of range: {depth}")
        if not 0 <= parent_fingerprint <= MAX_INDEX:
            raise ValidationError(f"Parent fingerprint out of range: {parent_fingerprint}")

        self._versions = _resolve_versions(versions)
        self._backend = backend or get_default_backend()
        self._depth = depth
        self._index = validate_index(index)
        self._parent_fingerprint = parent_fingerprint
        self._chain_code: Optional[ChainCode] = None
        self._private_key: Optional[bytearray] = None
        self._public_key: Optional[PublicKeyBytes] = None
        self._identifier: Optional[Identifier] = None
        self._fingerprint = Fingerprint(0)

        if chain_code is not None:
            self.chain_code = chain_code

        if private_key is not None:
            self.private_key = private_key
            if public_key is not None and self._backend.public_key_convert(public_key) != self._public_key:
                raise InvalidKeyValue("Public key does not match private key")
        elif public_key is not None:
            self.public_key = public_key

    @classmethod
    def from_master_seed(
        cls,
        seed: bytes,
        master_secret: Union[bytes, str] = DEFAULT_MASTER_SECRET,
        versions: VersionsLike = DEFAULT_VERSIONS,
        backend: Optional[CurveBackend] = None
    ) -> "HDNode":
        """
        Create master node from seed.

        Args:
            seed: 16 to 64 byte seed
            master_secret: HMAC key, "Bitcoin seed" for BIP32 (also used when empty)
            versions: Version bytes pair or a Network preset
            backend: Curve backend, coincurve by default

        Returns:
            Master node (depth 0)

        Raises:
            InvalidSeed: If seed length is out of range
            DerivationError: If the seed yields an invalid master key
        """
        seed = validate_seed(seed)
        # An empty label selects the default
        master_secret = master_secret or DEFAULT_MASTER_SECRET
        if isinstance(master_secret, str):
            master_secret = master_secret.encode("utf-8")
        backend = backend or get_default_backend()

        digest = backend.hmac_sha512(master_secret, seed)
        key, chain_code = digest[:32], digest[32:]

        try:
            return cls(chain_code, private_key=key, versions=versions, backend=backend)
        except InvalidKeyValue as e:
            raise DerivationError("Invalid master key, seed must be discarded") from e

    @classmethod
    def from_extended_key(
        cls,
        extended_key: str,
        versions: VersionsLike = DEFAULT_VERSIONS,
        backend: Optional[CurveBackend] = None
    ) -> "HDNode":
        """
        Parse a Base58Check extended key (xprv/xpub).

        Args:
            extended_key: Extended key string
            versions: Expected version bytes pair or a Network preset
            backend: Curve backend, coincurve by default

        Returns:
            Full node for private keys, public-only node for public keys

        Raises:
            ChecksumError: If the Base58Check checksum is wrong
            SerializationError: If the payload is malformed
            VersionMismatch: If the version does not fit the expected versions
        """
        versions = _resolve_versions(versions)
        data = deserialize(decode_extended_key(extended_key))

        if data.version not in (versions.private, versions.public):
            raise VersionMismatch(
                "Version mismatch: does not match private or public",
                version=data.version
            )

        kwargs = dict(
            depth=data.depth,
            index=data.index,
            parent_fingerprint=data.parent_fingerprint,
            versions=versions,
            backend=backend,
        )

        if data.is_private:
            if data.version != versions.private:
                raise VersionMismatch(
                    "Version mismatch: version does not match private",
                    version=data.version
                )
            return cls(data.chain_code, private_key=data.key_data[1:], **kwargs)

        if data.version != versions.public:
            raise VersionMismatch(
                "Version mismatch: version does not match public",
                version=data.version
            )
        return cls(data.chain_code, public_key=data.key_data, **kwargs)

    @classmethod
    def from_json(
        cls,
        obj: ExtendedKeyJSON,
        versions: VersionsLike = DEFAULT_VERSIONS,
        backend: Optional[CurveBackend] = None
    ) -> "HDNode":
        """Rebuild a node from ``to_json`` output, preferring the private key."""
        extended_key = obj.get("xpriv") or obj["xpub"]
        return cls.from_extended_key(extended_key, versions=versions, backend=backend)

    @property
    def versions(self) -> Versions:
        return self._versions

    @property
    def backend(self) -> CurveBackend:
        return self._backend

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def index(self) -> int:
        return self._index

    @property
    def is_hardened(self) -> bool:
        """Whether this node was derived with a hardened index."""
        return is_hardened(self._index)

    @property
    def parent_fingerprint(self) -> int:
        # A master node has no parent
        return self._parent_fingerprint if self._depth else 0

    @property
    def fingerprint(self) -> Fingerprint:
        return self._fingerprint

    @property
    def identifier(self) -> Optional[Identifier]:
        return self._identifier

    @property
    def pub_key_hash(self) -> Optional[Identifier]:
        """Alias of ``identifier``."""
        return self._identifier

    @property
    def chain_code(self) -> Optional[ChainCode]:
        return self._chain_code

    @chain_code.setter
    def chain_code(self, chain_code: bytes) -> None:
        self._chain_code = ChainCode(validate_chain_code(chain_code))

    @property
    def has_private_key(self) -> bool:
        return self._private_key is not None

    @property
    def private_key(self) -> Optional[PrivateKeyBytes]:
        """Private key bytes, None for public-only nodes."""
        if self._private_key is None:
            return None
        return PrivateKeyBytes(bytes(self._private_key))

    @private_key.setter
    def private_key(self, key: bytes) -> None:
        key = validate_private_key_length(key)
        if not self._backend.validate_private_key(key):
            raise InvalidKeyValue("Invalid private key")

        public_key = self._backend.public_key_create(key)

        self._destroy_private_key()
        self._private_key = bytearray(key)
        self._set_public_key(public_key)

    @property
    def public_key(self) -> Optional[PublicKeyBytes]:
        """33-byte compressed public key."""
        return self._public_key

    @public_key.setter
    def public_key(self, key: bytes) -> None:
        key = validate_public_key_length(key)
        if not self._backend.validate_public_key(key):
            raise InvalidKeyValue("Invalid public key")

        self._set_public_key(self._backend.public_key_convert(key))
        self._destroy_private_key()

    @property
    def private_extended_key(self) -> Optional[ExtendedKeyStr]:
        """Base58Check xprv, None when the node holds no private key."""
        if self._private_key is None:
            return None
        return ExtendedKeyStr(encode_extended_key(
            self._serialize(self._versions.private, b"\x00" + bytes(self._private_key))
        ))

    @property
    def public_extended_key(self) -> ExtendedKeyStr:
        """Base58Check xpub."""
        if self._public_key is None:
            raise MissingPublicKey("Node has no key to serialize")
        return ExtendedKeyStr(encode_extended_key(self._serialize(self._versions.public, self._public_key)))

    def derive(self, path: str) -> "HDNode":
        """
        Derive a descendant using a path like m/44'/0'/0'/0/0.

        A path of exactly ``m`` or ``m'`` returns this node itself.

        Args:
            path: Derivation path relative to this node

        Returns:
            Derived node

        Raises:
            InvalidPath: If path does not start with m or M
            InvalidIndex: If a component is not a valid index
            MissingPrivateKey: If a hardened step is applied to a public-only node
        """
        node = self
        for index in parse_path(path):
            node = node.derive_child(index)
        return node

    def derive_child(self, index: int) -> "HDNode":
        """
        Derive the child node at a raw index.

        Indices at or above ``HARDENED_OFFSET`` use hardened derivation. If
        the derived key is invalid for the curve the next index is used,
        so the returned node's ``index`` may exceed the one requested.

        Args:
            index: Child index (0 to 2**32 - 1)

        Returns:
            Child node

        Raises:
            InvalidIndex: If index is out of range
            MissingChainCode: If this node has no chain code
            MissingPrivateKey: If hardened derivation is requested on a public-only node
            DerivationError: If no valid child exists up to the last index
        """
        validate_index(index)
        if self._chain_code is None:
            raise MissingChainCode("Chain code is required to derive children")
        if self._public_key is None:
            raise MissingPublicKey("Node has no key to derive from")
        if self._depth >= MAX_DEPTH:
            raise DerivationError(f"Maximum depth of {MAX_DEPTH} reached", index=index)

        parent_fingerprint = self._fingerprint

        for candidate in range(index, MAX_INDEX + 1):
            digest = self._backend.hmac_sha512(self._chain_code, self._child_data(candidate))
            tweak, chain_code = digest[:32], digest[32:]

            try:
                if self._private_key is not None:
                    key = self._backend.private_key_tweak_add(bytes(self._private_key), tweak)
                    child = self._child(chain_code, candidate, parent_fingerprint, private_key=key)
                else:
                    key = self._backend.public_key_tweak_add(self._public_key, tweak)
                    child = self._child(chain_code, candidate, parent_fingerprint, public_key=key)
            except InvalidTweak:
                logger.warning(f"Invalid child key at index {candidate}, trying {candidate + 1}")
                continue

            logger.debug(
                f"Derived child {candidate} at depth {child.depth} "
                f"from parent {parent_fingerprint:08x}"
            )
            return child

        raise DerivationError("No valid child key left in index space", index=index)

    def neuter(self) -> "HDNode":
        """Get a public-only copy of this node."""
        if self._public_key is None:
            raise MissingPublicKey("Node has no key to neuter")
        return HDNode(
            self._chain_code,
            public_key=self._public_key,
            depth=self._depth,
            index=self._index,
            parent_fingerprint=self._parent_fingerprint,
            versions=self._versions,
            backend=self._backend,
        )

    def sign(self, message_hash: bytes) -> Signature:
        """
        Sign a 32-byte hash with deterministic ECDSA.

        Returns:
            64-byte compact signature

        Raises:
            MissingPrivateKey: If the node holds no private key
            InvalidHashLength: If hash is not 32 bytes
        """
        if self._private_key is None:
            raise MissingPrivateKey("private key should be present")
        message_hash = validate_hash(message_hash)
        return Signature(self._backend.sign(message_hash, bytes(self._private_key)))

    def verify(self, message_hash: bytes, signature: bytes) -> bool:
        """
        Verify a compact signature against this node's public key.

        Raises:
            InvalidHashLength: If hash is not 32 bytes
            InvalidSignatureLength: If signature is not 64 bytes
        """
        message_hash = validate_hash(message_hash)
        signature = validate_signature(signature)
        if self._public_key is None:
            raise MissingPublicKey("Node has no public key")
        return self._backend.verify(message_hash, signature, self._public_key)

    def wipe_private_data(self) -> "HDNode":
        """Overwrite and drop the private key, leaving a public-only node."""
        if self._private_key is not None:
            logger.debug(f"Wiping private key of node {self._fingerprint:08x}")
        self._destroy_private_key()
        return self

    def to_json(self) -> ExtendedKeyJSON:
        """Get interchange mapping with both extended keys."""
        return {
            "xpriv": self.private_extended_key,
            "xpub": self.public_extended_key,
        }

    def _destroy_private_key(self) -> None:
        if self._private_key is not None:
            self._private_key[:] = secrets.token_bytes(len(self._private_key))
        self._private_key = None

    def _set_public_key(self, public_key: bytes) -> None:
        self._public_key = PublicKeyBytes(public_key)
        self._identifier = Identifier(self._backend.hash160(public_key))
        self._fingerprint = Fingerprint(bytes_to_int(self._identifier[:4]))

    def _child_data(self, index: int) -> bytes:
        if is_hardened(index):
            if self._private_key is None:
                raise MissingPrivateKey("Could not derive hardened child key without private key")
            # 0x00 || ser256(kpar) || ser32(i)
            return b"\x00" + bytes(self._private_key) + int_to_bytes(index, 4)
        # serP(Kpar) || ser32(i)
        return self._public_key + int_to_bytes(index, 4)

    def _child(
        self,
        chain_code: bytes,
        index: int,
        parent_fingerprint: int,
        **key: bytes
    ) -> "HDNode":
        return HDNode(
            chain_code,
            depth=self._depth + 1,
            index=index,
            parent_fingerprint=parent_fingerprint,
            versions=self._versions,
            backend=self._backend,
            **key
        )

    def _serialize(self, version: int, key: bytes) -> bytes:
        if self._chain_code is None:
            raise MissingChainCode("Chain code is required to serialize")
        return serialize(
            version,
            key,
            self._depth,
            self._index,
            self.parent_fingerprint,
            self._chain_code
        )

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, HDNode):
            return False
        return (
            self._versions == other._versions
            and self._depth == other._depth
            and self._index == other._index
            and self.parent_fingerprint == other.parent_fingerprint
            and self._chain_code == other._chain_code
            and self.private_key == other.private_key
            and self._public_key == other._public_key
        )

    # Key assignment and wiping mutate nodes
    __hash__ = None

    def __repr__(self) -> str:
        """String representation."""
        # Never show key material
        kind = "private" if self._private_key is not None else "public"
        return (
            f"HDNode({kind}, depth={self._depth}, index={self._index}, "
            f"fingerprint={self._fingerprint:08x})"
        )
