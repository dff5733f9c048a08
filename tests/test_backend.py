import pytest

from hdkey import (
    HARDENED_OFFSET,
    CurveBackend,
    DerivationError,
    HDNode,
    InvalidTweak,
    MissingPrivateKey,
    Secp256k1Backend,
    get_default_backend,
)

SEED = bytes.fromhex("000102030405060708090a0b0c0d0e0f")


class FlakyBackend(Secp256k1Backend):
    """Rejects the first ``failures`` tweaks, as if IL >= n."""

    def __init__(self, failures: int = 1) -> None:
        super().__init__()
        self.failures = failures
        self.calls = 0

    def _maybe_fail(self) -> None:
        self.calls += 1
        if self.calls <= self.failures:
            raise InvalidTweak("tweak out of range")

    def private_key_tweak_add(self, private_key: bytes, tweak: bytes) -> bytes:
        self._maybe_fail()
        return super().private_key_tweak_add(private_key, tweak)

    def public_key_tweak_add(self, public_key: bytes, tweak: bytes) -> bytes:
        self._maybe_fail()
        return super().public_key_tweak_add(public_key, tweak)


def test_default_backend():
    backend = get_default_backend()
    assert isinstance(backend, CurveBackend)
    assert backend is get_default_backend()
    assert HDNode.from_master_seed(SEED).backend is backend


def test_backend_is_abstract():
    with pytest.raises(TypeError):
        CurveBackend()


def test_tweak_add_rejects_out_of_range_tweak():
    backend = Secp256k1Backend()
    master = HDNode.from_master_seed(SEED)
    with pytest.raises(InvalidTweak):
        backend.private_key_tweak_add(master.private_key, b"\xff" * 32)
    with pytest.raises(InvalidTweak):
        backend.public_key_tweak_add(master.public_key, b"\xff" * 32)


def test_invalid_private_tweak_skips_to_next_index():
    backend = FlakyBackend(failures=1)
    master = HDNode.from_master_seed(SEED, backend=backend)
    expected = HDNode.from_master_seed(SEED).derive_child(HARDENED_OFFSET + 1)

    child = master.derive_child(HARDENED_OFFSET)

    assert backend.calls == 2
    assert child.index == HARDENED_OFFSET + 1
    assert child.private_key == expected.private_key
    assert child.chain_code == expected.chain_code
    assert child.parent_fingerprint == master.fingerprint
    assert child.backend is backend


def test_invalid_public_tweak_skips_to_next_index():
    neutered = HDNode.from_master_seed(SEED).neuter()
    expected = neutered.derive_child(4)

    backend = FlakyBackend(failures=2)
    watch_only = HDNode.from_extended_key(neutered.public_extended_key, backend=backend)
    child = watch_only.derive_child(2)

    assert child.index == 4
    assert child.public_key == expected.public_key
    assert child.public_extended_key == expected.public_extended_key


def test_retry_stops_at_end_of_index_space():
    backend = FlakyBackend(failures=10)
    master = HDNode.from_master_seed(SEED, backend=backend)

    with pytest.raises(DerivationError) as exc_info:
        master.derive_child(0xFFFFFFFF - 1)
    assert exc_info.value.index == 0xFFFFFFFF - 1
    assert backend.calls == 2


def test_public_retry_cannot_cross_into_hardened_range():
    backend = FlakyBackend(failures=1)
    watch_only = HDNode.from_master_seed(SEED, backend=backend).neuter()

    with pytest.raises(MissingPrivateKey):
        watch_only.derive_child(HARDENED_OFFSET - 1)
