import pytest

from hdkey.exceptions import ChecksumError, SerializationError
from hdkey.serialization import (
    decode_extended_key,
    deserialize,
    encode_extended_key,
    serialize,
)
from hdkey.utils.encoding import (
    decode_base58_check,
    encode_base58_check,
    hash160,
    hmac_sha512,
)

PUBLIC_KEY = bytes.fromhex("02b4632d08485ff1df2db55b9dafd23347d1c47a457072a1e87be26896549a8737")
CHAIN_CODE = bytes.fromhex("2c06030e090b212127390803312a1d22152c1d010d2c2811242c0d0f23372f21")


@pytest.mark.parametrize("data,expected", [
    (
        "02b4632d08485ff1df2db55b9dafd23347d1c47a457072a1e87be26896549a8737",
        "93ce48570b55c42c2af816aeaba06cfee1224fae",
    ),
    (
        "2c352c06030e090b212127390803312a1d22152c1d010d2c2811242c0d0f23372f21",
        "2314e3e15dde32f6fbcbca85c2bf2b1e24abec74",
    ),
])
def test_hash160(data, expected):
    assert hash160(bytes.fromhex(data)).hex() == expected


def test_hmac_sha512_master_key():
    digest = hmac_sha512(b"Bitcoin seed", bytes.fromhex("000102030405060708090a0b0c0d0e0f"))
    assert len(digest) == 64
    assert digest[:32].hex() == "e8f32e723decf4051aefac8e2c93c9c5b214313817cdb01a1494b917c8436b35"
    assert digest[32:].hex() == "873dff81c02f525623fd1fe5167eac3a55a049de3d314bb42ee227ffed37d508"


def test_base58check_roundtrip():
    payload = b"test payload"
    enc = encode_base58_check(payload)
    assert decode_base58_check(enc) == payload
    with pytest.raises(ChecksumError):
        decode_base58_check(enc[:-1] + ("1" if enc[-1] != "1" else "2"))


def test_base58_invalid_character():
    with pytest.raises(SerializationError):
        decode_base58_check("0OIl")


def test_serialize_without_parent():
    assert serialize(0x0488ADE4, PUBLIC_KEY, 0, 0, 0x00000000, CHAIN_CODE).hex() == (
        "0488ade4000000000000000000"
        "2c06030e090b212127390803312a1d22152c1d010d2c2811242c0d0f23372f21"
        "02b4632d08485ff1df2db55b9dafd23347d1c47a457072a1e87be26896549a8737"
    )


def test_serialize_with_parent():
    assert serialize(0x0488ADE4, PUBLIC_KEY, 1, 0, 0x12345678, CHAIN_CODE).hex() == (
        "0488ade4011234567800000000"
        "2c06030e090b212127390803312a1d22152c1d010d2c2811242c0d0f23372f21"
        "02b4632d08485ff1df2db55b9dafd23347d1c47a457072a1e87be26896549a8737"
    )


def test_serialize_master_ignores_parent_fingerprint():
    payload = serialize(0x0488ADE4, PUBLIC_KEY, 0, 0, 0x12345678, CHAIN_CODE)
    assert len(payload) == 78
    assert payload[5:9] == b"\x00\x00\x00\x00"
    assert payload == serialize(0x0488ADE4, PUBLIC_KEY, 0, 0, 0, CHAIN_CODE)


def test_serialize_rejects_bad_fields():
    with pytest.raises(SerializationError):
        serialize(0x0488ADE4, PUBLIC_KEY[:32], 0, 0, 0, CHAIN_CODE)
    with pytest.raises(SerializationError):
        serialize(0x0488ADE4, PUBLIC_KEY, 0, 0, 0, CHAIN_CODE[:31])
    with pytest.raises(SerializationError):
        serialize(0x0488ADE4, PUBLIC_KEY, 256, 0, 0, CHAIN_CODE)


def test_deserialize():
    payload = serialize(0x0488B21E, PUBLIC_KEY, 3, 0x80000001, 0xDEADBEEF, CHAIN_CODE)
    data = deserialize(payload)

    assert data.version == 0x0488B21E
    assert data.depth == 3
    assert data.index == 0x80000001
    assert data.parent_fingerprint == 0xDEADBEEF
    assert data.chain_code == CHAIN_CODE
    assert data.key_data == PUBLIC_KEY
    assert not data.is_private


def test_extended_key_text_length():
    payload = serialize(0x0488B21E, PUBLIC_KEY, 0, 0, 0, CHAIN_CODE)
    text = encode_extended_key(payload)
    assert text.startswith("xpub")
    assert decode_extended_key(text) == payload

    with pytest.raises(SerializationError):
        decode_extended_key(encode_base58_check(payload[:-1]))
    with pytest.raises(SerializationError):
        deserialize(payload + b"\x00")
