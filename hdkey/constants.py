"""Constants for hdkey."""

from enum import Enum

__all__ = [
    "Network",
    "HARDENED_OFFSET",
    "MAX_INDEX",
    "MAX_DEPTH",
    "EXTENDED_KEY_LENGTH",
    "CHAIN_CODE_LENGTH",
    "PRIVATE_KEY_LENGTH",
    "COMPRESSED_PUBLIC_KEY_LENGTH",
    "UNCOMPRESSED_PUBLIC_KEY_LENGTH",
    "MIN_SEED_LENGTH",
    "MAX_SEED_LENGTH",
    "DEFAULT_MASTER_SECRET",
    "NETWORK_VERSIONS",
]


class Network(str, Enum):
    """Networks with registered extended key version bytes."""

    MAINNET = "mainnet"
    TESTNET = "testnet"


# Child indices at or above this value use hardened derivation
HARDENED_OFFSET = 0x80000000
MAX_INDEX = 0xFFFFFFFF
MAX_DEPTH = 0xFF

# version(4) || depth(1) || fingerprint(4) || index(4) || chain(32) || key(33)
EXTENDED_KEY_LENGTH = 78
CHAIN_CODE_LENGTH = 32
PRIVATE_KEY_LENGTH = 32
COMPRESSED_PUBLIC_KEY_LENGTH = 33
UNCOMPRESSED_PUBLIC_KEY_LENGTH = 65

# BIP32 seeds are between 128 and 512 bits
MIN_SEED_LENGTH = 16
MAX_SEED_LENGTH = 64

DEFAULT_MASTER_SECRET = b"Bitcoin seed"

# (private, public) version bytes
NETWORK_VERSIONS = {
    Network.MAINNET: (0x0488ADE4, 0x0488B21E),  # xprv / xpub
    Network.TESTNET: (0x04358394, 0x043587CF),  # tprv / tpub
}
