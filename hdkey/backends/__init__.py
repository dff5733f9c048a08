"""Curve backend implementations for hdkey."""

from functools import lru_cache

from ..backends.base import CurveBackend
from ..backends.secp256k1 import Secp256k1Backend

__all__ = [
    "CurveBackend",
    "Secp256k1Backend",
    "get_default_backend",
]


@lru_cache(maxsize=None)
def get_default_backend() -> CurveBackend:
    """Get the shared coincurve backend."""
    return Secp256k1Backend()
