"""BIP32 derivation path parsing."""

import re
from typing import Iterable, List

from .constants import HARDENED_OFFSET
from .exceptions import InvalidIndex, InvalidPath

__all__ = ["parse_path", "format_path"]

MASTER_PATTERN = re.compile(r"^[mM]")
COMPONENT_PATTERN = re.compile(r"([0-9]+)(['hH]?)")


def parse_path(path: str) -> List[int]:
    """
    Parse a derivation path like m/44'/0'/0'/0/0 into raw child indices.

    A path of exactly ``m`` or ``m'`` (any case) refers to the node itself
    and parses to an empty list. Hardened components carry a trailing
    ``'`` (``h`` and ``H`` are accepted too) and are returned with the
    hardened offset added.

    Args:
        path: Slash separated derivation path

    Returns:
        Child indices in derivation order

    Raises:
        InvalidPath: If the first component does not start with m or M
        InvalidIndex: If a component is not a number below 2**31
    """
    if not isinstance(path, str):
        raise InvalidPath(f"Path must be a string, got {type(path).__name__}")

    if path.lower() in ("m", "m'"):
        return []

    components = path.split("/")
    if not MASTER_PATTERN.match(components[0]):
        raise InvalidPath('Path must start with "m" or "M"')

    indices = []
    for component in components[1:]:
        match = COMPONENT_PATTERN.fullmatch(component)
        if match is None:
            raise InvalidIndex(f"Invalid index: {component!r}")

        index = int(match.group(1))
        if index >= HARDENED_OFFSET:
            raise InvalidIndex(f"Invalid index: {component!r}")

        if match.group(2):
            index += HARDENED_OFFSET
        indices.append(index)

    return indices


def format_path(indices: Iterable[int]) -> str:
    """Format raw child indices as a path string, e.g. [2**31, 1] -> m/0'/1."""
    parts = ["m"]
    for index in indices:
        if index >= HARDENED_OFFSET:
            parts.append(f"{index - HARDENED_OFFSET}'")
        else:
            parts.append(str(index))
    return "/".join(parts)
