"""
Canonical encoding of seed batches (internal).

This module provides deterministic JSON encoding and fingerprinting of
seeds so that two batches can be compared by a short identifier.

Key design decisions:
- Only integers and (nested) sequences of integers are encodable
- Python ints, numpy integers and numpy integer arrays encode identically
- Tuples and lists both become JSON arrays
- Bools and floats raise CanonicalizeError
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

import numpy as np

from seedstream.types import is_integer


class CanonicalizeError(Exception):
    """Raised when a seed or batch cannot be canonicalized."""

    pass


def _encode_value(obj: Any) -> Any:
    """
    Recursively encode a seed value for canonical JSON serialization.

    Raises:
        CanonicalizeError: If the value is not an integer or a sequence of them
    """
    if is_integer(obj):
        return int(obj)
    if isinstance(obj, np.ndarray):
        if not np.issubdtype(obj.dtype, np.integer):
            raise CanonicalizeError(f"Cannot canonicalize array of dtype {obj.dtype}")
        return [_encode_value(item) for item in obj.tolist()]
    if isinstance(obj, (list, tuple)):
        return [_encode_value(item) for item in obj]

    raise CanonicalizeError(f"Cannot canonicalize type: {type(obj).__name__}")


def canonical(obj: Any) -> str:
    """
    Convert a seed or batch of seeds to a canonical JSON string.

    Example:
        >>> canonical([(10407, 1, 2, 3, 4, 5, 6)])
        '[[10407,1,2,3,4,5,6]]'
    """
    return json.dumps(_encode_value(obj), separators=(",", ":"))


def fingerprint(obj: Any) -> str:
    """
    Compute a stable fingerprint of a seed or batch of seeds.

    Uses SHA-256 of the canonical representation, truncated to 16 hex characters.

    Raises:
        CanonicalizeError: If the object cannot be canonicalized.
    """
    canonical_str = canonical(obj)
    hash_bytes = hashlib.sha256(canonical_str.encode("utf-8")).digest()
    return hash_bytes.hex()[:16]
