"""
Core types for seedstream (PUBLIC).

This module defines the values passed between the seed components:
- GeneratorState: Opaque snapshot of the ambient generator
- CanonicalSeed: A 7-element L'Ecuyer-CMRG stream seed
- SeedBatch: One seed per parallel work unit
- SeedSpec: Sentinels accepted where a root seed is expected
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

import numpy as np

GeneratorState = Union[tuple[int, ...], None]
CanonicalSeed = tuple[int, ...]
SeedBatch = list

# Kind code layout: 10000 * sample_kind + 100 * normal_kind + kind_index
SAMPLE_KIND_REJECTION = 1
NORMAL_KIND_INVERSION = 4
LECUYER_CODE_SUFFIX = 407
CANONICAL_SEED_LENGTH = 7


class SeedSpec(str, Enum):
    """Sentinel root seed specifications."""

    AUTO = "auto"
    REUSE_OR_AUTO = "reuse"


def is_integer(value: Any) -> bool:
    """Return True for Python and numpy integers, excluding bools."""
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))
