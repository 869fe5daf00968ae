"""
Seed validation without side effects on the ambient generator.
"""

from __future__ import annotations

import math
import warnings
from typing import Any

import numpy as np

from seedstream import ambient
from seedstream.errors import InvalidStateWarning
from seedstream.types import CANONICAL_SEED_LENGTH, LECUYER_CODE_SUFFIX, is_integer


def is_canonical_seed(seed: Any) -> bool:
    """
    Check whether *seed* is a L'Ecuyer-CMRG stream seed.

    A canonical seed has 7 finite integer-valued elements and its first
    element satisfies ``seed[0] % 10000 == 407``.
    """
    if not isinstance(seed, (list, tuple, np.ndarray)):
        return False
    if isinstance(seed, np.ndarray) and seed.ndim != 1:
        return False
    if len(seed) != CANONICAL_SEED_LENGTH:
        return False
    for value in seed:
        if is_integer(value):
            continue
        if not isinstance(value, (float, np.floating)):
            return False
        if not math.isfinite(value) or not float(value).is_integer():
            return False
    return int(seed[0]) % 10000 == LECUYER_CODE_SUFFIX


def is_valid(candidate: Any) -> bool:
    """
    Check whether *candidate* is accepted as an ambient generator state.

    The candidate is installed as the ambient state and one value is drawn.
    The candidate is rejected if the draw reports a malformed state. The
    previous ambient state is restored in all cases, including when the
    draw raises. An absent state (``None``) is rejected.

    Args:
        candidate: A state token, e.g. a 7-element L'Ecuyer-CMRG seed.

    Returns:
        True if the generator accepted the candidate.
    """
    if candidate is None:
        return False
    with ambient.preserved_state():
        ambient.set_state(candidate)
        with warnings.catch_warnings():
            warnings.simplefilter("error", InvalidStateWarning)
            try:
                ambient.draw()
            except InvalidStateWarning:
                return False
    return True
