"""
Canonical seed normalization.

Turns any accepted root seed specification into a 7-element L'Ecuyer-CMRG
stream seed:

- SeedSpec.AUTO: a fresh seed derived from the ambient generator
- SeedSpec.REUSE_OR_AUTO (or True): the ambient state if it already is a
  canonical seed, otherwise as AUTO
- A canonical seed: returned as-is
- An integer: a seed derived deterministically from that integer

The ambient generator state and kind are left untouched.
"""

from __future__ import annotations

import logging
from typing import Any

from seedstream import ambient
from seedstream.errors import InvalidSeedShapeError
from seedstream.seeds.validate import is_canonical_seed
from seedstream.types import CanonicalSeed, SeedSpec, is_integer

logger = logging.getLogger(__name__)

_ACCEPTED = (
    "SeedSpec.AUTO, SeedSpec.REUSE_OR_AUTO (True), a single integer, or a "
    "L'Ecuyer-CMRG seed as returned by stream_advance()"
)


def _describe(seed: Any) -> str:
    text = repr(seed)
    if len(text) > 80:
        text = text[:77] + "..."
    return f"{type(seed).__name__} {text}"


def _fresh_lecuyer_seed(seed: int | None = None) -> CanonicalSeed:
    with ambient.preserved_state():
        ambient.rng_kind(ambient.LECUYER_CMRG)
        if seed is not None:
            ambient.set_seed(seed)
        return ambient.get_state()


def normalize(seed: Any) -> CanonicalSeed:
    """
    Get a L'Ecuyer-CMRG seed from a seed specification.

    Args:
        seed: SeedSpec.AUTO, SeedSpec.REUSE_OR_AUTO (``True`` is accepted as
            an alias), a canonical 7-element seed, or a single integer.

    Returns:
        A canonical seed. An input that already is one is returned unchanged.

    Raises:
        InvalidSeedShapeError: If *seed* is none of the accepted forms.

    Example:
        root = normalize(42)
        assert normalize(root) is root
    """
    if seed is True:
        seed = SeedSpec.REUSE_OR_AUTO
    elif seed is False:
        raise InvalidSeedShapeError(
            f"Seed must be True if boolean, got False; expected {_ACCEPTED}"
        )

    if isinstance(seed, SeedSpec):
        if seed is SeedSpec.REUSE_OR_AUTO:
            current = ambient.get_state()
            if is_canonical_seed(current):
                return current
        return _fresh_lecuyer_seed()

    if is_canonical_seed(seed):
        return seed

    if is_integer(seed):
        result = _fresh_lecuyer_seed(int(seed))
        if not is_canonical_seed(result):
            raise InvalidSeedShapeError(
                f"Could not derive a L'Ecuyer-CMRG seed from {seed}: {_describe(result)}"
            )
        logger.debug(f"Derived L'Ecuyer-CMRG seed from integer seed {seed}")
        return result

    raise InvalidSeedShapeError(
        f"Seed must be {_ACCEPTED}; got {_describe(seed)}"
    )
