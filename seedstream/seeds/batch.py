"""
Batch seed generation for parallel work units.

generate() produces one RNG seed per work unit, either by validating a
pre-generated list of seeds or by deriving independent L'Ecuyer-CMRG
substream seeds from a single root seed.

Derived batches leave the ambient generator forwarded by exactly one draw,
whatever the number of seeds. Repeated calls therefore move the ambient
state along the same path regardless of how many units are served or how
they are executed.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import numpy as np

from seedstream import ambient
from seedstream._canonical import fingerprint
from seedstream.config import debug_enabled
from seedstream.errors import (
    HeterogeneousSeedsError,
    InvalidCountError,
    InvalidSeedListError,
    LengthMismatchError,
    NonIntegerSeedsError,
    ScalarSeedsNotAllowedError,
    hpaste,
)
from seedstream.lecuyer import stream_advance, substream_advance
from seedstream.seeds.canonical import normalize
from seedstream.seeds.validate import is_valid
from seedstream.types import GeneratorState, SeedBatch, is_integer

logger = logging.getLogger(__name__)


def forward_one_step(previous: GeneratorState = None) -> GeneratorState:
    """
    Forward the ambient generator by one draw and return the new state.

    Args:
        previous: State to compare against after the draw. Defaults to the
            state just before the draw. The comparison is only reported in
            the debug log; it never raises.

    Returns:
        The ambient state after the draw.
    """
    if previous is None:
        previous = ambient.get_state()
    ambient.draw()
    seed_next = ambient.get_state()
    if seed_next == previous:
        logger.debug("Ambient generator state did not change after one draw")
    return seed_next


def _check_count(count: Any) -> int:
    if is_integer(count):
        value = int(count)
    elif isinstance(count, (float, np.floating)) and math.isfinite(count) and float(count).is_integer():
        value = int(count)
    else:
        raise InvalidCountError(
            f"Argument 'count' must be a non-negative integer: {count!r}"
        )
    if value < 0:
        raise InvalidCountError(f"Argument 'count' must be non-negative: {value}")
    return value


def _seed_length(seed: Any) -> int:
    if isinstance(seed, np.ndarray):
        return seed.size if seed.ndim else 1
    if isinstance(seed, (list, tuple)):
        return len(seed)
    return 1


def _value_types(seed: Any) -> set[str]:
    if isinstance(seed, np.ndarray):
        return {str(seed.dtype)}
    values = seed if isinstance(seed, (list, tuple)) else [seed]
    return {type(v).__name__ for v in values}


def _is_integer_seed(seed: Any) -> bool:
    if isinstance(seed, np.ndarray):
        return np.issubdtype(seed.dtype, np.integer)
    values = seed if isinstance(seed, (list, tuple)) else [seed]
    return all(is_integer(v) for v in values)


def _check_seed_list(seeds: list, count: int) -> None:
    nseeds = len(seeds)
    if nseeds != count:
        raise LengthMismatchError(
            "Argument 'seed' is a list, which specifies the sequence of seeds "
            "to be used for each element, but its length differs from the "
            f"number of elements: {nseeds} != {count}"
        )
    if nseeds == 0:
        return

    lengths = sorted({_seed_length(s) for s in seeds})
    if len(lengths) != 1:
        raise HeterogeneousSeedsError(
            "The seeds in the list given as argument 'seed' are not all of the "
            f"same length (did you really pass RNG seeds?): {hpaste(lengths)}"
        )
    if lengths[0] == 1:
        raise ScalarSeedsNotAllowedError(
            "Argument 'seed' is invalid. Pre-generated seeds must be complete "
            "generator states of two or more integers, not single integers "
            "meant for set_seed()"
        )

    bad = [s for s in seeds if not _is_integer_seed(s)]
    if bad:
        types = sorted(set().union(*(_value_types(s) for s in bad)))
        raise NonIntegerSeedsError(
            "The seeds in the list given as argument 'seed' are not all "
            f"integers (did you really pass RNG seeds?): {hpaste(types)}"
        )

    # For efficiency, only the first seed is tried on the generator
    if not is_valid(seeds[0]):
        raise InvalidSeedListError(
            "The list given as argument 'seed' does not hold valid generator "
            f"states: {hpaste(seeds[0])}"
        )


def generate(count: Any, seed: Any = None, debug: bool | None = None) -> SeedBatch | None:
    """
    Produce reproducible seeds for parallel random number generation.

    Args:
        count: Number of seeds to produce (one per work unit).
        seed: ``None`` or ``False`` for no seeds; a list of ``count``
            pre-generated generator states; or a root seed specification
            accepted by normalize() (SeedSpec.AUTO, SeedSpec.REUSE_OR_AUTO,
            ``True``, a single integer, or a 7-element L'Ecuyer-CMRG seed
            given as a tuple or numpy array).
        debug: Emit progress lines to the debug log. Defaults to the
            ``debug`` option.

    Returns:
        A list of ``count`` seeds, or ``None`` when no seeds were requested.
        A pre-generated list is returned as the same object.

    Raises:
        InvalidCountError: If *count* is not a non-negative integer.
        InvalidSeedShapeError: If *seed* is not an accepted specification.
        LengthMismatchError, HeterogeneousSeedsError,
        ScalarSeedsNotAllowedError, NonIntegerSeedsError,
        InvalidSeedListError: If a pre-generated list is unusable.

    Example:
        seeds = generate(3, 42)
        assert len(seeds) == 3
        assert generate(3, 42) == seeds
    """
    count = _check_count(count)

    if seed is None or seed is False:
        return None

    if debug is None:
        debug = debug_enabled()

    if debug:
        logger.debug("Generating random seeds ...")

    if isinstance(seed, list):
        if debug:
            logger.debug(f"Using a pre-defined stream of {count} random seeds ...")
        _check_seed_list(seed, count)
        if debug:
            logger.debug(f"Using a pre-defined stream of {count} random seeds ... DONE")
            logger.debug("Generating random seeds ... DONE")
        return seed

    if debug:
        logger.debug(f"Generating random seed streams for {count} elements ...")

    root = normalize(seed)

    # Forward the ambient state by one draw so the caller sees the same
    # state afterwards regardless of count
    oseed = forward_one_step()
    try:
        seeds: SeedBatch = []
        for _ in range(count):
            # Substream for this element, then the stream for the next one
            seeds.append(substream_advance(root))
            root = stream_advance(root)
    finally:
        ambient.set_state(oseed)

    if debug:
        logger.debug(f"Generating random seed streams for {count} elements ... DONE")
        logger.debug(f"Seed batch fingerprint: {batch_fingerprint(seeds)}")
        logger.debug("Generating random seeds ... DONE")

    return seeds


def batch_fingerprint(seeds: SeedBatch) -> str:
    """Return a short stable identifier of a batch of seeds."""
    return fingerprint(seeds)
