"""
seedstream: Reproducible RNG seeds for parallel work units.

Each of ``count`` work units gets its own L'Ecuyer-CMRG substream seed,
derived from one root seed. The seeds are independent of each other,
reproducible from the root seed, and computing them never leaks into the
ambient generator state beyond a single forward draw.

Example:
    import seedstream

    seeds = seedstream.generate(4, seed=42)
    for unit_seed in seeds:
        seedstream.set_state(unit_seed)  # inside the worker
        ...

    # Fresh root seed from the ambient generator
    seeds = seedstream.generate(4, seed=seedstream.SeedSpec.AUTO)
"""

__version__ = "0.1.0"

# Ambient generator
from seedstream.ambient import (
    DEFAULT_KIND,
    LECUYER_CMRG,
    MERSENNE_TWISTER,
    AmbientGenerator,
    draw,
    get_state,
    preserved_state,
    rng_kind,
    set_seed,
    set_state,
)

# Errors
from seedstream.errors import (
    HeterogeneousSeedsError,
    InvalidCountError,
    InvalidSeedListError,
    InvalidSeedShapeError,
    InvalidStateWarning,
    LengthMismatchError,
    NonIntegerSeedsError,
    ScalarSeedsNotAllowedError,
    SeedError,
)

# Stream primitives
from seedstream.lecuyer import stream_advance, substream_advance

# Seeds
from seedstream.seeds import (
    batch_fingerprint,
    forward_one_step,
    generate,
    is_canonical_seed,
    is_valid,
    normalize,
)

# Types (public)
from seedstream.types import CanonicalSeed, GeneratorState, SeedBatch, SeedSpec

__all__ = [
    # Version
    "__version__",
    # Types
    "SeedSpec",
    "GeneratorState",
    "CanonicalSeed",
    "SeedBatch",
    # Ambient generator
    "AmbientGenerator",
    "MERSENNE_TWISTER",
    "LECUYER_CMRG",
    "DEFAULT_KIND",
    "get_state",
    "set_state",
    "rng_kind",
    "set_seed",
    "draw",
    "preserved_state",
    # Seeds
    "generate",
    "normalize",
    "is_valid",
    "is_canonical_seed",
    "forward_one_step",
    "batch_fingerprint",
    # Stream primitives
    "stream_advance",
    "substream_advance",
    # Errors
    "SeedError",
    "InvalidCountError",
    "InvalidSeedShapeError",
    "LengthMismatchError",
    "HeterogeneousSeedsError",
    "ScalarSeedsNotAllowedError",
    "NonIntegerSeedsError",
    "InvalidSeedListError",
    "InvalidStateWarning",
]
