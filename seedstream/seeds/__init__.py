"""
Seeds module: Reproducible seed batches for parallel work units.

Provides:

- generate(): One independent seed per work unit
- normalize(): Canonical L'Ecuyer-CMRG root seed from a seed specification
- is_valid(): Side-effect-free check of a generator state
- forward_one_step(): Forward the ambient generator by one draw
"""

from seedstream.seeds.batch import batch_fingerprint, forward_one_step, generate
from seedstream.seeds.canonical import normalize
from seedstream.seeds.validate import is_canonical_seed, is_valid

__all__ = [
    "generate",
    "forward_one_step",
    "batch_fingerprint",
    "normalize",
    "is_valid",
    "is_canonical_seed",
]
