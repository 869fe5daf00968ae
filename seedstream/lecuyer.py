"""
L'Ecuyer-CMRG (MRG32k3a) numerics.

Provides:

- step: Advance a 7-element seed by one draw and return the uniform
- stream_advance: Jump a seed to the start of the next stream (2^127 steps)
- substream_advance: Jump a seed to the start of the next substream (2^76 steps)

A seed is ``(code, x10, x11, x12, x20, x21, x22)`` where ``code`` is the
kind code and the two triples are the states of the combined recursions
modulo ``M1`` and ``M2``. The jump matrices are computed once at import by
repeated squaring of the one-step transition matrices.
"""

from __future__ import annotations

from typing import Sequence

M1 = 4294967087
M2 = 4294944443

_A12 = 1403580
_A13N = 810728
_A21 = 527612
_A23N = 1370589

# 1 / (M1 + 1)
NORM = 2.328306549295727688e-10

Matrix = tuple[tuple[int, int, int], tuple[int, int, int], tuple[int, int, int]]

A1: Matrix = ((0, 1, 0), (0, 0, 1), (M1 - _A13N, _A12, 0))
A2: Matrix = ((0, 1, 0), (0, 0, 1), (M2 - _A23N, 0, _A21))


def _matmul_mod(a: Matrix, b: Matrix, m: int) -> Matrix:
    return tuple(
        tuple(sum(a[i][k] * b[k][j] for k in range(3)) % m for j in range(3))
        for i in range(3)
    )  # type: ignore[return-value]


def _matvec_mod(a: Matrix, v: Sequence[int], m: int) -> tuple[int, int, int]:
    return tuple(sum(a[i][k] * v[k] for k in range(3)) % m for i in range(3))  # type: ignore[return-value]


def matrix_power2(a: Matrix, e: int, m: int) -> Matrix:
    """Return ``a ** (2 ** e) mod m`` by squaring ``e`` times."""
    result = a
    for _ in range(e):
        result = _matmul_mod(result, result, m)
    return result


A1P76 = matrix_power2(A1, 76, M1)
A2P76 = matrix_power2(A2, 76, M2)
A1P127 = matrix_power2(A1, 127, M1)
A2P127 = matrix_power2(A2, 127, M2)


def _unpack(seed: Sequence[int]) -> tuple[int, list[int]]:
    if len(seed) != 7:
        raise ValueError(f"L'Ecuyer-CMRG seed must have 7 elements, got {len(seed)}")
    code = int(seed[0])
    if code % 100 != 7:
        raise ValueError(f"Not a L'Ecuyer-CMRG seed (kind code {code})")
    # Words may arrive in signed 32-bit form
    words = [int(x) % 2**32 for x in seed[1:]]
    return code, words


def _jump(seed: Sequence[int], a1: Matrix, a2: Matrix) -> tuple[int, ...]:
    code, words = _unpack(seed)
    return (code, *_matvec_mod(a1, words[:3], M1), *_matvec_mod(a2, words[3:], M2))


def stream_advance(seed: Sequence[int]) -> tuple[int, ...]:
    """
    Return the seed of the next independent stream.

    Args:
        seed: A 7-element L'Ecuyer-CMRG seed.

    Returns:
        The seed advanced by 2^127 steps, with the kind code preserved.

    Raises:
        ValueError: If *seed* is not a L'Ecuyer-CMRG seed.
    """
    return _jump(seed, A1P127, A2P127)


def substream_advance(seed: Sequence[int]) -> tuple[int, ...]:
    """
    Return the seed of the next substream within the stream of *seed*.

    Args:
        seed: A 7-element L'Ecuyer-CMRG seed.

    Returns:
        The seed advanced by 2^76 steps, with the kind code preserved.

    Raises:
        ValueError: If *seed* is not a L'Ecuyer-CMRG seed.
    """
    return _jump(seed, A1P76, A2P76)


def step(seed: Sequence[int]) -> tuple[float, tuple[int, ...]]:
    """
    Advance *seed* by one draw.

    Returns:
        A tuple ``(u, next_seed)`` with ``u`` uniform on (0, 1).
    """
    code, s = _unpack(seed)
    p1 = (_A12 * s[1] - _A13N * s[0]) % M1
    p2 = (_A21 * s[5] - _A23N * s[3]) % M2
    u = ((p1 - p2) if p1 > p2 else (p1 - p2 + M1)) * NORM
    return u, (code, s[1], s[2], p1, s[4], s[5], p2)
