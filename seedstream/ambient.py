"""
Ambient generator: the process-wide random number generator state.

The ambient generator is a single (state, kind) pair shared by the whole
process. Its state is an opaque tuple of integers whose first element
encodes the generator kind; ``None`` means "not seeded yet", in which case
the next draw seeds the current kind from OS entropy.

Provides:

- get_state / set_state: Read and replace the state as a token
- rng_kind: Query or switch the generator kind
- set_seed: Deterministically seed the generator from an integer
- draw: A single trial draw, reseeding (with a warning) on malformed state
- preserved_state: Context manager restoring state and kind on exit

Malformed states are never rejected at assignment time. They are detected
by the next draw, which emits an InvalidStateWarning and reseeds. A state
of a known kind and length whose body cannot be used as-is (an all-zero
key, words at or above the modulus) is repaired or reseeded without a
warning.
"""

from __future__ import annotations

import logging
import secrets
import warnings
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

import numpy as np

from seedstream import lecuyer
from seedstream.errors import InvalidStateWarning
from seedstream.types import (
    NORMAL_KIND_INVERSION,
    SAMPLE_KIND_REJECTION,
    GeneratorState,
    is_integer,
)

logger = logging.getLogger(__name__)

MERSENNE_TWISTER = "Mersenne-Twister"
LECUYER_CMRG = "L'Ecuyer-CMRG"
DEFAULT_KIND = MERSENNE_TWISTER

_UINT32 = 2**32
_LCG_MULTIPLIER = 69069
_SCRAMBLE_ROUNDS = 50


def _lcg(s: int) -> int:
    return (_LCG_MULTIPLIER * s + 1) % _UINT32


def _scramble(seed: int) -> int:
    s = seed % _UINT32
    for _ in range(_SCRAMBLE_ROUNDS):
        s = _lcg(s)
    return s


def _words(body: Sequence[Any]) -> list[int] | None:
    """Return body values as unsigned 32-bit words, or None if out of range."""
    words = []
    for value in body:
        value = int(value)
        if not -(2**31) <= value < _UINT32:
            return None
        words.append(value % _UINT32)
    return words


class GeneratorKind(ABC):
    """
    One algorithm family of the ambient generator.

    Attributes:
        name: Human-readable kind name.
        index: Kind index encoded in the last two digits of the kind code.
        body_length: Number of state elements after the kind code.
    """

    name: str
    index: int
    body_length: int

    @property
    def code(self) -> int:
        return 10000 * SAMPLE_KIND_REJECTION + 100 * NORMAL_KIND_INVERSION + self.index

    def seed_state(self, seed: int) -> tuple[int, ...]:
        """Build a full state from an integer seed."""
        return (self.code, *self.seed_body(_scramble(seed)))

    @abstractmethod
    def seed_body(self, scrambled: int) -> tuple[int, ...]:
        """Fill the state body from an already scrambled seed."""
        ...

    def check_body(self, body: Sequence[Any]) -> str | None:
        """Return a description of what is wrong with *body*, or None if usable."""
        if len(body) != self.body_length:
            return f"has wrong length for {self.name}: {len(body) + 1}"
        return None

    @abstractmethod
    def fixup(self, state: tuple[int, ...]) -> tuple[int, ...] | None:
        """
        Return *state* in the form draw() expects, or None if it must be
        reseeded.

        Only called on states that passed check_body().
        """
        ...

    @abstractmethod
    def draw(self, state: tuple[int, ...]) -> tuple[float, tuple[int, ...]]:
        """Draw a uniform from *state*; return it with the advanced state."""
        ...


class MersenneTwisterKind(GeneratorKind):
    """Mersenne-Twister, drawn through numpy's MT19937 bit generator."""

    name = MERSENNE_TWISTER
    index = 3
    body_length = 625

    def seed_body(self, scrambled: int) -> tuple[int, ...]:
        s = scrambled
        key = []
        for _ in range(self.body_length):
            s = _lcg(s)
            key.append(s)
        # pos == 624 forces the key to be regenerated on the next draw
        return (624, *key[1:])

    def fixup(self, state: tuple[int, ...]) -> tuple[int, ...] | None:
        pos = int(state[1])
        if not 0 < pos <= 624:
            pos = 624
        key = _words(state[2:])
        if key is None or not any(key):
            return None
        return (int(state[0]), pos, *key)

    def draw(self, state: tuple[int, ...]) -> tuple[float, tuple[int, ...]]:
        bitgen = np.random.MT19937(0)
        bitgen.state = {
            "bit_generator": "MT19937",
            "state": {
                "key": np.array(_words(state[2:]), dtype=np.uint32),
                "pos": int(state[1]),
            },
        }
        raw = int(bitgen.random_raw())
        after = bitgen.state["state"]
        u = (raw + 0.5) / _UINT32
        return u, (int(state[0]), int(after["pos"]), *(int(k) for k in after["key"]))


class LecuyerCMRGKind(GeneratorKind):
    """L'Ecuyer's MRG32k3a combined multiple recursive generator."""

    name = LECUYER_CMRG
    index = 7
    body_length = 6

    def seed_body(self, scrambled: int) -> tuple[int, ...]:
        s = scrambled
        words = []
        for _ in range(self.body_length):
            s = _lcg(s)
            while s >= lecuyer.M2:
                s = _lcg(s)
            words.append(s)
        return tuple(words)

    def fixup(self, state: tuple[int, ...]) -> tuple[int, ...] | None:
        words = _words(state[1:])
        if words is None:
            return None
        for triple, modulus in ((words[:3], lecuyer.M1), (words[3:], lecuyer.M2)):
            if not any(triple) or max(triple) >= modulus:
                return None
        return (int(state[0]), *words)

    def draw(self, state: tuple[int, ...]) -> tuple[float, tuple[int, ...]]:
        return lecuyer.step(state)


KINDS: dict[str, GeneratorKind] = {
    kind.name: kind for kind in (MersenneTwisterKind(), LecuyerCMRGKind())
}


def lookup_kind(name: str) -> GeneratorKind:
    """Return the kind called *name*."""
    try:
        return KINDS[name]
    except KeyError:
        raise ValueError(
            f"Unknown generator kind {name!r}; expected one of: {', '.join(KINDS)}"
        ) from None


def kind_for_code(code: int) -> GeneratorKind | None:
    """Return the kind encoded by a state's first element, or None."""
    sample_kind, rest = divmod(code, 10000)
    normal_kind, index = divmod(rest, 100)
    if sample_kind not in (0, 1) or normal_kind != NORMAL_KIND_INVERSION:
        return None
    for kind in KINDS.values():
        if kind.index == index:
            return kind
    return None


class AmbientGenerator:
    """
    A generator whose state can be read and replaced as a whole.

    Example:
        gen = AmbientGenerator()
        gen.set_seed(42)
        saved = gen.get_state()
        gen.draw()
        gen.set_state(saved)  # back to the seeded state
    """

    def __init__(self, kind: str = DEFAULT_KIND) -> None:
        self._kind = lookup_kind(kind)
        self._state: Any = None

    def get_state(self) -> GeneratorState:
        """Return the current state token (None when unseeded)."""
        return self._state

    def set_state(self, state: Any, kind: str | None = None) -> None:
        """
        Replace the state.

        Args:
            state: A state token, or None to reset to unseeded.
            kind: Kind to switch to. With a state, the kind encoded in the
                state takes precedence as soon as it is decodable.
        """
        if kind is not None:
            self._kind = lookup_kind(kind)
        if isinstance(state, np.ndarray) and state.ndim == 0:
            state = state.item()
        elif isinstance(state, (list, np.ndarray)):
            state = tuple(state)
        self._state = state

    def kind(self) -> str:
        """Return the name of the current generator kind."""
        kind, problem = self._inspect(self._state)
        if kind is not None and problem is None:
            return kind.name
        return self._kind.name

    def rng_kind(self, kind: str | None = None) -> str:
        """
        Return the current kind name, switching to *kind* if given.

        Switching seeds the new kind from one draw of the current one.
        """
        previous = self.kind()
        if kind is not None:
            target = lookup_kind(kind)
            u = self.draw()
            self._kind = target
            self._state = target.seed_state(int(u * 0xFFFFFFFF))
        return previous

    def set_seed(self, seed: int, kind: str | None = None) -> None:
        """Deterministically seed the generator, optionally switching kind first."""
        if kind is not None:
            self.rng_kind(kind)
        target = lookup_kind(self.kind())
        self._kind = target
        self._state = target.seed_state(int(seed))

    def draw(self) -> float:
        """
        Draw one uniform on (0, 1), advancing the state.

        Warns:
            InvalidStateWarning: If the state is malformed; the generator is
                then reseeded from entropy before drawing.
        """
        kind = self._ensure_state()
        u, self._state = kind.draw(self._state)
        return u

    def _inspect(self, state: Any) -> tuple[GeneratorKind | None, str | None]:
        if state is None:
            return None, None
        if (
            not isinstance(state, tuple)
            or not state
            or not all(is_integer(v) for v in state)
        ):
            return None, "is not an integer vector, so ignored"
        kind = kind_for_code(int(state[0]))
        if kind is None:
            return None, f"has invalid kind code {state[0]}, so ignored"
        return kind, kind.check_body(state[1:])

    def _ensure_state(self) -> GeneratorKind:
        if self._state is None:
            self._randomize(self._kind)
            return self._kind
        kind, problem = self._inspect(self._state)
        if problem is not None:
            warnings.warn(
                f"Ambient generator state {problem}", InvalidStateWarning, stacklevel=4
            )
            self._randomize(kind or self._kind)
            return self._kind
        assert kind is not None
        fixed = kind.fixup(self._state)
        if fixed is None:
            # Unusable body of a known kind: reseed quietly
            self._randomize(kind)
            return kind
        self._kind = kind
        self._state = fixed
        return kind

    def _randomize(self, kind: GeneratorKind) -> None:
        logger.debug(f"Seeding {kind.name} generator from entropy")
        self._kind = kind
        self._state = kind.seed_state(secrets.randbits(32))


_ambient = AmbientGenerator()


def get_state() -> GeneratorState:
    """Return the ambient generator state (None when unseeded)."""
    return _ambient.get_state()


def set_state(state: Any, kind: str | None = None) -> None:
    """
    Replace the ambient generator state.

    ``set_state(get_state())`` is an exact round trip. With ``state=None``
    the generator is reset to unseeded, switching to *kind* when given.
    """
    _ambient.set_state(state, kind=kind)


def rng_kind(kind: str | None = None) -> str:
    """Return the ambient kind name, switching to *kind* if given."""
    return _ambient.rng_kind(kind)


def set_seed(seed: int, kind: str | None = None) -> None:
    """Deterministically seed the ambient generator."""
    _ambient.set_seed(seed, kind=kind)


def draw() -> float:
    """Draw one uniform from the ambient generator."""
    return _ambient.draw()


@contextmanager
def preserved_state() -> Iterator[GeneratorState]:
    """
    Capture the ambient state and kind; restore both on exit.

    Restoration happens on every exit path, including exceptions.

    Example:
        with preserved_state():
            set_seed(1, kind=LECUYER_CMRG)
            seed = get_state()
        # ambient state and kind are back to what they were
    """
    oseed = get_state()
    okind = rng_kind()
    try:
        yield oseed
    finally:
        set_state(oseed, kind=okind)
