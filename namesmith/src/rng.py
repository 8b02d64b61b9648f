"""Seeded random source: reproducible [0, 1) streams from a seed string.

A non-empty seed is hashed with an xmur3-style mixer into a 32-bit state,
which drives a mulberry32 generator. Same seed, same sequence, on every run
and across the browser build. Not cryptographic.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod

MASK32 = 0xFFFFFFFF

# Mixing constants
_HASH_INIT = 1779033703
_HASH_MUL = 3432918353
_FINAL_MUL_1 = 2246822507
_FINAL_MUL_2 = 3266489909
_MULBERRY_INC = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply, unsigned result."""
    return (a * b) & MASK32


def _code_units(text: str) -> list[int]:
    """UTF-16 code units, so astral characters hash like surrogate pairs."""
    raw = text.encode("utf-16-le", "surrogatepass")
    return [raw[i] | (raw[i + 1] << 8) for i in range(0, len(raw), 2)]


def seed_hash(seed: str) -> int:
    """Hash a seed string into a 32-bit unsigned integer.

    Every code unit perturbs the running state (order-dependent), then the
    state goes through multiply/xorshift finalization rounds.
    """
    units = _code_units(seed)
    h = (_HASH_INIT ^ len(units)) & MASK32
    for unit in units:
        h = _imul(h ^ unit, _HASH_MUL)
        h = ((h << 13) | (h >> 19)) & MASK32

    h = _imul(h ^ (h >> 16), _FINAL_MUL_1)
    h = _imul(h ^ (h >> 13), _FINAL_MUL_2)
    h ^= h >> 16
    return h & MASK32


class RandomSource(ABC):
    """A stream of floats in [0, 1)."""

    @abstractmethod
    def next(self) -> float:
        ...


class SystemRandomSource(RandomSource):
    """Unseeded source. No reproducibility guarantee."""

    def __init__(self):
        self._rng = random.Random()

    def next(self) -> float:
        return self._rng.random()


class Mulberry32(RandomSource):
    """Counter-based 32-bit generator."""

    def __init__(self, state: int):
        self.state = state & MASK32

    def next(self) -> float:
        self.state = (self.state + _MULBERRY_INC) & MASK32
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK32
        return ((t ^ (t >> 14)) & MASK32) / 4294967296


def create_rng(seed: str | None = None) -> RandomSource:
    """Return a seeded source for a non-empty seed, else a system source."""
    if seed is None:
        return SystemRandomSource()
    seed = str(seed).strip()
    if not seed:
        return SystemRandomSource()
    return Mulberry32(seed_hash(seed))
