"""Candidate generation: draw one raw ADJECTIVE + NOUN (or fixed word) name."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .errors import InvalidInput
from .rng import RandomSource

MODE_ADJ_NOUN = "adj-noun"
MODE_ADJ_FIXED = "adj-fixed"
MODES = (MODE_ADJ_NOUN, MODE_ADJ_FIXED)

DEFAULT_FIXED_WORD = "BEE"


@dataclass(frozen=True)
class WordLists:
    """Adjective and noun pools, upper-cased at load time."""
    adjectives: tuple[str, ...]
    nouns: tuple[str, ...]

    @classmethod
    def from_lists(cls, adjectives: Sequence[str], nouns: Sequence[str]) -> WordLists:
        return cls(tuple(adjectives), tuple(nouns))

    @property
    def combinations(self) -> int:
        return len(self.adjectives) * len(self.nouns)


def pick(words: Sequence[str], rng: RandomSource, label: str = "word") -> str:
    """Uniform choice: words[floor(rand * len)]."""
    if not words:
        raise InvalidInput(f"Cannot pick from an empty {label} list")
    return words[math.floor(rng.next() * len(words))]


def generate_one(
    mode: str,
    word_lists: WordLists,
    rng: RandomSource,
    fixed_word: str = DEFAULT_FIXED_WORD,
) -> str:
    """Draw one raw (pre-normalization) name, words joined by a single space."""
    if mode == MODE_ADJ_NOUN:
        adjective = pick(word_lists.adjectives, rng, "adjective")
        second = pick(word_lists.nouns, rng, "noun")
    elif mode == MODE_ADJ_FIXED:
        adjective = pick(word_lists.adjectives, rng, "adjective")
        second = fixed_word
    else:
        raise InvalidInput(f"Unknown mode {mode!r}; expected one of {', '.join(MODES)}")

    return f"{adjective} {second}"
