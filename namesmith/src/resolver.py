"""Uniqueness resolution: draw candidates until the requested count is met.

Each request gets an attempt budget of count * ATTEMPT_MULTIPLIER draws.
Running out of budget is not an error: the result simply comes back short,
with fully_satisfied False.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Callable

from .errors import InvalidInput
from .generator import DEFAULT_FIXED_WORD, MODE_ADJ_NOUN, MODES, WordLists, generate_one
from .history import StoreOutcome
from .normalize import CASINGS, normalize_name
from .rng import RandomSource

logger = logging.getLogger(__name__)

MIN_COUNT = 1
MAX_COUNT = 1000
ATTEMPT_MULTIPLIER = 20

SCOPE_NONE = "none"
SCOPE_SESSION = "session"
SCOPE_GLOBAL = "global"
SCOPES = (SCOPE_NONE, SCOPE_SESSION, SCOPE_GLOBAL)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def parse_count(value) -> int:
    """Coerce user input to a count in [MIN_COUNT, MAX_COUNT].

    Strings are read up to the first non-digit ("12 names" → 12). Missing,
    empty or non-numeric input means 1.
    """
    if isinstance(value, bool):
        count = MIN_COUNT
    elif isinstance(value, int):
        count = value
    elif isinstance(value, float):
        count = int(value) if math.isfinite(value) else MIN_COUNT
    elif isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        count = int(match.group(1)) if match else MIN_COUNT
    else:
        count = MIN_COUNT
    return max(MIN_COUNT, min(MAX_COUNT, count))


def require_text(value, field_name: str) -> str:
    """Reject non-string request fields instead of stringifying them."""
    if not isinstance(value, str):
        raise InvalidInput(f"{field_name} must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class GenerationOptions:
    """Validated options for one generation request."""
    count: int = 1
    separator: str = " "
    casing: str = "none"
    mode: str = MODE_ADJ_NOUN
    uniqueness_scope: str = SCOPE_NONE
    seed: str | None = None
    fixed_word: str = DEFAULT_FIXED_WORD

    def __post_init__(self):
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise InvalidInput(f"count must be an integer, got {self.count!r}")
        if not MIN_COUNT <= self.count <= MAX_COUNT:
            raise InvalidInput(f"count must be in [{MIN_COUNT}, {MAX_COUNT}], got {self.count}")
        if not isinstance(self.separator, str):
            raise InvalidInput(f"separator must be a string, got {self.separator!r}")
        if self.casing not in CASINGS:
            raise InvalidInput(f"Unknown casing {self.casing!r}; expected one of {', '.join(CASINGS)}")
        if self.mode not in MODES:
            raise InvalidInput(f"Unknown mode {self.mode!r}; expected one of {', '.join(MODES)}")
        if self.uniqueness_scope not in SCOPES:
            raise InvalidInput(
                f"Unknown uniqueness scope {self.uniqueness_scope!r}; "
                f"expected one of {', '.join(SCOPES)}"
            )

    @classmethod
    def from_request(cls, request: dict, defaults: dict | None = None) -> GenerationOptions:
        """Build options from the camelCase request surface.

        Keys missing from the request fall back to `defaults` (the config's
        snake_case `generation` section), then to the dataclass defaults.
        """
        defaults = defaults or {}

        def _get(key: str, default_key: str, fallback):
            value = request.get(key)
            if value is None:
                value = defaults.get(default_key, fallback)
            return value

        seed = _get("seed", "seed", None)
        # YAML configs may carry a numeric seed
        if isinstance(seed, (int, float)) and not isinstance(seed, bool):
            seed = str(seed)
        elif seed is not None:
            seed = require_text(seed, "seed")
        casing = _get("casing", "casing", "none")
        return cls(
            count=parse_count(_get("count", "count", MIN_COUNT)),
            separator=require_text(_get("separator", "separator", " "), "separator"),
            casing=casing or "none",
            mode=_get("mode", "mode", MODE_ADJ_NOUN),
            uniqueness_scope=_get("uniquenessScope", "uniqueness_scope", SCOPE_NONE),
            seed=(seed.strip() or None) if seed is not None else None,
            fixed_word=require_text(_get("fixedWord", "fixed_word", DEFAULT_FIXED_WORD), "fixedWord"),
        )

    @property
    def max_attempts(self) -> int:
        return self.count * ATTEMPT_MULTIPLIER


@dataclass
class ExclusionSets:
    """Names a request must not emit.

    blacklist is built fresh per request; session_used lives as long as the
    process; global_used is the history store's in-memory set.
    """
    blacklist: frozenset[str] = frozenset()
    session_used: set[str] = field(default_factory=set)
    global_used: set[str] = field(default_factory=set)


@dataclass
class GenerationResult:
    """Names in emission order, plus how the request fared against its budget."""
    names: list[str]
    requested: int
    attempts: int = 0

    @property
    def generated(self) -> int:
        return len(self.names)

    @property
    def fully_satisfied(self) -> bool:
        return self.generated >= self.requested

    @property
    def shortfall_message(self) -> str | None:
        if self.fully_satisfied:
            return None
        return (
            f"Only generated {self.generated}/{self.requested} before exhausting "
            f"unique combos or hitting blacklist."
        )

    def to_dict(self) -> dict:
        return {
            "names": list(self.names),
            "fullySatisfied": self.fully_satisfied,
            "requested": self.requested,
            "generated": self.generated,
        }


def resolve(
    options: GenerationOptions,
    word_lists: WordLists,
    rng: RandomSource,
    exclusions: ExclusionSets,
    persist: Callable[[set[str]], StoreOutcome] | None = None,
) -> GenerationResult:
    """Generate up to options.count distinct names.

    A candidate is rejected if it repeats a name already in this result, is
    blacklisted, or is in the used-name set selected by the uniqueness scope.
    Accepted names are recorded in that set; for global scope, `persist` is
    called after every addition and a failed outcome does not stop the request.
    """
    scope = options.uniqueness_scope
    session_used = exclusions.session_used if scope == SCOPE_SESSION else None
    global_used = exclusions.global_used if scope == SCOPE_GLOBAL else None

    names: list[str] = []
    emitted: set[str] = set()
    attempts = 0
    max_attempts = options.max_attempts

    while len(names) < options.count and attempts < max_attempts:
        attempts += 1
        raw = generate_one(options.mode, word_lists, rng, options.fixed_word)
        name = normalize_name(raw, options.separator, options.casing)

        if name in emitted or name in exclusions.blacklist:
            continue
        if session_used is not None and name in session_used:
            continue
        if global_used is not None and name in global_used:
            continue

        names.append(name)
        emitted.add(name)
        if session_used is not None:
            session_used.add(name)
        if global_used is not None:
            global_used.add(name)
            if persist is not None:
                # The store logs its own write failures; the name stays in memory.
                persist(global_used)

    result = GenerationResult(names=names, requested=options.count, attempts=attempts)
    if not result.fully_satisfied:
        logger.warning(
            "Generated %d/%d names after %d attempts (scope=%s)",
            result.generated, result.requested, attempts, scope,
        )
    return result
