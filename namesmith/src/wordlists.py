"""Word-list loading: one entry per line, loaded once per process."""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path

from .errors import LoadError
from .generator import WordLists

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).parent.parent
DEFAULT_ADJECTIVES = PACKAGE_DIR / "words" / "adjectives.txt"
DEFAULT_NOUNS = PACKAGE_DIR / "words" / "nouns.txt"

_LINE_SPLIT_RE = re.compile(r"\r?\n")


def parse_word_list(text: str) -> tuple[str, ...]:
    """Split text into trimmed, upper-cased entries, skipping blank lines."""
    words = []
    for line in _LINE_SPLIT_RE.split(text):
        line = line.strip()
        if line:
            words.append(line.upper())
    return tuple(words)


def read_word_list(path: Path) -> tuple[str, ...]:
    """Read and parse one word file. Any read failure is a LoadError."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Failed to load {Path(path).name}: {e}") from e
    return parse_word_list(text)


def resolve_path(path: str | Path, base_dir: Path = PACKAGE_DIR) -> Path:
    """Relative config paths are relative to the package directory."""
    path = Path(path)
    return path if path.is_absolute() else base_dir / path


class WordListLoader:
    """Memoized async loader.

    The first get() starts a single load task; callers arriving while it is
    in flight await that same task. A failed load is raised to every waiter
    and forgotten, so a later request starts a fresh attempt.
    """

    def __init__(self, adjectives_path: Path = DEFAULT_ADJECTIVES, nouns_path: Path = DEFAULT_NOUNS):
        self.adjectives_path = Path(adjectives_path)
        self.nouns_path = Path(nouns_path)
        self.load_count = 0
        self._task: asyncio.Task | None = None

    @classmethod
    def from_config(cls, words_config: dict | None) -> WordListLoader:
        words_config = words_config or {}
        return cls(
            resolve_path(words_config.get("adjectives", DEFAULT_ADJECTIVES)),
            resolve_path(words_config.get("nouns", DEFAULT_NOUNS)),
        )

    @property
    def loaded(self) -> bool:
        task = self._task
        return task is not None and task.done() and not task.cancelled() and task.exception() is None

    async def get(self) -> WordLists:
        if self._task is None:
            self._task = asyncio.ensure_future(self._load())
        task = self._task
        try:
            return await asyncio.shield(task)
        except LoadError:
            if self._task is task:
                self._task = None
            raise

    async def _load(self) -> WordLists:
        self.load_count += 1
        adjectives, nouns = await asyncio.gather(
            asyncio.to_thread(read_word_list, self.adjectives_path),
            asyncio.to_thread(read_word_list, self.nouns_path),
        )
        logger.info(
            "Loaded %d adjectives and %d nouns (%s, %s)",
            len(adjectives), len(nouns), self.adjectives_path.name, self.nouns_path.name,
        )
        return WordLists(adjectives=adjectives, nouns=nouns)
