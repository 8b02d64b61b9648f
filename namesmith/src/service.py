"""Request surface: ties word lists, options, exclusion sets and history together."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import InvalidInput
from .history import NameHistoryStore, StoreOutcome
from .normalize import build_blacklist
from .resolver import ExclusionSets, GenerationOptions, GenerationResult, require_text, resolve
from .rng import create_rng
from .wordlists import WordListLoader

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_PATH = Path("data") / "used_names.json"


class NameService:
    """Owns the process-lifetime state of the generator.

    session_used starts empty with the process; the history store is
    hydrated from disk on construction and backs the global scope.
    """

    def __init__(
        self,
        config: dict,
        loader: WordListLoader | None = None,
        history: NameHistoryStore | None = None,
    ):
        self.config = config
        self.defaults = config.get("generation", {})
        self.loader = loader or WordListLoader.from_config(config.get("words"))
        if history is None:
            history_path = config.get("history", {}).get("path", DEFAULT_HISTORY_PATH)
            history = NameHistoryStore(Path(history_path))
        self.history = history
        self.history.load()
        self.session_used: set[str] = set()

    async def generate(self, request: dict) -> GenerationResult:
        """Run one request. LoadError and InvalidInput propagate to the caller."""
        if not isinstance(request, dict):
            raise InvalidInput(f"request must be an object, got {type(request).__name__}")
        word_lists = await self.loader.get()
        options = GenerationOptions.from_request(request, self.defaults)
        blacklist_text = request.get("blacklistText")
        if blacklist_text is not None:
            require_text(blacklist_text, "blacklistText")

        exclusions = ExclusionSets(
            blacklist=build_blacklist(blacklist_text, options.separator, options.casing),
            session_used=self.session_used,
            global_used=self.history.names,
        )
        rng = create_rng(options.seed)

        logger.info(
            "Generating %d names (mode=%s, scope=%s, seeded=%s, blacklist=%d)",
            options.count, options.mode, options.uniqueness_scope,
            options.seed is not None, len(exclusions.blacklist),
        )
        return resolve(options, word_lists, rng, exclusions, persist=self.history.save)

    async def handle_request(self, request: dict) -> dict:
        """Request dict in, {names, fullySatisfied, ...} out."""
        result = await self.generate(request)
        return result.to_dict()

    def clear_history(self) -> StoreOutcome:
        return self.history.clear()

    def reset_session(self) -> None:
        self.session_used.clear()
