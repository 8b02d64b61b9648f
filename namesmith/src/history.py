"""Persisted history of globally used names.

The in-memory set is the live exclusion set for global-scope requests; the
JSON file is a best-effort mirror of it. Storage failures never escape this
module: reads degrade to an empty history, writes report a failed
StoreOutcome and leave memory untouched.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import PersistenceError

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "used_names.json"
EXPORT_MIME_TYPE = "application/json"


@dataclass
class StoreOutcome:
    """Result of a storage write. Callers log failures and carry on."""
    ok: bool
    error: str | None = None


@dataclass
class ExportPayload:
    """What a file-save collaborator needs to offer the history as a download."""
    filename: str
    content: str
    mime_type: str = EXPORT_MIME_TYPE


class NameHistoryStore:
    """Used-name set backed by a single JSON array file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.names: set[str] = set()

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, name: str) -> bool:
        return name in self.names

    # ── Public API ──────────────────────────────────────────────

    def load(self) -> set[str]:
        """Hydrate the in-memory set from disk. Missing or corrupt data → empty.

        The set is updated in place so exclusion sets holding a reference
        to it see the loaded names.
        """
        try:
            loaded = self._read()
        except PersistenceError as e:
            logger.warning("Ignoring unreadable name history %s: %s", self.path, e)
            loaded = set()

        self.names.clear()
        self.names.update(loaded)
        logger.info("Loaded %d used names from %s", len(self.names), self.path.resolve())
        return self.names

    def save(self, names: set[str] | None = None) -> StoreOutcome:
        """Overwrite the file with a sorted JSON array of names."""
        target = self.names if names is None else names
        try:
            self._write(json.dumps(sorted(target)))
        except PersistenceError as e:
            logger.warning("Failed to persist name history: %s", e)
            return StoreOutcome(ok=False, error=str(e))
        return StoreOutcome(ok=True)

    def clear(self) -> StoreOutcome:
        """Forget every used name, in memory and on disk."""
        self.names.clear()
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to remove name history %s: %s", self.path, e)
            return StoreOutcome(ok=False, error=str(e))
        logger.info("Cleared name history %s", self.path)
        return StoreOutcome(ok=True)

    def export(self) -> ExportPayload:
        """Pretty-printed JSON of the used names, for download."""
        return ExportPayload(
            filename=EXPORT_FILENAME,
            content=json.dumps(sorted(self.names), indent=2),
        )

    # ── Storage boundary ────────────────────────────────────────

    def _read(self) -> set[str]:
        if not self.path.exists():
            return set()
        try:
            data = json.loads(self.path.read_text())
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PersistenceError(str(e)) from e

        if not isinstance(data, list):
            raise PersistenceError(f"expected a JSON array, got {type(data).__name__}")
        return {item for item in data if isinstance(item, str)}

    def _write(self, content: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(content)
        except OSError as e:
            raise PersistenceError(str(e)) from e
