"""Shared test fixtures for namesmith tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from namesmith.src.generator import WordLists
from namesmith.src.history import NameHistoryStore
from namesmith.src.rng import RandomSource


# ── Config fixtures ─────────────────────────────────────────────


@pytest.fixture
def default_config():
    """Load the real default.yaml config."""
    config_path = Path(__file__).parent.parent / "config" / "default.yaml"
    with open(config_path) as f:
        return yaml.safe_load(f)


@pytest.fixture
def word_files(tmp_path):
    """QUICK/SLOW adjectives and a single FOX noun on disk."""
    words = tmp_path / "words"
    words.mkdir()
    (words / "adjectives.txt").write_text("quick\n\nslow\n")
    (words / "nouns.txt").write_text("fox\n")
    return words


@pytest.fixture
def test_config(default_config, word_files, tmp_path):
    """Default config pointed at the tiny word lists and a temp history file."""
    cfg = default_config.copy()
    cfg["words"] = {
        "adjectives": str(word_files / "adjectives.txt"),
        "nouns": str(word_files / "nouns.txt"),
    }
    cfg["generation"] = {
        **cfg["generation"],
        "count": 2,
        "separator": "-",
        "casing": "lower",
    }
    cfg["history"] = {"path": str(tmp_path / "data" / "used_names.json")}
    return cfg


# ── Word lists ──────────────────────────────────────────────────


@pytest.fixture
def fox_lists():
    """Two adjectives, one noun: exactly two distinct adj-noun names."""
    return WordLists(adjectives=("QUICK", "SLOW"), nouns=("FOX",))


@pytest.fixture
def big_lists():
    """100 x 100 synthetic words, plenty of room for 1000 distinct names."""
    return WordLists(
        adjectives=tuple(f"ADJ{i:03d}" for i in range(100)),
        nouns=tuple(f"NOUN{i:03d}" for i in range(100)),
    )


# ── Random sources ──────────────────────────────────────────────


class ScriptedRandom(RandomSource):
    """Replays a fixed list of values, cycling. Counts calls for assertions."""

    def __init__(self, values: list[float]):
        self.values = list(values)
        self.calls = 0

    def next(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def scripted_rng():
    """Factory: scripted_rng([0.0, 0.5]) → a ScriptedRandom."""
    return ScriptedRandom


# ── History ─────────────────────────────────────────────────────


@pytest.fixture
def history_path(tmp_path):
    return tmp_path / "data" / "used_names.json"


@pytest.fixture
def history_store(history_path):
    return NameHistoryStore(history_path)
