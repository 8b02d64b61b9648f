"""Tests for candidate generation."""

from __future__ import annotations

import pytest

from namesmith.src.errors import InvalidInput
from namesmith.src.generator import (
    DEFAULT_FIXED_WORD,
    MODE_ADJ_FIXED,
    MODE_ADJ_NOUN,
    WordLists,
    generate_one,
    pick,
)


@pytest.fixture
def two_by_two():
    return WordLists(adjectives=("QUICK", "SLOW"), nouns=("FOX", "HEN"))


class TestPick:
    def test_index_is_floor_of_rand_times_length(self, scripted_rng):
        words = ("A", "B", "C", "D")
        assert pick(words, scripted_rng([0.0])) == "A"
        assert pick(words, scripted_rng([0.2499])) == "A"
        assert pick(words, scripted_rng([0.25])) == "B"
        assert pick(words, scripted_rng([0.9999])) == "D"

    def test_consumes_one_value(self, scripted_rng):
        rng = scripted_rng([0.1, 0.9])
        pick(("A", "B"), rng)
        assert rng.calls == 1

    def test_empty_list_raises(self, scripted_rng):
        with pytest.raises(InvalidInput, match="empty"):
            pick((), scripted_rng([0.5]))

    def test_invalid_input_is_value_error(self, scripted_rng):
        with pytest.raises(ValueError):
            pick([], scripted_rng([0.5]))


class TestGenerateOne:
    def test_adj_noun(self, two_by_two, scripted_rng):
        assert generate_one(MODE_ADJ_NOUN, two_by_two, scripted_rng([0.0, 0.99])) == "QUICK HEN"

    def test_adj_noun_draws_adjective_first(self, two_by_two, scripted_rng):
        assert generate_one(MODE_ADJ_NOUN, two_by_two, scripted_rng([0.7, 0.1])) == "SLOW FOX"

    def test_adj_fixed_uses_default_word(self, two_by_two, scripted_rng):
        rng = scripted_rng([0.6])
        assert generate_one(MODE_ADJ_FIXED, two_by_two, rng) == f"SLOW {DEFAULT_FIXED_WORD}"
        assert rng.calls == 1

    def test_adj_fixed_custom_word(self, two_by_two, scripted_rng):
        assert generate_one(MODE_ADJ_FIXED, two_by_two, scripted_rng([0.0]), "MOTH") == "QUICK MOTH"

    def test_adj_fixed_does_not_need_nouns(self, scripted_rng):
        lists = WordLists(adjectives=("QUICK",), nouns=())
        assert generate_one(MODE_ADJ_FIXED, lists, scripted_rng([0.3])) == "QUICK BEE"

    def test_empty_adjectives_raise(self, scripted_rng):
        lists = WordLists(adjectives=(), nouns=("FOX",))
        with pytest.raises(InvalidInput, match="adjective"):
            generate_one(MODE_ADJ_NOUN, lists, scripted_rng([0.3]))

    def test_empty_nouns_raise(self, scripted_rng):
        lists = WordLists(adjectives=("QUICK",), nouns=())
        with pytest.raises(InvalidInput, match="noun"):
            generate_one(MODE_ADJ_NOUN, lists, scripted_rng([0.3]))

    def test_empty_lists_never_return_a_string(self, scripted_rng):
        lists = WordLists(adjectives=(), nouns=())
        for mode in (MODE_ADJ_NOUN, MODE_ADJ_FIXED):
            with pytest.raises(InvalidInput):
                generate_one(mode, lists, scripted_rng([0.3]))

    def test_unknown_mode(self, two_by_two, scripted_rng):
        with pytest.raises(InvalidInput, match="Unknown mode"):
            generate_one("noun-adj", two_by_two, scripted_rng([0.3]))


class TestWordLists:
    def test_from_lists_makes_tuples(self):
        lists = WordLists.from_lists(["QUICK"], ["FOX", "HEN"])
        assert lists.adjectives == ("QUICK",)
        assert lists.nouns == ("FOX", "HEN")

    def test_combinations(self, two_by_two):
        assert two_by_two.combinations == 4

    def test_frozen(self, two_by_two):
        with pytest.raises(AttributeError):
            two_by_two.adjectives = ("OTHER",)
