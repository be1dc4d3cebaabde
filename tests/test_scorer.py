"""
Tests for round scoring functions.
"""

import random

import pytest

from guess_league.config import POINTS_SCHEMA
from guess_league.errors import InvalidInput
from guess_league.models import Guess
from guess_league.scoring.scorer import points_for_rank, round_winner, score_round


@pytest.fixture
def many_guesses():
    rng = random.Random(7)
    return [Guess(f"player{i:02d}", rng.randint(0, 100)) for i in range(15)]


class TestPointsForRank:
    """Tests for points_for_rank function."""

    def test_first_place(self):
        assert points_for_rank(1) == 25

    def test_tenth_place(self):
        assert points_for_rank(10) == 1

    def test_beyond_schema(self):
        assert points_for_rank(11) == 0

    def test_schema_non_increasing(self):
        points = [points_for_rank(r) for r in range(1, 15)]
        for i in range(len(points) - 1):
            assert points[i] >= points[i + 1]


class TestScoreRound:
    """Tests for score_round function."""

    def test_example_round(self):
        entries = score_round(50, [Guess("Anna", 45), Guess("Ben", 55), Guess("Cara", 50)])

        assert [e.participant_name for e in entries] == ["Cara", "Anna", "Ben"]
        assert [e.deviation for e in entries] == [0, 5, 5]
        assert [e.rank for e in entries] == [1, 2, 3]
        assert [e.points for e in entries] == [25, 18, 15]

    def test_tie_broken_by_name_not_input_order(self):
        forward = score_round(10, [Guess("Zoe", 12), Guess("Adam", 8)])
        backward = score_round(10, [Guess("Adam", 8), Guess("Zoe", 12)])
        assert forward == backward
        assert forward[0].participant_name == "Adam"

    def test_deviation_is_absolute(self):
        entries = score_round(2.5, [Guess("Anna", 1.25), Guess("Ben", 4)])
        by_name = {e.participant_name: e for e in entries}
        assert by_name["Anna"].deviation == 1.25
        assert by_name["Ben"].deviation == 1.5

    def test_ranks_are_contiguous(self, many_guesses):
        entries = score_round(50, many_guesses)
        assert [e.rank for e in entries] == list(range(1, len(many_guesses) + 1))

    def test_strictly_ordered_by_deviation_then_name(self, many_guesses):
        entries = score_round(50, many_guesses)
        keys = [(e.deviation, e.participant_name) for e in entries]
        assert keys == sorted(keys)
        assert len(set(keys)) == len(keys)

    def test_ranks_beyond_schema_score_zero(self, many_guesses):
        entries = score_round(50, many_guesses)
        assert all(e.points == 0 for e in entries if e.rank > len(POINTS_SCHEMA))
        assert sum(e.points for e in entries) == sum(POINTS_SCHEMA)

    def test_deviation_non_negative(self, many_guesses):
        entries = score_round(50, many_guesses)
        for e in entries:
            assert e.deviation >= 0
            assert e.deviation == abs(e.value - 50)

    def test_duplicate_names_scored_independently(self):
        entries = score_round(10, [Guess("Anna", 10), Guess("Anna", 20)])
        assert [(e.rank, e.points) for e in entries] == [(1, 25), (2, 18)]

    def test_accepts_plain_tuples(self):
        entries = score_round(10, [("Anna", 9)])
        assert entries[0].participant_name == "Anna"

    def test_empty_rejected(self):
        with pytest.raises(InvalidInput):
            score_round(50, [])

    def test_non_finite_winning_number_rejected(self):
        with pytest.raises(InvalidInput):
            score_round(float("nan"), [Guess("Anna", 1)])

    @pytest.mark.parametrize("winning_number", [None, "abc", "12,5"])
    def test_non_numeric_winning_number_rejected(self, winning_number):
        with pytest.raises(InvalidInput):
            score_round(winning_number, [Guess("Anna", 1)])

    def test_non_numeric_guess_rejected(self):
        with pytest.raises(InvalidInput):
            score_round(10, [Guess("Anna", "lots")])


class TestRoundWinner:
    """Tests for round_winner function."""

    def test_returns_rank_one(self):
        entries = score_round(50, [Guess("Anna", 45), Guess("Cara", 50)])
        assert round_winner(entries).participant_name == "Cara"

    def test_empty_round(self):
        assert round_winner([]) is None
