"""
Tests for guess parsing functions and the number pattern.
"""

import pytest

from guess_league.errors import InvalidInput, ParseError
from guess_league.ingestion.guess_parser import (
    parse_guess_line,
    parse_guesses,
    parse_winning_number,
    participant_template,
)
from guess_league.models import Guess
from guess_league.utils import NUMBER_TOKEN_RE, normalize_number


class TestNumberTokenRegex:
    """Tests for NUMBER_TOKEN_RE pattern."""

    def test_matches_integer(self):
        assert NUMBER_TOKEN_RE.match("42")

    def test_matches_comma_decimal(self):
        assert NUMBER_TOKEN_RE.match("12,5")

    def test_matches_dot_decimal_with_percent(self):
        assert NUMBER_TOKEN_RE.match("12.5%")

    def test_no_match_two_separators(self):
        assert NUMBER_TOKEN_RE.match("1.2.3") is None

    def test_no_match_word(self):
        assert NUMBER_TOKEN_RE.match("Anna") is None

    def test_no_match_mixed(self):
        assert NUMBER_TOKEN_RE.match("R2D2") is None


class TestNormalizeNumber:
    """Tests for normalize_number utility."""

    def test_comma_and_percent(self):
        assert normalize_number("12,5%") == 12.5

    def test_plain(self):
        assert normalize_number("7") == 7.0


class TestParseGuessLine:
    """Tests for parse_guess_line function."""

    def test_name_with_spaces_and_locale_number(self):
        assert parse_guess_line("Max Mustermann 12,5%") == Guess("Max Mustermann", 12.5)

    def test_simple(self):
        assert parse_guess_line("Anna 45") == Guess("Anna", 45.0)

    def test_collapses_whitespace_in_name(self):
        assert parse_guess_line("  Anna   Lena \t 3 ") == Guess("Anna Lena", 3.0)

    def test_number_searched_from_the_end(self):
        # The last numeric token is the guess; earlier ones belong to the name
        assert parse_guess_line("Team 2 17,5") == Guess("Team 2", 17.5)

    def test_trailing_text_after_number(self):
        assert parse_guess_line("Anna 45 ok") == Guess("Anna", 45.0)

    def test_single_token_rejected(self):
        with pytest.raises(ParseError) as exc_info:
            parse_guess_line("Anna")
        assert exc_info.value.line == "Anna"

    def test_no_number_rejected(self):
        with pytest.raises(ParseError) as exc_info:
            parse_guess_line("Anna Lena")
        assert "Anna Lena" in str(exc_info.value)

    def test_missing_name_rejected(self):
        with pytest.raises(ParseError):
            parse_guess_line("45 abc")


class TestParseGuesses:
    """Tests for parse_guesses function."""

    def test_parses_multiple_lines_in_order(self):
        text = """Cara 50
Anna 45
Ben 55,0"""
        assert parse_guesses(text) == [
            Guess("Cara", 50.0),
            Guess("Anna", 45.0),
            Guess("Ben", 55.0),
        ]

    def test_skips_blank_lines(self):
        text = "\nAnna 45\n   \n\nBen 55\n"
        assert [g.participant_name for g in parse_guesses(text)] == ["Anna", "Ben"]

    def test_keeps_duplicate_names(self):
        guesses = parse_guesses("Anna 1\nAnna 2")
        assert len(guesses) == 2

    def test_empty_text(self):
        assert parse_guesses("") == []

    def test_reports_offending_line(self):
        with pytest.raises(ParseError) as exc_info:
            parse_guesses("Anna 45\nBen\nCara 50")
        assert exc_info.value.line == "Ben"

    def test_oversize_input_rejected(self):
        with pytest.raises(InvalidInput):
            parse_guesses("Anna 45\n" * 10, max_size=20)


class TestParseWinningNumber:
    """Tests for parse_winning_number function."""

    def test_number(self):
        assert parse_winning_number(50) == 50.0

    def test_locale_string(self):
        assert parse_winning_number(" 12,5% ") == 12.5

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", "nan", float("inf"), True])
    def test_invalid(self, raw):
        with pytest.raises(InvalidInput):
            parse_winning_number(raw)


class TestParticipantTemplate:
    """Tests for participant_template function."""

    def test_sorted_and_unique(self):
        assert participant_template(["ben", "Anna", "ben", "Cara"]) == "Anna\nben\nCara"

    def test_empty(self):
        assert participant_template([]) == ""
