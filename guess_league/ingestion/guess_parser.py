"""
Guess Parser

Parses the free-form guess text pasted in for a round. Each non-blank line is
"<name tokens...> <number>", where the name may contain spaces and the number
may use "," as decimal separator and carry a trailing "%":

    Anna 45
    Max Mustermann 12,5%
    Cara 50.25

Usage:
    from guess_league.ingestion.guess_parser import parse_guesses
    guesses = parse_guesses(text)
"""

from guess_league.config import MAX_INPUT_SIZE
from guess_league.errors import InvalidInput, ParseError
from guess_league.models import Guess
from guess_league.utils import (
    NUMBER_TOKEN_RE,
    normalize_number,
    validate_finite,
    validate_input_size,
)


def parse_guess_line(line: str) -> Guess:
    """
    Parse a single guess line.

    The number is the last token that looks like a number, so names ending in
    digits ("Team 2 17,5") still parse: everything before it is the name.

    Args:
        line: One line of guess text (already known to be non-blank)

    Returns:
        Guess

    Raises:
        ParseError: If the line has no number or no name
    """
    stripped = line.strip()
    tokens = stripped.split()
    if len(tokens) < 2:
        raise ParseError(stripped, 'Invalid format, expected "Name Number"')

    number_index = None
    for i in range(len(tokens) - 1, -1, -1):
        if NUMBER_TOKEN_RE.match(tokens[i]):
            number_index = i
            break

    if number_index is None:
        raise ParseError(stripped, "No valid number found")

    name = " ".join(tokens[:number_index])
    if not name:
        raise ParseError(stripped, "No participant name before the number")

    return Guess(participant_name=name, value=normalize_number(tokens[number_index]))


def parse_guesses(raw_text: str, max_size: int = MAX_INPUT_SIZE) -> list[Guess]:
    """
    Parse pasted guess text into guesses, in input order.

    Blank lines are skipped. Duplicate names are kept as separate guesses.

    Args:
        raw_text: Newline-separated guess lines
        max_size: Maximum accepted text size

    Returns:
        List of Guess (may be empty if the text only has blank lines)

    Raises:
        InvalidInput: If the text exceeds max_size
        ParseError: On the first malformed line
    """
    validate_input_size(raw_text, max_size)

    guesses = []
    for line in raw_text.splitlines():
        if not line.strip():
            continue
        guesses.append(parse_guess_line(line))
    return guesses


def parse_winning_number(raw) -> float:
    """
    Parse the winning number of a round.

    Accepts numbers as well as strings using the guess notation ("12,5%").

    Raises:
        InvalidInput: If the value is missing, non-numeric or not finite
    """
    if raw is None or isinstance(raw, bool):
        raise InvalidInput("Please enter a valid winning number")

    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw).strip()
        if not text:
            raise InvalidInput("Please enter a valid winning number")
        try:
            value = normalize_number(text)
        except ValueError:
            raise InvalidInput(f"Winning number '{text}' is not a number")

    return validate_finite(value, "Winning number")


def participant_template(names) -> str:
    """
    Build guess text pre-filled with participant names, one per line.

    Names are de-duplicated and sorted so the submitter only has to append
    each participant's number.
    """
    return "\n".join(sorted(set(names), key=str.casefold))
